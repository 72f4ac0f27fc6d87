"""
Shared fixtures for the API tests.

Every test case gets its own in-memory SQLite database (foreign keys on) and a
temporary upload directory, so tests never touch the real database or images.
"""
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.append(str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import create_db_engine, get_db, init_db
from main import app


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        """Set up an isolated database, upload directory and client."""
        self.engine = create_db_engine("sqlite://", poolclass=StaticPool)
        init_db(bind=self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db

        self.upload_dir = Path(tempfile.mkdtemp())
        self.upload_patcher = patch("utils.images.UPLOAD_DIR", self.upload_dir)
        self.upload_patcher.start()

        self.client = TestClient(app)

    def tearDown(self):
        """Tear down test fixtures."""
        self.upload_patcher.stop()
        app.dependency_overrides.clear()
        self.engine.dispose()
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    # ---- data builders ----

    def create_unit(self, name="Kilogram", abbreviation="kg"):
        res = self.client.post("/units", json={"name": name, "abbreviation": abbreviation})
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def create_category(self, name="Breads", is_public=True):
        res = self.client.post("/categories", json={"name": name, "isPublic": is_public})
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def create_product(self, name="Baguette", **fields):
        if "unitId" not in fields:
            fields["unitId"] = self.create_unit(name=f"Unit for {name}", abbreviation="un")["id"]
        body = {"name": name, "type": "final", "price": 2.5}
        body.update(fields)
        res = self.client.post("/products", json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def create_store(self, name="Downtown", **fields):
        body = {"name": name, "address": "Main St 1"}
        body.update(fields)
        res = self.client.post("/stores", json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def uploaded_files(self):
        return sorted(p.name for p in self.upload_dir.iterdir())


# PNG signature followed by filler; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
