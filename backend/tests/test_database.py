"""
Tests for schema registration shared by init_db and the migration environment.
"""
import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from database import Base, create_db_engine, init_db, register_models


class TestSchemaRegistration(unittest.TestCase):
    TABLES = {
        "inventory_units", "inventory_categories", "inventory_products",
        "inventory_recipes", "inventory_movements", "stores", "store_products",
        "catalog_entries", "home_products", "logs",
    }

    def test_register_models_fills_metadata(self):
        register_models()
        self.assertTrue(self.TABLES.issubset(Base.metadata.tables.keys()))

    def test_init_db_creates_every_table(self):
        engine = create_db_engine("sqlite://", poolclass=StaticPool)
        try:
            init_db(bind=engine)
            self.assertTrue(self.TABLES.issubset(set(inspect(engine).get_table_names())))
        finally:
            engine.dispose()


if __name__ == "__main__":
    unittest.main()
