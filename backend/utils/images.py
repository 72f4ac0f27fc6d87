# backend/utils/images.py
import logging
import shutil
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from models.product import Product

logger = logging.getLogger(__name__)

# Directory holding uploaded product images, served under /uploads
UPLOAD_DIR = Path(settings.UPLOAD_DIR)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def _is_local_filename(filename: Optional[str]) -> bool:
    # Only bare filenames live in UPLOAD_DIR; URLs and paths are left alone
    return bool(filename) and Path(filename).name == filename


def image_path(filename: str) -> Path:
    return UPLOAD_DIR / Path(filename).name


def save_upload(file) -> str:
    """Write an uploaded image to UPLOAD_DIR and return its new filename."""
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type")

    suffix = Path(file.filename or "").suffix.lstrip(".").lower()
    ext = suffix or ALLOWED_CONTENT_TYPES[file.content_type]
    unique_filename = f"{uuid.uuid4()}.{ext}"

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    try:
        with open(image_path(unique_filename), "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"File save error: {e}")
    finally:
        file.file.close()

    return unique_filename


def safe_unlink(filename: Optional[str]) -> bool:
    """Best-effort removal of an image file; failures are logged, never raised."""
    if not _is_local_filename(filename):
        return False
    path = image_path(filename)
    try:
        if path.exists():
            path.unlink()
            return True
    except OSError as e:
        logger.warning("Could not delete image file %s: %s", path, e)
    return False


def is_image_in_use_elsewhere(db: Session, filename: Optional[str], current_product_id: Optional[int] = None) -> bool:
    if not filename:
        return False

    query = db.query(Product).filter(Product.primary_image_url == filename)
    if current_product_id is not None:
        query = query.filter(Product.id != current_product_id)
    return query.count() > 0


class ImageCleanup:
    """
    Compensating file deletions for a product mutation.

    Filenames released by an update or delete are scheduled while the request
    runs and removed by ``run()`` once the database change has committed, so a
    failed mutation never loses a file that is still referenced. A scheduled
    file is only deleted when no remaining product references it.
    """

    def __init__(self, db: Session, product_id: Optional[int] = None):
        self.db = db
        self.product_id = product_id
        self._pending: List[str] = []

    def schedule(self, filename: Optional[str]) -> None:
        if _is_local_filename(filename) and filename not in self._pending:
            self._pending.append(filename)

    def run(self) -> List[str]:
        deleted = []
        for filename in self._pending:
            try:
                if is_image_in_use_elsewhere(self.db, filename, self.product_id):
                    logger.info("Image %s still referenced, keeping file", filename)
                    continue
            except SQLAlchemyError as e:
                logger.warning("Could not check references of image %s: %s", filename, e)
                continue
            if safe_unlink(filename):
                deleted.append(filename)
        self._pending.clear()
        return deleted
