# backend/utils/errors.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A persistence failure, reported to the client as a generic 500."""

    def __init__(self, message: str, error: Exception):
        super().__init__(message)
        self.message = message
        self.error = error


@contextmanager
def storage_errors(db: Session, message: str):
    # Roll back and wrap any database error raised inside the block
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s: %s", message, e)
        raise StorageError(message, e) from e
