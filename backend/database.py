# backend/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings


def _normalize_url(url: str) -> str:
    # SQLAlchemy requires the postgresql:// scheme
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs):
    """Build an engine; SQLite connections get foreign key enforcement."""
    url = _normalize_url(url)
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, **kwargs)


SQLALCHEMY_DATABASE_URL = _normalize_url(settings.DATABASE_URL)

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    register_models()
    Base.metadata.create_all(bind=bind or engine)


def register_models():
    # Every model must be on Base.metadata before create_all or autogenerate
    import models.unit  # noqa: F401
    import models.category  # noqa: F401
    import models.product  # noqa: F401
    import models.recipe  # noqa: F401
    import models.movement  # noqa: F401
    import models.store  # noqa: F401
    import models.catalog  # noqa: F401
    import models.log  # noqa: F401
