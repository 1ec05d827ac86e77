from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from library_api.core.config import DATABASE_URL
from library_api.core.logging import get_logger

logger = get_logger("database")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create tables that do not exist yet."""
    # models register themselves on Base.metadata when imported
    from library_api.models import models  # noqa: F401

    logger.info("Creating database tables (if not present)...")
    Base.metadata.create_all(bind=bind or engine)
