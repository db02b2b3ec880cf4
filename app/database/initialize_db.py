import logging

from app.models import document  # noqa: F401  registers the documents table
from app.database.db_setup import Base, engine

logger = logging.getLogger(__name__)


def init_db():
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.exception(f"[-] Failed to create database tables: {e}")
        raise
