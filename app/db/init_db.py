"""
Create all tables directly from the ORM metadata.

Used for local SQLite development; deployed databases are migrated with Alembic.
"""
import logging

from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    init_db()
