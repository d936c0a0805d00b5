"""
Alembic migration runner, invoked at startup when RUN_MIGRATIONS=1.
"""
import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, text

logger = logging.getLogger(__name__)

# Arbitrary key shared by all replicas so only one migrates at a time
ADVISORY_LOCK_ID = 715204913

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def run_migrations(database_url: Optional[str] = None) -> None:
    """
    Upgrade the database to the head revision.

    On PostgreSQL an advisory lock serializes concurrent runs.
    """
    from app.core import config as app_config

    url = database_url or app_config.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL is not set")

    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", url)

    use_lock = url.startswith("postgresql")
    engine = create_engine(url, pool_pre_ping=True)
    lock_conn = engine.connect() if use_lock else None

    try:
        if lock_conn is not None:
            lock_conn.execute(text(f"SELECT pg_advisory_lock({ADVISORY_LOCK_ID})"))
            lock_conn.commit()
            logger.info("Migration lock acquired")

        logger.info("Running alembic upgrade head")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")
    except Exception:
        logger.exception("Migration failed")
        raise
    finally:
        if lock_conn is not None:
            lock_conn.execute(text(f"SELECT pg_advisory_unlock({ADVISORY_LOCK_ID})"))
            lock_conn.commit()
            lock_conn.close()
        engine.dispose()
