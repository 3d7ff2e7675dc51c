"""
PostgreSQL access - engine, sessions and a raw SQL helper.

All reads in this service are plain SQL through SQLAlchemy text();
the repository turns rows into schema objects.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from internmatch.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# pool_size=5 ready connections, up to 10 more under load
engine = create_engine(
    settings.postgres_url,
    pool_size=5,
    max_overflow=10,
    pool_pre_ping=True,
    echo=settings.debug  # Log SQL queries in debug mode
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Commits on success, rolls back and re-raises on error.

    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """Return True if PostgreSQL answers a trivial query."""
    try:
        with get_db_session() as db:
            row = db.execute(text("SELECT 1 AS test")).fetchone()
            return row[0] == 1
    except SQLAlchemyError as e:
        logger.warning("PostgreSQL connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        columns = list(result.keys())
        return [dict(zip(columns, row)) for row in result.fetchall()]
