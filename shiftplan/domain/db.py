"""Database engine/session helpers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from shiftplan.config import DEFAULT_DB_URL

from .models import Base


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False):
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


class DatabaseManager:
    """Owns one engine and hands out sessions bound to it."""

    def __init__(self, db_url: str = DEFAULT_DB_URL, echo: bool = False):
        """
        Initialize database manager.

        Args:
            db_url: SQLAlchemy database URL (default: sqlite:///shiftplan.db)
            echo: Log emitted SQL
        """
        self.db_url = db_url
        self.engine = create_db_engine(db_url, echo=echo)
        self.SessionLocal = sessionmaker(bind=self.engine)

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all tables (use with caution!)."""
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that is rolled back on error and always closed."""
        session = self.get_session()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def init_database(db_url: str = DEFAULT_DB_URL) -> DatabaseManager:
    """Create all tables for ``db_url`` and return its manager."""
    manager = DatabaseManager(db_url)
    manager.create_tables()
    print(f"[INFO] Database initialized: {db_url}")
    return manager


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """Get a new database session."""
    return DatabaseManager(db_url).get_session()


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop all tables and recreate (WARNING: deletes all data!)."""
    manager = DatabaseManager(db_url)
    manager.drop_tables()
    manager.create_tables()
    print(f"[WARN] Database reset: {db_url}")
