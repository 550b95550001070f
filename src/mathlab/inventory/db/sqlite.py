"""SQLite database operations.

Handles database connection, session management, and the named-blob
key-value operations the inventory persists through.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from .models import Base, Blob

logger = logging.getLogger(__name__)


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     MATHLAB_DB_PATH env var or default location.
        """
        if db_path is None:
            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Blob Operations
    # ========================================================================

    def load_blob(self, name: str) -> Optional[str]:
        """Get the payload stored under a name, or None if absent."""
        with self.get_session() as s:
            blob = s.get(Blob, name)
            return blob.payload if blob else None

    def save_blobs(self, blobs: Mapping[str, str]) -> None:
        """Write several blobs in one transaction.

        Either every blob is replaced or none is.

        Args:
            blobs: Mapping of blob name to payload
        """
        now = datetime.now(timezone.utc).isoformat()
        with self.get_session() as s:
            for name, payload in blobs.items():
                blob = s.get(Blob, name)
                if blob is None:
                    s.add(Blob(name=name, payload=payload, updated_at=now))
                else:
                    blob.payload = payload
                    blob.updated_at = now
            logger.debug("Saved blobs: %s", ", ".join(blobs))


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
