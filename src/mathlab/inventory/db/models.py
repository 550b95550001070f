"""SQLAlchemy ORM models for local SQLite storage.

Tables:
- blobs: Named JSON payloads, one per persisted collection
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Blob(Base):
    """A named serialized collection (full replace on every save)."""

    __tablename__ = "blobs"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[str] = mapped_column(
        String(32),
        default=lambda: datetime.now(timezone.utc).isoformat(),
        onupdate=lambda: datetime.now(timezone.utc).isoformat(),
    )

    def __repr__(self) -> str:
        return f"<Blob(name='{self.name}', size={len(self.payload or '')})>"
