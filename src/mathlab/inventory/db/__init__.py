"""Database module for local SQLite storage."""

from .models import Base, Blob
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "Blob",
    "Database",
    "get_db",
    "reset_db",
]
