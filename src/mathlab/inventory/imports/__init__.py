"""Bulk import of students and items from delimited text."""

from .base import BaseImporter, ImportResult, split_rows
from .delimited import ItemImporter, StudentImporter

__all__ = [
    "BaseImporter",
    "ImportResult",
    "ItemImporter",
    "StudentImporter",
    "split_rows",
]
