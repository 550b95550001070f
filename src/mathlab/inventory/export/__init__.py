"""Export functionality for inventory data."""

from .archive import ArchiveContents, ArchiveExporter, ExportResult, read_archive
from .csv_export import (
    ITEM_COLUMNS,
    STUDENT_COLUMNS,
    items_to_csv,
    quote_name,
    students_to_csv,
)

__all__ = [
    "ArchiveContents",
    "ArchiveExporter",
    "ExportResult",
    "ITEM_COLUMNS",
    "STUDENT_COLUMNS",
    "items_to_csv",
    "quote_name",
    "read_archive",
    "students_to_csv",
]
