"""Base importer functionality.

Provides the line-splitting and merge loop shared by the student and item
importers. Input is plain comma-delimited text: the first line is a header
and is always discarded, and quotes are not parsed.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..store.entity_store import EntityStore
from ..store.results import Failure, OperationResult

logger = logging.getLogger(__name__)

DELIMITER = ","


@dataclass
class ImportResult:
    """Result of an import operation."""

    success: bool
    source_file: Optional[Path] = None
    source_type: Optional[str] = None
    total_records: int = 0
    imported: int = 0
    duplicates: int = 0
    malformed: int = 0
    error_messages: list[str] = field(default_factory=list)
    imported_keys: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        """Rows that were read but not added."""
        return self.duplicates + self.malformed

    @property
    def summary(self) -> str:
        """Get summary string."""
        return (
            f"Imported: {self.imported}, "
            f"Duplicates: {self.duplicates}, "
            f"Malformed: {self.malformed}"
        )


def split_rows(text: str) -> list[str]:
    """Get the data lines of an import text.

    Drops the header line, trims every line and skips blank ones.
    """
    lines = text.split("\n")[1:]
    return [line.strip() for line in lines if line.strip()]


class BaseImporter(ABC):
    """Base class for delimited-text importers."""

    source_name: str = "unknown"
    min_columns: int = 1

    def __init__(self, store: EntityStore):
        """Initialize importer.

        Args:
            store: Store the records are merged into
        """
        self.store = store

    @abstractmethod
    def parse_columns(self, columns: list[str]) -> Any:
        """Build a candidate record from a row with enough columns."""
        pass

    @abstractmethod
    def key_of(self, record: Any) -> str:
        """Get the unique key of a candidate record."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if the store already holds a record with this key."""
        pass

    @abstractmethod
    def add(self, record: Any) -> OperationResult:
        """Add a candidate record to the store."""
        pass

    def parse_text(self, text: str) -> tuple[list[Any], int]:
        """Parse import text into candidate records.

        Args:
            text: Raw delimited text, header first

        Returns:
            Tuple of (records, number of rows with too few columns)
        """
        records = []
        malformed = 0

        for row in split_rows(text):
            columns = row.split(DELIMITER)
            if len(columns) < self.min_columns:
                malformed += 1
                logger.debug("Skipping short %s row: %r", self.source_name, row)
                continue
            records.append(self.parse_columns(columns))

        return records, malformed

    def import_text(self, text: str) -> ImportResult:
        """Merge records from import text into the store.

        Records whose key is already present, including keys added earlier
        in the same text, are skipped.

        Args:
            text: Raw delimited text, header first

        Returns:
            ImportResult with counts
        """
        result = ImportResult(success=True, source_type=self.source_name)

        records, result.malformed = self.parse_text(text)
        result.total_records = len(records) + result.malformed

        for record in records:
            outcome = self.add(record)
            if outcome.success:
                result.imported += 1
                result.imported_keys.append(self.key_of(record))
            elif outcome.failure == Failure.DUPLICATE_KEY:
                result.duplicates += 1
            else:
                result.error_messages.append(outcome.message or "Unknown error")

        logger.info("Imported %ss: %s", self.source_name, result.summary)
        return result

    def _read_file(self, file_path: Path) -> tuple[str, Optional[str]]:
        """Read an import file, returning its text or an error message."""
        try:
            return file_path.read_text(encoding="utf-8-sig"), None
        except (OSError, UnicodeDecodeError) as e:
            return "", f"Failed to read file: {e}"

    def import_file(self, file_path: Path) -> ImportResult:
        """Merge records from a text file into the store.

        Args:
            file_path: Path to import file

        Returns:
            ImportResult with counts, or success=False if unreadable
        """
        text, error = self._read_file(file_path)
        if error:
            return ImportResult(
                success=False,
                source_file=file_path,
                source_type=self.source_name,
                error_messages=[error],
            )

        result = self.import_text(text)
        result.source_file = file_path
        return result

    def preview(self, text: str) -> dict:
        """Preview what an import would do without changing the store.

        Args:
            text: Raw delimited text, header first

        Returns:
            Dictionary with preview information
        """
        records, malformed = self.parse_text(text)

        seen: set[str] = set()
        new_count = 0
        existing_count = 0
        for record in records:
            key = self.key_of(record)
            if key in seen or self.exists(key):
                existing_count += 1
            else:
                new_count += 1
                seen.add(key)

        return {
            "total_records": len(records) + malformed,
            "new_records": new_count,
            "duplicates": existing_count,
            "malformed": malformed,
            "source_type": self.source_name,
        }

    def preview_file(self, file_path: Path) -> dict:
        """Preview an import file without changing the store.

        Returns:
            Preview dictionary, with an ``error`` entry if the file is unreadable
        """
        text, error = self._read_file(file_path)
        if error:
            return {"error": error, "source_type": self.source_name}
        return self.preview(text)
