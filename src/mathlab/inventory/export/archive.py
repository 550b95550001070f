"""ZIP archive export bundling the student and item files."""

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_EXPORT_NAME
from ..errors import ArchiveError
from ..store.entity_store import EntityStore
from .csv_export import items_to_csv, students_to_csv

logger = logging.getLogger(__name__)

STUDENTS_FILE = "students.csv"
ITEMS_FILE = "items.csv"


@dataclass
class ExportResult:
    """Result of an export operation."""

    success: bool
    file_path: Optional[Path] = None
    students_exported: int = 0
    items_exported: int = 0
    size_bytes: int = 0
    error: Optional[str] = None


@dataclass
class ArchiveContents:
    """The two files read back from an export archive."""

    students_csv: str
    items_csv: str


class ArchiveExporter:
    """Exports the store as a single compressed archive."""

    def __init__(self, store: EntityStore, archive_name: str = DEFAULT_EXPORT_NAME):
        """Initialize exporter.

        Args:
            store: Store to export
            archive_name: File name used when no explicit path is given
        """
        self.store = store
        self.archive_name = archive_name

    def to_bytes(self) -> bytes:
        """Build the archive in memory."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(STUDENTS_FILE, students_to_csv(self.store))
            zf.writestr(ITEMS_FILE, items_to_csv(self.store))
        return buffer.getvalue()

    def export(self, output_path: Optional[Path] = None) -> ExportResult:
        """Write the archive to disk.

        Args:
            output_path: Archive path, or a directory to place the default
                         archive name in (current directory if omitted)

        Returns:
            ExportResult with success status and details
        """
        if output_path is None:
            output_path = Path(self.archive_name)
        elif output_path.is_dir():
            output_path = output_path / self.archive_name

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            data = self.to_bytes()
            output_path.write_bytes(data)
        except OSError as e:
            logger.error("Export to %s failed: %s", output_path, e)
            return ExportResult(success=False, file_path=output_path, error=str(e))

        logger.info(
            "Exported %d students and %d items to %s",
            self.store.student_count,
            self.store.item_count,
            output_path,
        )
        return ExportResult(
            success=True,
            file_path=output_path,
            students_exported=self.store.student_count,
            items_exported=self.store.item_count,
            size_bytes=len(data),
        )


def read_archive(archive_path: Path) -> ArchiveContents:
    """Read the student and item files back from an export archive.

    Raises:
        ArchiveError: If the archive is missing, corrupt or incomplete
    """
    try:
        with zipfile.ZipFile(archive_path) as zf:
            names = set(zf.namelist())
            missing = {STUDENTS_FILE, ITEMS_FILE} - names
            if missing:
                raise ArchiveError(
                    f"Archive is missing: {', '.join(sorted(missing))}"
                )
            return ArchiveContents(
                students_csv=zf.read(STUDENTS_FILE).decode("utf-8"),
                items_csv=zf.read(ITEMS_FILE).decode("utf-8"),
            )
    except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as e:
        raise ArchiveError(f"Cannot read archive {archive_path}: {e}") from e
