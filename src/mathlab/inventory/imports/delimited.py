"""Student and item importers for the comma-delimited exchange format.

Formats (header line ignored):
- students: ``Name,NetID,Phone``
- items: ``ItemName,ItemNumber,CheckedOutTo`` (holder optional)

Values are split on every comma. A name that itself contains a comma, such
as one written by the exporter as ``"Doe, John"``, is split into two columns
and imports incorrectly; quotes are only stripped from the name column.
"""

from ..store.results import OperationResult
from ..store.schemas import ItemCreate, StudentCreate
from .base import BaseImporter


def _clean_name(value: str) -> str:
    return value.strip().replace('"', "")


class StudentImporter(BaseImporter):
    """Imports students keyed by NetID."""

    source_name = "student"
    min_columns = 3

    def parse_columns(self, columns: list[str]) -> StudentCreate:
        return StudentCreate(
            name=_clean_name(columns[0]),
            net_id=columns[1].strip(),
            phone=columns[2].strip(),
        )

    def key_of(self, record: StudentCreate) -> str:
        return record.net_id

    def exists(self, key: str) -> bool:
        return self.store.find_student(key) is not None

    def add(self, record: StudentCreate) -> OperationResult:
        return self.store.add_student(record)


class ItemImporter(BaseImporter):
    """Imports items keyed by item number.

    The optional third column becomes ``checked_out_to``; an empty value
    means available. Holders are not checked against the roster, so an
    import can introduce orphaned references.
    """

    source_name = "item"
    min_columns = 2

    def parse_columns(self, columns: list[str]) -> ItemCreate:
        holder = columns[2].strip() if len(columns) > 2 else ""
        return ItemCreate(
            name=_clean_name(columns[0]),
            number=columns[1].strip(),
            checked_out_to=holder or None,
        )

    def key_of(self, record: ItemCreate) -> str:
        return record.number

    def exists(self, key: str) -> bool:
        return self.store.find_item(key) is not None

    def add(self, record: ItemCreate) -> OperationResult:
        return self.store.add_item(record)
