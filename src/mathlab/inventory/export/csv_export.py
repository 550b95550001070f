"""Delimited-text export of students and items.

Rows are written by hand rather than with ``csv.writer``: the exchange
format only wraps names containing a comma in double quotes and escapes
nothing else, which ``csv`` cannot reproduce. Such names do not survive a
round trip through the importers, which never parse quotes.
"""

from ..store.entity_store import EntityStore
from ..store.schemas import Item, Student

STUDENT_COLUMNS = ["Name", "NetID", "Phone"]
ITEM_COLUMNS = ["ItemName", "ItemNumber", "CheckedOutTo"]


def quote_name(name: str) -> str:
    """Wrap a name in double quotes if it contains a comma."""
    return f'"{name}"' if "," in name else name


def student_row(student: Student) -> str:
    return f"{quote_name(student.name)},{student.net_id},{student.phone}"


def item_row(item: Item) -> str:
    holder = item.checked_out_to or ""
    return f"{quote_name(item.name)},{item.number},{holder}"


def students_to_csv(store: EntityStore) -> str:
    """Export the roster, newest first, header included."""
    lines = [",".join(STUDENT_COLUMNS)]
    lines.extend(student_row(s) for s in store.students)
    return "\n".join(lines) + "\n"


def items_to_csv(store: EntityStore) -> str:
    """Export the catalog, newest first, header included."""
    lines = [",".join(ITEM_COLUMNS)]
    lines.extend(item_row(i) for i in store.items)
    return "\n".join(lines) + "\n"
