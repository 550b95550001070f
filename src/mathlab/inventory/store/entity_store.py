"""In-memory entity store for students and items.

The store is the single source of truth. Both collections are kept newest
first, with a dict index per collection for exact-key lookups.
"""

import logging
from typing import Callable, Iterable, Optional

from .relationships import RelationshipManager
from .results import Failure, OperationResult
from .schemas import Item, ItemCreate, Student, StudentCreate, now_ms

logger = logging.getLogger(__name__)


class EntityStore:
    """Owns the student and item collections and their uniqueness rules."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """Initialize an empty store.

        Args:
            clock: Returns the timestamp stamped on new records
                   (epoch milliseconds by default)
        """
        self._clock = clock or now_ms
        self._students: list[Student] = []
        self._items: list[Item] = []
        self._students_by_net_id: dict[str, Student] = {}
        self._items_by_number: dict[str, Item] = {}
        self.relationships = RelationshipManager(self)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @property
    def students(self) -> list[Student]:
        """All students, newest first."""
        return list(self._students)

    @property
    def items(self) -> list[Item]:
        """All items, newest first."""
        return list(self._items)

    @property
    def student_count(self) -> int:
        return len(self._students)

    @property
    def item_count(self) -> int:
        return len(self._items)

    # -------------------------------------------------------------------------
    # Students
    # -------------------------------------------------------------------------

    def add_student(self, candidate: StudentCreate) -> OperationResult:
        """Add a student at the front of the roster.

        Args:
            candidate: Student data

        Returns:
            Result holding the stored Student, or a DUPLICATE_KEY failure
        """
        if candidate.net_id in self._students_by_net_id:
            return OperationResult.fail(
                Failure.DUPLICATE_KEY,
                f"A student with NetID '{candidate.net_id}' already exists",
            )

        student = Student(
            name=candidate.name,
            net_id=candidate.net_id,
            phone=candidate.phone,
            timestamp=self._clock(),
        )
        self._students.insert(0, student)
        self._students_by_net_id[student.net_id] = student
        logger.debug("Added student %s", student.net_id)
        return OperationResult.ok(student)

    def find_student(self, net_id: str) -> Optional[Student]:
        """Get a student by NetID (exact match)."""
        return self._students_by_net_id.get(net_id)

    def remove_student(self, net_id: str) -> OperationResult:
        """Delete a student, returning every item they hold first.

        Args:
            net_id: NetID of the student

        Returns:
            Result holding the removed Student, or a NOT_FOUND failure
        """
        student = self._students_by_net_id.get(net_id)
        if student is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No student with NetID '{net_id}'"
            )

        released = self.relationships.on_delete_student(net_id)
        self._students = [s for s in self._students if s is not student]
        del self._students_by_net_id[net_id]

        logger.debug("Removed student %s (%d item(s) returned)", net_id, len(released))
        return OperationResult.ok(
            student,
            message=f"Returned {len(released)} item(s) held by {student.name}",
        )

    def list_students(self, filter_text: str = "") -> list[Student]:
        """List students matching a filter, newest first.

        Args:
            filter_text: Case-insensitive substring of name, NetID or phone

        Returns:
            Matching students
        """
        if not filter_text:
            return self.students
        return [s for s in self._students if s.matches(filter_text)]

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def add_item(self, candidate: ItemCreate) -> OperationResult:
        """Add an item at the front of the catalog.

        A preset ``checked_out_to`` is stored as given.

        Args:
            candidate: Item data

        Returns:
            Result holding the stored Item, or a DUPLICATE_KEY failure
        """
        if candidate.number in self._items_by_number:
            return OperationResult.fail(
                Failure.DUPLICATE_KEY,
                f"Item number '{candidate.number}' already exists",
            )

        item = Item(
            name=candidate.name,
            number=candidate.number,
            checked_out_to=candidate.checked_out_to,
            timestamp=self._clock(),
        )
        self._items.insert(0, item)
        self._items_by_number[item.number] = item
        logger.debug("Added item %s", item.number)
        return OperationResult.ok(item)

    def find_item(self, number: str) -> Optional[Item]:
        """Get an item by number (exact match)."""
        return self._items_by_number.get(number)

    def remove_item(self, number: str) -> OperationResult:
        """Delete an item.

        Args:
            number: Item number

        Returns:
            Result holding the removed Item, or a NOT_FOUND failure
        """
        item = self._items_by_number.get(number)
        if item is None:
            return OperationResult.fail(Failure.NOT_FOUND, f"No item numbered '{number}'")

        self.relationships.on_delete_item(number)
        self._items = [i for i in self._items if i is not item]
        del self._items_by_number[number]

        logger.debug("Removed item %s", number)
        return OperationResult.ok(item)

    def list_items(self, filter_text: str = "") -> list[Item]:
        """List items matching a filter, newest first.

        Args:
            filter_text: Case-insensitive substring of name or number

        Returns:
            Matching items
        """
        if not filter_text:
            return self.items
        return [i for i in self._items if i.matches(filter_text)]

    # -------------------------------------------------------------------------
    # Bulk
    # -------------------------------------------------------------------------

    def replace_all(self, students: Iterable[Student], items: Iterable[Item]) -> None:
        """Replace both collections, keeping the given order.

        Records whose key already appeared earlier in the input are dropped.
        Timestamps are kept as given.
        """
        self._students = []
        self._students_by_net_id = {}
        for student in students:
            if student.net_id in self._students_by_net_id:
                logger.warning("Dropping duplicate student %s", student.net_id)
                continue
            self._students.append(student)
            self._students_by_net_id[student.net_id] = student

        self._items = []
        self._items_by_number = {}
        for item in items:
            if item.number in self._items_by_number:
                logger.warning("Dropping duplicate item %s", item.number)
                continue
            self._items.append(item)
            self._items_by_number[item.number] = item

    def clear(self) -> None:
        """Remove every student and item."""
        self.replace_all([], [])
