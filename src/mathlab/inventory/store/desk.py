"""Lending desk: operations on the currently open student.

Mirrors the student page workflow, where a student is opened and items are
then checked out to, quick-added for, or returned from that student.
"""

import logging
from typing import Optional

from ..errors import NoCurrentStudentError
from .entity_store import EntityStore
from .results import Failure, OperationResult
from .schemas import Item, ItemCreate, Student

logger = logging.getLogger(__name__)


class LendingDesk:
    """Tracks the current student and acts on their behalf."""

    def __init__(self, store: EntityStore, strict_checkout: bool = False):
        """Initialize lending desk.

        Args:
            store: Entity store to operate on
            strict_checkout: Reject checkouts of items that are already held
        """
        self.store = store
        self.strict_checkout = strict_checkout
        self._current_net_id: Optional[str] = None

    @property
    def current_student(self) -> Optional[Student]:
        """The open student, or None if none is open or it was deleted."""
        if self._current_net_id is None:
            return None
        return self.store.find_student(self._current_net_id)

    def _require_student(self) -> Student:
        student = self.current_student
        if student is None:
            raise NoCurrentStudentError("No student is open at the desk")
        return student

    def open_student(self, net_id: str) -> OperationResult:
        """Make a student the current one."""
        student = self.store.find_student(net_id)
        if student is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No student with NetID '{net_id}'"
            )
        self._current_net_id = net_id
        return OperationResult.ok(student)

    def close(self) -> None:
        """Clear the current student."""
        self._current_net_id = None

    def held_items(self) -> list[Item]:
        """Items checked out to the current student."""
        student = self._require_student()
        return self.store.relationships.items_held_by(student.net_id)

    def checkout(self, item_number: str) -> OperationResult:
        """Check an item out to the current student."""
        student = self._require_student()
        return self.store.relationships.checkout(
            item_number, student.net_id, strict=self.strict_checkout
        )

    def return_item(self, item_number: str) -> OperationResult:
        """Return an item (it need not be held by the current student)."""
        return self.store.relationships.return_item(item_number)

    def quick_add_item(self, candidate: ItemCreate) -> OperationResult:
        """Add a new item already checked out to the current student."""
        student = self._require_student()
        data = candidate.model_copy(update={"checked_out_to": student.net_id})
        result = self.store.add_item(data)
        if result.success:
            logger.debug("Quick-added %s for %s", data.number, student.net_id)
        return result

    def delete_student(self, net_id: str) -> OperationResult:
        """Delete a student, closing the desk if it was the current one."""
        result = self.store.remove_student(net_id)
        if result.success and net_id == self._current_net_id:
            self.close()
        return result
