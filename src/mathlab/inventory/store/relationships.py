"""Checkout link management between items and students.

An item points at its holder by NetID. The inverse view (items held by a
student) is derived on every query and never stored.
"""

import logging
from typing import TYPE_CHECKING, Optional

from .results import Failure, OperationResult
from .schemas import Item, ItemUpdate, Student, StudentUpdate

if TYPE_CHECKING:
    from .entity_store import EntityStore

logger = logging.getLogger(__name__)


def _filled_fields(data: StudentUpdate | ItemUpdate) -> dict:
    """Fields set on an update, leaving out blank strings."""
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    return {field: value for field, value in update_data.items() if value.strip()}


class RelationshipManager:
    """Keeps the item -> student checkout link consistent."""

    def __init__(self, store: "EntityStore"):
        """Initialize relationship manager.

        Args:
            store: Store whose items and students are linked
        """
        self.store = store

    # -------------------------------------------------------------------------
    # Checkout / Return
    # -------------------------------------------------------------------------

    def checkout(
        self,
        item_number: str,
        net_id: str,
        strict: bool = False,
    ) -> OperationResult:
        """Check an item out to a student.

        Checking out an item that is already held replaces the holder; the
        result records the previous holder and carries a warning. With
        ``strict`` the call is rejected instead.

        Args:
            item_number: Number of the item
            net_id: NetID of the borrowing student
            strict: Reject items that are already checked out

        Returns:
            Result holding the updated Item
        """
        item = self.store.find_item(item_number)
        if item is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No item numbered '{item_number}'"
            )
        if self.store.find_student(net_id) is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No student with NetID '{net_id}'"
            )

        previous = item.checked_out_to
        if previous is not None and strict:
            return OperationResult.fail(
                Failure.ALREADY_CHECKED_OUT,
                f"Item '{item_number}' is already checked out to '{previous}'",
            )

        item.checked_out_to = net_id
        result = OperationResult.ok(item, previous_holder=previous)

        if previous is not None and previous != net_id:
            message = f"Item '{item_number}' was checked out to '{previous}'; now '{net_id}'"
            logger.warning(message)
            result.warnings.append(message)
        else:
            logger.debug("Checked out %s to %s", item_number, net_id)

        return result

    def return_item(self, item_number: str) -> OperationResult:
        """Mark an item as available.

        Args:
            item_number: Number of the item

        Returns:
            Result holding the updated Item, or a NOT_FOUND failure
        """
        item = self.store.find_item(item_number)
        if item is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No item numbered '{item_number}'"
            )

        previous = item.checked_out_to
        item.checked_out_to = None
        logger.debug("Returned %s", item_number)
        return OperationResult.ok(item, previous_holder=previous)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def items_held_by(self, net_id: str) -> list[Item]:
        """Get all items checked out to a NetID."""
        return [i for i in self.store.items if i.checked_out_to == net_id]

    def holder_of(self, item_number: str) -> Optional[Student]:
        """Get the student holding an item.

        Returns:
            The holder, or None if the item is absent, available, or points
            at a NetID that is not in the store
        """
        item = self.store.find_item(item_number)
        if item is None or item.checked_out_to is None:
            return None
        return self.store.find_student(item.checked_out_to)

    def available_items(self, filter_text: str = "") -> list[Item]:
        """List items nobody holds, optionally filtered by name or number."""
        return [i for i in self.store.list_items(filter_text) if i.is_available]

    def orphaned_items(self) -> list[Item]:
        """List items checked out to a NetID with no student record."""
        orphans = [
            i
            for i in self.store.items
            if i.checked_out_to is not None
            and self.store.find_student(i.checked_out_to) is None
        ]
        if orphans:
            logger.warning("%d item(s) reference missing students", len(orphans))
        return orphans

    # -------------------------------------------------------------------------
    # Cascades
    # -------------------------------------------------------------------------

    def on_delete_student(self, net_id: str) -> list[Item]:
        """Return every item held by a student about to be deleted.

        Returns:
            The items that were released
        """
        released = self.items_held_by(net_id)
        for item in released:
            item.checked_out_to = None
        return released

    def on_delete_item(self, number: str) -> None:
        """Nothing references items, so deletion needs no cascade."""
        return None

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def edit_student(self, net_id: str, data: StudentUpdate) -> OperationResult:
        """Change a student's name and/or phone.

        Blank values leave the existing field unchanged.

        Args:
            net_id: NetID of the student
            data: Fields to change

        Returns:
            Result holding the updated Student, or a NOT_FOUND failure
        """
        student = self.store.find_student(net_id)
        if student is None:
            return OperationResult.fail(
                Failure.NOT_FOUND, f"No student with NetID '{net_id}'"
            )

        for field, value in _filled_fields(data).items():
            setattr(student, field, value)

        return OperationResult.ok(student)

    def edit_item(self, number: str, data: ItemUpdate) -> OperationResult:
        """Change an item's display name. A blank name is ignored.

        Args:
            number: Item number
            data: Fields to change

        Returns:
            Result holding the updated Item, or a NOT_FOUND failure
        """
        item = self.store.find_item(number)
        if item is None:
            return OperationResult.fail(Failure.NOT_FOUND, f"No item numbered '{number}'")

        for field, value in _filled_fields(data).items():
            setattr(item, field, value)

        return OperationResult.ok(item)
