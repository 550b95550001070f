"""Exceptions raised by the inventory.

Expected conditions (duplicate keys, missing records, malformed import rows)
are reported through result objects; these exceptions cover programming
errors and unreadable input.
"""


class InventoryError(Exception):
    """Base class for inventory errors."""

    pass


class NoCurrentStudentError(InventoryError):
    """A desk operation needed a current student but none is open."""

    pass


class ArchiveError(InventoryError):
    """An export archive could not be read."""

    pass
