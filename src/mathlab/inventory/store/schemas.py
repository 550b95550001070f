"""Pydantic schemas for students and items.

Stored entities keep the JSON keys of the persisted blobs (``netId``,
``checkedOutTo``) as aliases, so ``model_dump(by_alias=True)`` produces the
stored format and both spellings are accepted on input.
"""

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class Student(BaseModel):
    """A person who can borrow items."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    net_id: str = Field(..., alias="netId", frozen=True)
    phone: str = ""
    timestamp: int = 0

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, net id and phone."""
        query = query.lower()
        return (
            query in self.name.lower()
            or query in self.net_id.lower()
            or query in self.phone.lower()
        )


class Item(BaseModel):
    """A lendable asset."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    number: str = Field(..., frozen=True)
    checked_out_to: Optional[str] = Field(None, alias="checkedOutTo")
    timestamp: int = 0

    @property
    def is_available(self) -> bool:
        """Check if nobody holds the item."""
        return self.checked_out_to is None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name and number."""
        query = query.lower()
        return query in self.name.lower() or query in self.number.lower()


class StudentCreate(BaseModel):
    """Schema for adding a student."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    net_id: str = Field(..., alias="netId")
    phone: str = ""


class StudentUpdate(BaseModel):
    """Schema for editing a student. Identity is not editable."""

    name: Optional[str] = None
    phone: Optional[str] = None


class ItemCreate(BaseModel):
    """Schema for adding an item.

    ``checked_out_to`` may be preset when an item is added straight onto a
    student's checkout list.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    number: str
    checked_out_to: Optional[str] = Field(None, alias="checkedOutTo")


class ItemUpdate(BaseModel):
    """Schema for editing an item. Number and holder are not editable."""

    name: Optional[str] = None
