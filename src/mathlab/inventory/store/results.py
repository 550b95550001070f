"""Result types for store operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Failure(str, Enum):
    """Named failure conditions returned to the caller."""

    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    ALREADY_CHECKED_OUT = "already_checked_out"


@dataclass
class OperationResult:
    """Result of a store or relationship operation."""

    success: bool
    value: Any = None
    failure: Optional[Failure] = None
    message: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    # Set by checkout when it replaced an existing holder
    previous_holder: Optional[str] = None

    @classmethod
    def ok(cls, value: Any = None, **kwargs) -> "OperationResult":
        """Build a success result."""
        return cls(success=True, value=value, **kwargs)

    @classmethod
    def fail(cls, failure: Failure, message: str) -> "OperationResult":
        """Build a failure result."""
        return cls(success=False, failure=failure, message=message)
