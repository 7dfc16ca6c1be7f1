"""Operation Result — the tagged success/failure value every mutation returns."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, model_validator


class FailureKind(str, Enum):
    """The closed set of reasons a registry operation can be rejected."""
    UNAUTHORIZED = "ERR_UNAUTHORIZED"                 # Caller fails an ownership/authority check
    ALREADY_EXISTS = "ERR_ALREADY_EXISTS"             # Key collision on creation
    NOT_FOUND = "ERR_NOT_FOUND"                       # Key absent where a record is required
    SESSION_ALREADY_COMPLETED = "ERR_SESSION_COMPLETED"  # Terminal-state re-entry


class OperationResult(BaseModel):
    """
    Exactly one of ``value`` or ``error`` is meaningful.

    A failed result guarantees the store it came from is unchanged.
    """

    value: Any = None
    error: Optional[FailureKind] = None

    @model_validator(mode="after")
    def _value_or_error(self) -> "OperationResult":
        if self.error is not None and self.value is not None:
            raise ValueError("a failed result cannot carry a value")
        return self

    @classmethod
    def success(cls, value: Any) -> "OperationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: FailureKind) -> "OperationResult":
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None
