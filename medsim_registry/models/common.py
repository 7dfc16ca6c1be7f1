"""Shared field types for registry records."""

from typing import Annotated, Any, List, TypeVar

from pydantic import AfterValidator, BaseModel, Field

MS_PER_DAY = 86_400_000

RecordT = TypeVar("RecordT", bound=BaseModel)


def _collapse_duplicates(values: List[str]) -> List[str]:
    """Keep first occurrence of each value, preserving order."""
    return list(dict.fromkeys(values))


# Milliseconds since the epoch.
Instant = Annotated[int, Field(ge=0)]

# Opaque, pre-authenticated caller identity.
Identity = Annotated[str, Field(min_length=1)]

# A set of labels, stored as an ordered list so records serialize deterministically.
LabelSet = Annotated[List[str], AfterValidator(_collapse_duplicates)]


def revise(record: RecordT, **changes: Any) -> RecordT:
    """Return a validated copy of ``record`` with ``changes`` applied."""
    return type(record).model_validate({**record.model_dump(), **changes})
