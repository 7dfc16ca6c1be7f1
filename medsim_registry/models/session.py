"""Practice session record and its lifecycle states."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from medsim_registry.models.common import Identity, Instant


class SessionState(str, Enum):
    OPEN = "open"
    COMPLETED = "completed"     # Terminal


class SessionRecord(BaseModel):
    """One practice run against a scenario, owned by the instructor who started it."""

    scenario_id: str                        # Non-owning reference into the scenario registry
    instructor: Identity
    start_time: Instant
    end_time: Instant = 0                   # 0 until completed
    participants: List[str] = Field(default_factory=list)  # Ordered, duplicates kept
    completed: bool = False

    @property
    def state(self) -> SessionState:
        return SessionState.COMPLETED if self.completed else SessionState.OPEN
