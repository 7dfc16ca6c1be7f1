"""Medical-simulation registry data models."""

from medsim_registry.models.common import MS_PER_DAY, Identity, Instant, LabelSet
from medsim_registry.models.instructor import InstructorRecord
from medsim_registry.models.result import FailureKind, OperationResult
from medsim_registry.models.scenario import ScenarioRecord
from medsim_registry.models.session import SessionRecord, SessionState
from medsim_registry.models.simulator import (
    STATUS_ACTIVE,
    STATUS_MAINTENANCE,
    STATUS_RETIRED,
    OwnerRecord,
    SimulatorRecord,
)

__all__ = [
    "MS_PER_DAY",
    "STATUS_ACTIVE",
    "STATUS_MAINTENANCE",
    "STATUS_RETIRED",
    "FailureKind",
    "Identity",
    "Instant",
    "InstructorRecord",
    "LabelSet",
    "OperationResult",
    "OwnerRecord",
    "ScenarioRecord",
    "SessionRecord",
    "SessionState",
    "SimulatorRecord",
]
