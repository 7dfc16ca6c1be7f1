"""Simulator equipment record and its ownership entry."""

from pydantic import BaseModel, ConfigDict, Field

from medsim_registry.models.common import Identity, Instant, LabelSet

# Well-known statuses. Any non-empty string is accepted by set_status.
STATUS_ACTIVE = "active"
STATUS_MAINTENANCE = "maintenance"
STATUS_RETIRED = "retired"


class SimulatorRecord(BaseModel):
    """A piece of simulation equipment in the inventory."""

    name: str
    model: str                              # e.g., "CardioSim 3000"
    manufacturer: str
    purchase_date: Instant
    last_maintenance: Instant
    status: str = Field(default=STATUS_ACTIVE, min_length=1)
    features: LabelSet = Field(default_factory=list)


class OwnerRecord(BaseModel):
    """Who may mutate a simulator. Fixed at registration."""

    model_config = ConfigDict(frozen=True)

    owner: Identity
