"""Training scenario definition."""

from pydantic import BaseModel, Field

from medsim_registry.models.common import Identity, Instant, LabelSet


class ScenarioRecord(BaseModel):
    """
    A reusable practice scenario.

    ``created_by`` and ``created_at`` never change after creation. ``active``
    is always true today; no operation retires a scenario yet.
    """

    name: str
    description: str
    difficulty: int
    specialties: LabelSet = Field(default_factory=list)
    created_by: Identity
    created_at: Instant
    updated_at: Instant
    active: bool = True
