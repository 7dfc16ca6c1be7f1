"""Instructor certification record."""

from pydantic import BaseModel, Field, model_validator

from medsim_registry.models.common import Instant, LabelSet


class InstructorRecord(BaseModel):
    """One certified instructor, keyed by the instructor's identity."""

    name: str
    specialization: str                     # e.g., "Cardiology"
    certification_date: Instant             # Set once at registration
    expiration_date: Instant                # Recomputed on every renewal
    certification_level: int
    active: bool = True
    certifications: LabelSet = Field(default_factory=list)  # e.g., ["ACLS", "BLS"]

    @model_validator(mode="after")
    def _expires_after_certification(self) -> "InstructorRecord":
        if self.expiration_date < self.certification_date:
            raise ValueError("expiration_date must not precede certification_date")
        return self
