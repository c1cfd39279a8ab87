"""Requirement models."""
from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, Field

from reqplan.models.estimate import Estimate


class Priority(str, PyEnum):
    HIGH = "High"
    MED = "Med"
    LOW = "Low"


class RequirementState(str, PyEnum):
    PROPOSED = "Proposed"
    SELECTED = "Selected"
    SCHEDULED = "Scheduled"
    DONE = "Done"


# Complexity option -> 1..5 difficulty scale used by the dashboard
COMPLEXITY_TO_DIFFICULTY: dict[str, int] = {
    "Low": 2,
    "Medium": 3,
    "High": 5,
}
DEFAULT_DIFFICULTY = 3


def parse_labels(raw: str | None) -> list[str]:
    """Comma-separated labels, trimmed, empties dropped."""
    if not raw:
        return []
    return [label.strip() for label in raw.split(",") if label.strip()]


class Requirement(BaseModel):
    req_id: str = Field(..., min_length=1)
    parent_req_id: str | None = None
    title: str = ""
    description: str = ""
    priority: Priority = Priority.MED
    state: RequirementState = RequirementState.PROPOSED
    business_owner: str = ""
    labels: str | None = None
    created_on: datetime | None = None

    class Config:
        frozen = True


class RequirementWithEstimate(BaseModel):
    """A requirement paired with its latest estimate (if any)."""

    requirement: Requirement
    estimate: Estimate | None = None
    estimation_days: Decimal = Decimal(0)
    difficulty: int = Field(DEFAULT_DIFFICULTY, ge=1, le=5)
    tags: list[str] = []

    class Config:
        frozen = True
