"""Estimate models."""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from reqplan.models.defaults import FieldDefault


class ActivityOverride(BaseModel):
    """Per-estimate change of an activity's name, group or base days."""

    activity_code: str = Field(..., min_length=1)
    override_name: str | None = None
    override_days: Decimal | None = Field(None, ge=0)
    override_group: str | None = None


class Estimate(BaseModel):
    """
    Immutable estimate for one requirement scenario.

    Pins the catalog versions active at creation time; a new scenario is a new
    Estimate, never a mutation of this one.
    """

    req_id: str | None = None
    scenario: str = "A"
    complexity: str
    environments: str
    reuse: str
    stakeholders: str
    included_activities: tuple[str, ...] = ()
    selected_risks: tuple[str, ...] = ()

    activities_base_days: Decimal
    driver_multiplier: Decimal
    subtotal_days: Decimal
    risk_score: Decimal
    contingency_pct: Decimal
    contingency_days: Decimal
    total_days: Decimal

    catalog_version: str
    drivers_version: str
    riskmap_version: str
    created_on: datetime | None = None

    default_sources: tuple[FieldDefault, ...] = ()

    class Config:
        frozen = True
