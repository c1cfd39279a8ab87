"""Estimate request schemas."""
from pydantic import BaseModel, Field

from reqplan.models.defaults import FieldDefault
from reqplan.models.estimate import ActivityOverride


class EstimateRequest(BaseModel):
    req_id: str | None = None
    scenario: str | None = None
    complexity: str = ""
    environments: str = ""
    reuse: str = ""
    stakeholders: str = ""
    activity_codes: list[str] = Field(default_factory=list)
    activity_overrides: list[ActivityOverride] = Field(default_factory=list)
    selected_risks: list[str] = Field(default_factory=list)
    default_sources: list[FieldDefault] = Field(default_factory=list)
