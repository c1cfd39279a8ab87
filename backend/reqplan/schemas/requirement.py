"""Requirement listing schemas."""
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, Field

from reqplan.models.estimate import Estimate
from reqplan.models.requirement import Priority, Requirement, RequirementState


class EstimateFilter(str, PyEnum):
    ALL = "all"
    ESTIMATED = "estimated"
    MISSING = "missing"


class RequirementFilters(BaseModel):
    search: str = ""
    priorities: list[Priority] = []
    states: list[RequirementState] = []
    owners: list[str] = []
    labels: list[str] = []
    estimate: EstimateFilter = EstimateFilter.ALL


class AnnotatedRequirement(BaseModel):
    """One row of the hierarchical requirement list."""

    requirement: Requirement
    estimation_days: Decimal
    has_estimate: bool
    tags: list[str] = []
    depth: int = Field(..., ge=0)
    parent_id: str | None
    path: list[str]
    # Kept only because a descendant matched the filters
    is_context: bool = False


class RequirementListRequest(BaseModel):
    requirements: list[Requirement]
    estimates: dict[str, Estimate] = {}
    filters: RequirementFilters = RequirementFilters()
    sort: str = "created-desc"
