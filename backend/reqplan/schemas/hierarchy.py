"""Hierarchy request/response schemas."""
from decimal import Decimal

from pydantic import BaseModel

from reqplan.models.estimate import Estimate
from reqplan.models.requirement import Requirement


class ParentChangeRequest(BaseModel):
    requirements: list[Requirement]
    node_id: str
    proposed_parent_id: str | None = None


class ParentChangeResult(BaseModel):
    allowed: bool
    message: str | None = None


class HierarchyRequest(BaseModel):
    requirements: list[Requirement]
    estimates: dict[str, Estimate] = {}


class CriticalPathResult(BaseModel):
    critical_path_days: Decimal
    roots: int
    requirements: int
