"""Pydantic schemas."""
from reqplan.schemas.dashboard import (
    AlertType,
    ConfidenceBreakdown,
    ConfidenceLevel,
    ConfidenceScore,
    DashboardKPI,
    DashboardRequest,
    DashboardResponse,
    DeviationAlert,
    DifficultyMix,
    Milestones,
    PriorityBreakdown,
    PriorityCounts,
    ScheduleConfig,
    ScheduleProjection,
    SchedulingPolicy,
    TagEffort,
)
from reqplan.schemas.estimate import EstimateRequest
from reqplan.schemas.hierarchy import (
    CriticalPathResult,
    HierarchyRequest,
    ParentChangeRequest,
    ParentChangeResult,
)
from reqplan.schemas.requirement import (
    AnnotatedRequirement,
    EstimateFilter,
    RequirementFilters,
    RequirementListRequest,
)

__all__ = [
    "AlertType",
    "ConfidenceBreakdown",
    "ConfidenceLevel",
    "ConfidenceScore",
    "DashboardKPI",
    "DashboardRequest",
    "DashboardResponse",
    "DeviationAlert",
    "DifficultyMix",
    "Milestones",
    "PriorityBreakdown",
    "PriorityCounts",
    "ScheduleConfig",
    "ScheduleProjection",
    "SchedulingPolicy",
    "TagEffort",
    "EstimateRequest",
    "CriticalPathResult",
    "HierarchyRequest",
    "ParentChangeRequest",
    "ParentChangeResult",
    "AnnotatedRequirement",
    "EstimateFilter",
    "RequirementFilters",
    "RequirementListRequest",
]
