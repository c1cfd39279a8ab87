"""Dashboard schemas: KPIs, schedule projection, confidence and alerts."""
from datetime import date
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, Field

from reqplan.models.estimate import Estimate
from reqplan.models.requirement import Priority, Requirement


class PriorityBreakdown(BaseModel):
    High: Decimal = Decimal(0)
    Med: Decimal = Decimal(0)
    Low: Decimal = Decimal(0)


class PriorityCounts(BaseModel):
    High: int = 0
    Med: int = 0
    Low: int = 0


class DifficultyMix(BaseModel):
    low: int = 0  # difficulty 1-2
    medium: int = 0  # difficulty 3
    high: int = 0  # difficulty 4-5


class TagEffort(BaseModel):
    tag: str
    effort: Decimal


class DashboardKPI(BaseModel):
    total_days: Decimal = Decimal(0)
    avg_days: Decimal = Decimal(0)
    median_days: Decimal = Decimal(0)
    p80_days: Decimal = Decimal(0)
    critical_path_days: Decimal = Decimal(0)
    effort_by_priority: PriorityBreakdown = PriorityBreakdown()
    effort_by_priority_pct: PriorityBreakdown = PriorityBreakdown()
    priority_mix: PriorityCounts = PriorityCounts()
    priority_mix_pct: PriorityBreakdown = PriorityBreakdown()
    difficulty_mix: DifficultyMix = DifficultyMix()
    top_tag_by_effort: TagEffort | None = None


class SchedulingPolicy(str, PyEnum):
    NEUTRAL = "Neutral"
    PRIORITY_FIRST = "PriorityFirst"


class ScheduleConfig(BaseModel):
    priorities: set[Priority] = {Priority.HIGH, Priority.MED, Priority.LOW}
    tags: set[str] = set()
    start_date: date
    n_developers: int = Field(3, ge=1)
    exclude_weekends: bool = True
    holidays: set[date] = set()
    target_date: date | None = None
    policy: SchedulingPolicy = SchedulingPolicy.NEUTRAL


class Milestones(BaseModel):
    """Finish date of each priority bucket under PriorityFirst."""

    High: date | None = None
    Med: date | None = None
    Low: date | None = None


class ScheduleProjection(BaseModel):
    finish_date: date
    total_workdays: int
    effective_effort_days: Decimal = Decimal(0)
    milestones: Milestones | None = None


class ConfidenceLevel(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConfidenceBreakdown(BaseModel):
    completeness: Decimal = Field(Decimal(0), ge=0, le=40)
    consistency: Decimal = Field(Decimal(0), ge=0, le=30)
    volume: Decimal = Field(Decimal(0), ge=0, le=20)
    categorization: Decimal = Field(Decimal(0), ge=0, le=10)


class ConfidenceScore(BaseModel):
    score: int = Field(..., ge=0, le=100)
    level: ConfidenceLevel
    breakdown: ConfidenceBreakdown


class AlertType(str, PyEnum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class DeviationAlert(BaseModel):
    type: AlertType
    icon: str
    message: str
    tooltip: str


class DashboardRequest(BaseModel):
    requirements: list[Requirement]
    estimates: dict[str, Estimate] = {}
    config: ScheduleConfig


class DashboardResponse(BaseModel):
    kpis: DashboardKPI
    projection: ScheduleProjection
    confidence: ConfidenceScore
    alerts: list[DeviationAlert]
    requirement_count: int
