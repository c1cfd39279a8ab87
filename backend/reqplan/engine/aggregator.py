"""Portfolio aggregation: per-requirement estimates rolled into dashboard KPIs."""
import logging
from decimal import ROUND_UP, Decimal

from reqplan.engine.calculator import DAYS_DECIMALS, round_half_up
from reqplan.engine.hierarchy import build_requirement_tree
from reqplan.models.estimate import Estimate
from reqplan.models.requirement import (
    COMPLEXITY_TO_DIFFICULTY,
    DEFAULT_DIFFICULTY,
    Priority,
    Requirement,
    RequirementWithEstimate,
    parse_labels,
)
from reqplan.schemas.dashboard import (
    DashboardKPI,
    DifficultyMix,
    PriorityBreakdown,
    PriorityCounts,
    TagEffort,
)

logger = logging.getLogger(__name__)

PERCENT_DECIMALS = 1
P80_RANK = Decimal("0.8")


def difficulty_from_complexity(complexity: str | None) -> int:
    return COMPLEXITY_TO_DIFFICULTY.get(complexity or "", DEFAULT_DIFFICULTY)


def prepare_requirements_with_estimates(
    requirements: list[Requirement],
    estimates_by_id: dict[str, Estimate],
) -> list[RequirementWithEstimate]:
    """Pair each requirement with its latest estimate (absent -> 0 days)."""
    prepared = []
    for req in requirements:
        estimate = estimates_by_id.get(req.req_id)
        prepared.append(RequirementWithEstimate(
            requirement=req,
            estimate=estimate,
            estimation_days=estimate.total_days if estimate else Decimal(0),
            difficulty=difficulty_from_complexity(estimate.complexity if estimate else None),
            tags=parse_labels(req.labels),
        ))
    return prepared


def median(values: list[Decimal]) -> Decimal:
    """Middle value; average of the two middle values for even counts."""
    if not values:
        return Decimal(0)
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def percentile_nearest_rank(values: list[Decimal], fraction: Decimal) -> Decimal:
    """Nearest-rank percentile: the value at rank ceil(fraction × n)."""
    if not values:
        return Decimal(0)
    ordered = sorted(values)
    rank = int((fraction * len(ordered)).to_integral_value(rounding=ROUND_UP))
    rank = min(max(rank, 1), len(ordered))
    return ordered[rank - 1]


def _pct(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= 0:
        return Decimal(0)
    return round_half_up(part / whole * 100, PERCENT_DECIMALS)


def top_tag_by_effort(items: list[RequirementWithEstimate]) -> TagEffort | None:
    """Tag carrying the most estimated days; ties go to the first tag seen."""
    efforts: dict[str, Decimal] = {}
    for item in items:
        if item.estimation_days <= 0:
            continue
        for tag in item.tags:
            efforts[tag] = efforts.get(tag, Decimal(0)) + item.estimation_days
    best: TagEffort | None = None
    for tag, effort in efforts.items():
        if best is None or effort > best.effort:
            best = TagEffort(tag=tag, effort=round_half_up(effort, DAYS_DECIMALS))
    return best


def calculate_critical_path_days(items: list[RequirementWithEstimate]) -> Decimal:
    tree = build_requirement_tree(
        items,
        get_id=lambda i: i.requirement.req_id,
        get_parent_id=lambda i: i.requirement.parent_req_id,
    )
    return tree.critical_path_length(lambda i: i.estimation_days)


def calculate_dashboard_kpis(items: list[RequirementWithEstimate]) -> DashboardKPI:
    """
    KPIs over the (already filtered) portfolio.

    Totals and mixes count every item; avg/median/p80 only consider items that
    carry a positive estimate.
    """
    if not items:
        return DashboardKPI()

    estimated = [i.estimation_days for i in items if i.estimation_days > 0]
    total = sum((i.estimation_days for i in items), Decimal(0))

    effort = {p: Decimal(0) for p in Priority}
    counts = {p: 0 for p in Priority}
    difficulty = DifficultyMix()
    for item in items:
        priority = Priority(item.requirement.priority)
        effort[priority] += item.estimation_days
        counts[priority] += 1
        if item.difficulty <= 2:
            difficulty.low += 1
        elif item.difficulty == 3:
            difficulty.medium += 1
        else:
            difficulty.high += 1

    n = Decimal(len(items))
    kpi = DashboardKPI(
        total_days=round_half_up(total, DAYS_DECIMALS),
        avg_days=round_half_up(sum(estimated, Decimal(0)) / len(estimated), DAYS_DECIMALS) if estimated else Decimal(0),
        median_days=round_half_up(median(estimated), DAYS_DECIMALS),
        p80_days=round_half_up(percentile_nearest_rank(estimated, P80_RANK), DAYS_DECIMALS),
        critical_path_days=round_half_up(calculate_critical_path_days(items), DAYS_DECIMALS),
        effort_by_priority=PriorityBreakdown(**{p.value: round_half_up(effort[p], DAYS_DECIMALS) for p in Priority}),
        effort_by_priority_pct=PriorityBreakdown(**{p.value: _pct(effort[p], total) for p in Priority}),
        priority_mix=PriorityCounts(**{p.value: counts[p] for p in Priority}),
        priority_mix_pct=PriorityBreakdown(**{p.value: _pct(Decimal(counts[p]), n) for p in Priority}),
        difficulty_mix=difficulty,
        top_tag_by_effort=top_tag_by_effort(items),
    )
    logger.debug(
        "KPIs computed over %d requirements: total=%s critical_path=%s",
        len(items), kpi.total_days, kpi.critical_path_days,
    )
    return kpi
