"""
Calendar projection: aggregated effort -> workdays -> finish date.

Both policies floor the effort at critical_path × developers, so a long
dependency chain bounds the schedule however many people are available.
Neutral pools all effort under one ceiling; PriorityFirst ceils each
priority bucket separately (High, then Med, then Low) and sums, which can
only add days compared with Neutral.
"""
import logging
from datetime import date, timedelta
from decimal import ROUND_UP, Decimal
from typing import Iterable

from reqplan.engine.calculator import DAYS_DECIMALS, round_half_up, to_decimal
from reqplan.models.requirement import Priority
from reqplan.schemas.dashboard import (
    Milestones,
    PriorityBreakdown,
    ScheduleConfig,
    ScheduleProjection,
    SchedulingPolicy,
)

logger = logging.getLogger(__name__)

SATURDAY = 5


def is_workday(day: date, exclude_weekends: bool, holidays: Iterable[date] = ()) -> bool:
    if exclude_weekends and day.weekday() >= SATURDAY:
        return False
    return day not in holidays


def add_workdays(
    start: date,
    workdays: int,
    exclude_weekends: bool,
    holidays: Iterable[date] = (),
) -> date:
    """
    Day on which the workday count reaches `workdays`, walking forward from
    `start`. The start date is day 1 when it is itself a workday.
    """
    if workdays <= 0:
        return start
    holiday_set = frozenset(holidays)
    day = start
    counted = 0
    while True:
        if is_workday(day, exclude_weekends, holiday_set):
            counted += 1
            if counted >= workdays:
                return day
        day += timedelta(days=1)


def _ceil_div(effort: Decimal, n_developers: int) -> int:
    if effort <= 0:
        return 0
    return int((effort / Decimal(n_developers)).to_integral_value(rounding=ROUND_UP))


def effective_effort_days(total_days: Decimal, critical_path_days: Decimal, n_developers: int) -> Decimal:
    """max(total, critical_path × n): the dependency chain is a lower bound."""
    return max(to_decimal(total_days), to_decimal(critical_path_days) * n_developers)


def neutral_projection(
    total_days: Decimal,
    critical_path_days: Decimal,
    n_developers: int,
    start_date: date,
    exclude_weekends: bool,
    holidays: Iterable[date] = (),
) -> ScheduleProjection:
    n = max(1, n_developers)
    effective = effective_effort_days(total_days, critical_path_days, n)
    workdays = _ceil_div(effective, n)
    return ScheduleProjection(
        finish_date=add_workdays(start_date, workdays, exclude_weekends, holidays),
        total_workdays=workdays,
        effective_effort_days=round_half_up(effective, DAYS_DECIMALS),
    )


def priority_first_projection(
    effort_by_priority: PriorityBreakdown,
    critical_path_days: Decimal,
    n_developers: int,
    start_date: date,
    exclude_weekends: bool,
    holidays: Iterable[date] = (),
) -> ScheduleProjection:
    n = max(1, n_developers)
    buckets = {p: to_decimal(getattr(effort_by_priority, p.value)) for p in Priority}
    total = sum(buckets.values(), Decimal(0))
    effective = effective_effort_days(total, critical_path_days, n)
    holiday_set = frozenset(holidays)

    if total <= 0:
        # Only a critical path without bucketed effort: schedule it as one block
        workdays = _ceil_div(effective, n)
        return ScheduleProjection(
            finish_date=add_workdays(start_date, workdays, exclude_weekends, holiday_set),
            total_workdays=workdays,
            effective_effort_days=round_half_up(effective, DAYS_DECIMALS),
            milestones=Milestones(),
        )

    scale = effective / total
    workdays = 0
    milestones = Milestones()
    for priority in Priority:
        bucket_days = _ceil_div(buckets[priority] * scale, n)
        if bucket_days == 0:
            continue
        workdays += bucket_days
        setattr(milestones, priority.value, add_workdays(start_date, workdays, exclude_weekends, holiday_set))

    return ScheduleProjection(
        finish_date=add_workdays(start_date, workdays, exclude_weekends, holiday_set),
        total_workdays=workdays,
        effective_effort_days=round_half_up(effective, DAYS_DECIMALS),
        milestones=milestones,
    )


def project_schedule(
    effort_by_priority: PriorityBreakdown,
    total_days: Decimal,
    critical_path_days: Decimal,
    config: ScheduleConfig,
) -> ScheduleProjection:
    """Projection under the policy selected in the schedule configuration."""
    if config.policy == SchedulingPolicy.PRIORITY_FIRST:
        projection = priority_first_projection(
            effort_by_priority,
            critical_path_days,
            config.n_developers,
            config.start_date,
            config.exclude_weekends,
            config.holidays,
        )
    else:
        projection = neutral_projection(
            total_days,
            critical_path_days,
            config.n_developers,
            config.start_date,
            config.exclude_weekends,
            config.holidays,
        )
    logger.debug(
        "Projected %s workdays, finish %s",
        projection.total_workdays,
        projection.finish_date,
        extra={"policy": config.policy.value, "n_developers": config.n_developers},
    )
    return projection
