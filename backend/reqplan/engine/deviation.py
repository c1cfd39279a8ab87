"""Deviation alerts over KPIs and the schedule projection."""
from datetime import date
from decimal import Decimal

from reqplan.engine.calculator import round_half_up
from reqplan.schemas.dashboard import AlertType, DashboardKPI, DeviationAlert, ScheduleProjection

# Total effort thresholds (days)
EFFORT_CRITICAL_DAYS = Decimal(200)
EFFORT_WARNING_DAYS = Decimal(100)

# Velocity delta bands (% away from the ideal velocity of 1.0)
VELOCITY_HEALTHY_PCT = Decimal(20)
VELOCITY_SEVERE_PCT = Decimal(50)

ICONS = {
    AlertType.INFO: "info",
    AlertType.WARNING: "alert-triangle",
    AlertType.CRITICAL: "alert-octagon",
}
ON_TRACK_ICON = "check-circle"


def _alert(alert_type: AlertType, message: str, tooltip: str, icon: str | None = None) -> DeviationAlert:
    return DeviationAlert(type=alert_type, icon=icon or ICONS[alert_type], message=message, tooltip=tooltip)


def effort_size_alerts(total_days: Decimal) -> list[DeviationAlert]:
    if total_days > EFFORT_CRITICAL_DAYS:
        return [_alert(
            AlertType.CRITICAL,
            f"Very large project: {total_days} days",
            f"Total effort exceeds {EFFORT_CRITICAL_DAYS} days. Consider splitting the scope into "
            "phases and re-estimating each phase separately.",
        )]
    if total_days >= EFFORT_WARNING_DAYS:
        return [_alert(
            AlertType.WARNING,
            f"Large project: {total_days} days",
            f"Total effort is between {EFFORT_WARNING_DAYS} and {EFFORT_CRITICAL_DAYS} days. "
            "Review estimates of the largest requirements and plan intermediate milestones.",
        )]
    return []


def velocity(total_days: Decimal, total_workdays: int, n_developers: int) -> Decimal | None:
    """Required effort over available capacity; None when capacity is zero."""
    if n_developers < 1 or total_workdays <= 0:
        return None
    return Decimal(total_days) / (Decimal(total_workdays) * n_developers)


def velocity_alerts(total_days: Decimal, total_workdays: int, n_developers: int) -> list[DeviationAlert]:
    current = velocity(total_days, total_workdays, n_developers)
    if current is None:
        return []
    exact_delta = (current - 1) * 100
    if abs(exact_delta) <= VELOCITY_HEALTHY_PCT:
        return []
    delta = round_half_up(exact_delta, 1)
    capacity = total_workdays * n_developers
    if exact_delta > 0:
        severity = AlertType.CRITICAL if exact_delta > VELOCITY_SEVERE_PCT else AlertType.WARNING
        return [_alert(
            severity,
            f"Team overloaded: velocity +{delta}%",
            f"{total_days} days of effort against {capacity} developer-days of capacity. "
            "Extend the schedule or add developers.",
        )]
    severity = AlertType.WARNING if exact_delta < -VELOCITY_SEVERE_PCT else AlertType.INFO
    return [_alert(
        severity,
        f"Excess capacity: velocity {delta}%",
        f"Only {total_days} days of effort for {capacity} developer-days of capacity, usually "
        "because the dependency chain bounds the schedule. Fewer developers could deliver on the same date.",
    )]


def schedule_alerts(finish_date: date, target_date: date | None) -> list[DeviationAlert]:
    if target_date is None:
        return []
    slack = (target_date - finish_date).days
    if slack < 0:
        return [_alert(
            AlertType.CRITICAL,
            f"Behind schedule by {-slack} days",
            f"Projected finish {finish_date.isoformat()} is after the target date "
            f"{target_date.isoformat()}. Reduce scope, add developers or move the target.",
        )]
    if slack == 0:
        return [_alert(
            AlertType.INFO,
            "On track for the target date",
            f"Projected finish matches the target date {target_date.isoformat()} with no slack.",
            icon=ON_TRACK_ICON,
        )]
    return [_alert(
        AlertType.INFO,
        f"Ahead of schedule by {slack} days",
        f"Projected finish {finish_date.isoformat()} is before the target date {target_date.isoformat()}.",
        icon=ON_TRACK_ICON,
    )]


def generate_deviation_alerts(
    kpis: DashboardKPI,
    projection: ScheduleProjection,
    n_developers: int,
    target_date: date | None = None,
) -> list[DeviationAlert]:
    """Alerts ordered by effort size, velocity, then schedule."""
    return (
        effort_size_alerts(kpis.total_days)
        + velocity_alerts(kpis.total_days, projection.total_workdays, n_developers)
        + schedule_alerts(projection.finish_date, target_date)
    )
