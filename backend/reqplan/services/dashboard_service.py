"""Dashboard pipeline: filter -> aggregate -> project -> confidence and alerts."""
import logging

from reqplan.engine.aggregator import calculate_dashboard_kpis, prepare_requirements_with_estimates
from reqplan.engine.confidence import calculate_confidence
from reqplan.engine.deviation import generate_deviation_alerts
from reqplan.engine.projector import project_schedule
from reqplan.models.estimate import Estimate
from reqplan.models.requirement import Requirement, RequirementWithEstimate
from reqplan.schemas.dashboard import DashboardResponse, ScheduleConfig

logger = logging.getLogger(__name__)


def filter_for_dashboard(
    items: list[RequirementWithEstimate],
    config: ScheduleConfig,
) -> list[RequirementWithEstimate]:
    """Keep selected priorities and, when tags are given, items with any of them."""
    result = []
    for item in items:
        if item.requirement.priority not in config.priorities:
            continue
        if config.tags and not any(tag in config.tags for tag in item.tags):
            continue
        result.append(item)
    return result


def build_dashboard(
    requirements: list[Requirement],
    estimates_by_id: dict[str, Estimate],
    config: ScheduleConfig,
) -> DashboardResponse:
    items = filter_for_dashboard(prepare_requirements_with_estimates(requirements, estimates_by_id), config)
    kpis = calculate_dashboard_kpis(items)
    projection = project_schedule(kpis.effort_by_priority, kpis.total_days, kpis.critical_path_days, config)
    confidence = calculate_confidence(items)
    alerts = generate_deviation_alerts(kpis, projection, config.n_developers, config.target_date)
    logger.info(
        "Dashboard built: %d requirements, %d workdays, confidence %d, %d alerts",
        len(items), projection.total_workdays, confidence.score, len(alerts),
        extra={"policy": config.policy.value, "total_days": kpis.total_days},
    )
    return DashboardResponse(
        kpis=kpis,
        projection=projection,
        confidence=confidence,
        alerts=alerts,
        requirement_count=len(items),
    )
