"""Dashboard API routes."""
from fastapi import APIRouter

from reqplan.schemas.dashboard import DashboardRequest, DashboardResponse
from reqplan.services.dashboard_service import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.post("", response_model=DashboardResponse)
def get_dashboard(data: DashboardRequest):
    """
    KPIs, schedule projection, confidence score and deviation alerts for one
    snapshot of requirements and their latest estimates.
    """
    return build_dashboard(data.requirements, data.estimates, data.config)
