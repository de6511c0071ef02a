"""Dashboard and report API endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import async_sessionmaker

from evalboard.auth.permissions import any_authorized_user, supervisor_required
from evalboard.auth.scope import scope_for
from evalboard.models.enums import ReportPeriod
from evalboard.schemas.report import DashboardResponse, ReportResponse
from evalboard.services.report import ReportService, get_session_factory

router = APIRouter()


def get_report_service(session_factory: async_sessionmaker = Depends(get_session_factory)) -> ReportService:
    """Get report service."""
    return ReportService(session_factory)


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Get dashboard data"
)
async def get_dashboard(
    current_user: dict = Depends(any_authorized_user),
    report_service: ReportService = Depends(get_report_service)
):
    """
    Headline dashboard numbers.

    **Role-based access:**
    - **Supervisors**: whole school
    - **Teachers**: only their own profile and evaluations
    """
    return await report_service.get_dashboard(scope_for(current_user))


@router.get(
    "/reports",
    response_model=ReportResponse,
    summary="Get report data"
)
async def get_report(
    department: Optional[str] = Query(None, description="Department name, or 'all'"),
    period: ReportPeriod = Query(ReportPeriod.CURRENT, description="Time window"),
    current_user: dict = Depends(supervisor_required),
    report_service: ReportService = Depends(get_report_service)
):
    """
    Report page data: top teachers, monthly, department and category
    averages, department statistics and the detailed teacher table.
    """
    return await report_service.get_report(period=period, department=department)
