from fastapi import APIRouter, Depends, Query
from tutorcenter.database.supabase_client import get_user_supabase
from tutorcenter.modules.dashboard.service import DashboardService, UPCOMING_LIMIT
from tutorcenter.core.dependencies import require_capability
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_user_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("/upcoming-classes")
async def upcoming_classes(
    limit: int = Query(UPCOMING_LIMIT, ge=1, le=100),
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Upcoming classes for the teacher dashboard"""
    return service.upcoming_classes(limit=limit)
