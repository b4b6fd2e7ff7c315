"""Dashboard API endpoint."""

from fastapi import APIRouter

from greatsage.api.deps import CurrentUserId
from greatsage.db.session import DBSession
from greatsage.schemas import DashboardStats
from greatsage.services.dashboard import DashboardService

router = APIRouter()


@router.get("/", response_model=DashboardStats)
async def get_dashboard(current_user_id: CurrentUserId, db: DBSession) -> DashboardStats:
    """Weekly numbers plus today's tasks, habits and study sessions."""
    return await DashboardService(db).get_stats(current_user_id)
