from fastapi import APIRouter

from checkcx.services.dashboard_service import DashboardService


def create_dashboard_router(dashboard_service: DashboardService):
    router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

    @router.get("/")
    def overview():
        return dashboard_service.overview()

    return router
