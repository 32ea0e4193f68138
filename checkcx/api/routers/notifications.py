from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel

from checkcx.api.errors import domain_errors
from checkcx.domain.notification import Notification
from checkcx.services.notification_service import NotificationService


class NotificationRequest(BaseModel):
    message: str
    level: str = "info"
    is_active: bool = False


def _to_dict(n: Notification) -> dict:
    d = asdict(n)
    d["level"] = n.level.value
    return d


def create_notifications_router(notification_service: NotificationService):
    router = APIRouter(prefix="/notifications", tags=["Notifications"])

    @router.get("/")
    def list_notifications():
        return [_to_dict(n) for n in notification_service.list_notifications()]

    @router.post("/", status_code=201)
    def create_notification(req: NotificationRequest):
        with domain_errors():
            return _to_dict(notification_service.create_notification(req.message, req.level, req.is_active))

    @router.put("/{notification_id}")
    def update_notification(notification_id: str, req: NotificationRequest):
        with domain_errors():
            n = notification_service.update_notification(notification_id, req.message, req.level, req.is_active)
            return _to_dict(n)

    @router.post("/{notification_id}/toggle")
    def toggle_notification(notification_id: str):
        with domain_errors():
            return _to_dict(notification_service.toggle_active(notification_id))

    @router.delete("/{notification_id}")
    def delete_notification(notification_id: str):
        with domain_errors():
            notification_service.delete_notification(notification_id)
        return {"status": "deleted"}

    return router
