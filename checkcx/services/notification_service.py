import logging
from typing import List, Optional

from checkcx.domain.notification import Notification, NotificationLevel
from checkcx.exceptions import RecordNotFoundError, ValidationError
from checkcx.repository.notifications import NotificationsRepository, TABLE
from checkcx.services.validation import require_text

logger = logging.getLogger(__name__)


def _parse_level(level) -> NotificationLevel:
    try:
        return NotificationLevel(level)
    except ValueError:
        raise ValidationError("level", "must be one of info, warning, error")


class NotificationService:
    def __init__(self, notifications_repo: NotificationsRepository):
        self.notifications_repo = notifications_repo

    def list_notifications(self) -> List[Notification]:
        return self.notifications_repo.list_notifications()

    def create_notification(self, message: str, level="info", is_active: bool = False) -> Notification:
        # keep the message as written; only reject blank ones
        require_text(message, "message")
        n = self.notifications_repo.insert_notification(message, _parse_level(level), bool(is_active))
        logger.info("Created notification %s (level=%s active=%s)", n.id, n.level.value, n.is_active)
        return n

    def update_notification(self, notification_id: str, message: str, level="info", is_active: bool = False) -> Notification:
        notification_id = require_text(notification_id, "id")
        require_text(message, "message")
        return self.notifications_repo.update_notification(
            notification_id,
            message=message,
            level=_parse_level(level),
            is_active=bool(is_active),
        )

    def toggle_active(self, notification_id: str) -> Notification:
        notification_id = require_text(notification_id, "id")
        current: Optional[Notification] = self.notifications_repo.get_notification(notification_id)
        if current is None:
            raise RecordNotFoundError(TABLE, notification_id)
        return self.notifications_repo.update_notification(notification_id, is_active=not current.is_active)

    def delete_notification(self, notification_id: str) -> None:
        notification_id = require_text(notification_id, "id")
        if not self.notifications_repo.delete_notification(notification_id):
            raise RecordNotFoundError(TABLE, notification_id)
