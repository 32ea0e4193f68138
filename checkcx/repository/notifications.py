from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from checkcx.db.models import SystemNotification as DBNotification
from checkcx.domain.notification import Notification, NotificationLevel
from checkcx.exceptions import RecordNotFoundError

TABLE = "system_notifications"


class NotificationsRepository:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def get_session(self) -> Session:
        return self.session_factory()

    @staticmethod
    def _to_domain(n: DBNotification) -> Notification:
        return Notification(
            id=n.id,
            message=n.message,
            level=NotificationLevel(n.level),
            is_active=bool(n.is_active),
            created_at=n.created_at,
            updated_at=n.updated_at,
        )

    def list_notifications(self) -> List[Notification]:
        """Newest first."""
        with self.get_session() as session:
            q = select(DBNotification).order_by(DBNotification.created_at.desc())
            rows = session.execute(q).scalars().all()
            return [self._to_domain(n) for n in rows]

    def get_notification(self, notification_id: str) -> Optional[Notification]:
        with self.get_session() as session:
            n = session.get(DBNotification, notification_id)
            return self._to_domain(n) if n else None

    def insert_notification(self, message: str, level: NotificationLevel, is_active: bool) -> Notification:
        with self.get_session() as session:
            n = DBNotification(message=message, level=level.value, is_active=is_active)
            session.add(n)
            session.commit()
            session.refresh(n)
            return self._to_domain(n)

    def update_notification(
        self,
        notification_id: str,
        *,
        message: Optional[str] = None,
        level: Optional[NotificationLevel] = None,
        is_active: Optional[bool] = None,
    ) -> Notification:
        with self.get_session() as session:
            n = session.get(DBNotification, notification_id)
            if not n:
                raise RecordNotFoundError(TABLE, notification_id)
            if message is not None:
                n.message = message
            if level is not None:
                n.level = level.value
            if is_active is not None:
                n.is_active = is_active
            n.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(n)
            return self._to_domain(n)

    def delete_notification(self, notification_id: str) -> bool:
        with self.get_session() as session:
            n = session.get(DBNotification, notification_id)
            if not n:
                return False
            session.delete(n)
            session.commit()
            return True

    def count(self, **filters) -> int:
        with self.get_session() as session:
            q = select(func.count()).select_from(DBNotification)
            for column, value in filters.items():
                q = q.where(getattr(DBNotification, column) == value)
            return session.execute(q).scalar_one()
