from .check_configs import CheckConfigsRepository
from .groups import GroupsRepository
from .notifications import NotificationsRepository

__all__ = ["CheckConfigsRepository", "GroupsRepository", "NotificationsRepository"]
