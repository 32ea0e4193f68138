import logging

from checkcx.repository.check_configs import CheckConfigsRepository
from checkcx.repository.groups import GroupsRepository
from checkcx.repository.notifications import NotificationsRepository
from checkcx.services.counts import safe_count

logger = logging.getLogger(__name__)

GROUP_PREVIEW_LIMIT = 8


class DashboardService:
    """Overview counts for the landing page.

    Each figure is computed independently; one failing query reports `None`
    for that figure instead of failing the whole overview.
    """

    def __init__(self, configs_repo: CheckConfigsRepository, groups_repo: GroupsRepository, notifications_repo: NotificationsRepository):
        self.configs_repo = configs_repo
        self.groups_repo = groups_repo
        self.notifications_repo = notifications_repo

    def overview(self) -> dict:
        total_groups = safe_count("groups.total", self.groups_repo.count)

        try:
            preview = self.groups_repo.list_groups(limit=GROUP_PREVIEW_LIMIT)
        except Exception:
            logger.exception("Dashboard group preview failed")
            preview = None

        groups = None
        remaining = None
        if preview is not None:
            groups = [
                {
                    "id": g.id,
                    "name": g.group_name,
                    "config_count": safe_count(
                        f"configs.group={g.group_name}",
                        lambda name=g.group_name: self.configs_repo.count(group_name=name),
                    ),
                }
                for g in preview
            ]
            if total_groups is not None:
                remaining = max(0, total_groups - len(groups))

        return {
            "configs": {
                "total": safe_count("configs.total", self.configs_repo.count),
                "enabled": safe_count("configs.enabled", lambda: self.configs_repo.count(enabled=True)),
                "maintenance": safe_count("configs.maintenance", lambda: self.configs_repo.count(is_maintenance=True)),
                "disabled": safe_count("configs.disabled", self.configs_repo.count_disabled),
            },
            "groups": {
                "total": total_groups,
                "preview": groups,
                "remaining": remaining,
            },
            "notifications": {
                "total": safe_count("notifications.total", self.notifications_repo.count),
                "active": safe_count("notifications.active", lambda: self.notifications_repo.count(is_active=True)),
            },
        }
