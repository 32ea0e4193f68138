import logging
from typing import List, Optional, Tuple

from checkcx.domain.group import Group
from checkcx.exceptions import RecordNotFoundError
from checkcx.repository.check_configs import CheckConfigsRepository
from checkcx.repository.groups import GroupsRepository, TABLE
from checkcx.services.counts import safe_count
from checkcx.services.validation import require_http_url, require_text

logger = logging.getLogger(__name__)

MAX_GROUP_NAME_LENGTH = 80


class GroupService:
    def __init__(self, groups_repo: GroupsRepository, configs_repo: CheckConfigsRepository):
        self.groups_repo = groups_repo
        self.configs_repo = configs_repo

    def list_groups(self) -> List[Group]:
        return self.groups_repo.list_groups()

    def list_groups_with_counts(self) -> List[Tuple[Group, Optional[int]]]:
        """Each group with its number of configs; `None` where that count failed."""
        return [
            (g, safe_count(f"configs.group={g.group_name}", lambda name=g.group_name: self.configs_repo.count(group_name=name)))
            for g in self.groups_repo.list_groups()
        ]

    def create_group(self, group_name: str, website_url: str) -> Group:
        name = require_text(group_name, "group_name", max_length=MAX_GROUP_NAME_LENGTH)
        url = require_http_url(website_url, "website_url")
        group = self.groups_repo.insert_group(name, url)
        logger.info("Created group %s (%s)", group.id, group.group_name)
        return group

    def update_group(self, group_id: str, group_name: str, website_url: str) -> Group:
        group_id = require_text(group_id, "id")
        name = require_text(group_name, "group_name", max_length=MAX_GROUP_NAME_LENGTH)
        url = require_http_url(website_url, "website_url")
        return self.groups_repo.update_group(group_id, name, url)

    def delete_group(self, group_id: str) -> None:
        group_id = require_text(group_id, "id")
        if not self.groups_repo.delete_group(group_id):
            raise RecordNotFoundError(TABLE, group_id)
        logger.info("Deleted group %s", group_id)
