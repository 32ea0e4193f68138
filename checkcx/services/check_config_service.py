import logging
from typing import Any, Optional

from checkcx.domain.check_config import CheckConfig, CheckConfigDraft, ConfigPage
from checkcx.exceptions import RecordNotFoundError, ValidationError
from checkcx.repository.check_configs import CheckConfigsRepository, TABLE
from checkcx.services.validation import as_none_if_empty, require_http_url, require_text

logger = logging.getLogger(__name__)

PER_PAGE = 20
# group filter value selecting configs that belong to no group
UNGROUPED = "__ungrouped__"


def _parse_page(page: Any) -> int:
    try:
        return max(1, int(str(page).strip()))
    except (TypeError, ValueError):
        return 1


class CheckConfigService:
    """Create, edit, copy and toggle check configs."""

    def __init__(self, configs_repo: CheckConfigsRepository):
        self.configs_repo = configs_repo

    def list_configs(self, q: Any = None, group: Any = None, page: Any = 1) -> ConfigPage:
        """Newest first, `PER_PAGE` rows per page; `group=UNGROUPED` selects configs without a group."""
        page_no = _parse_page(page)
        group_name = as_none_if_empty(group)
        rows, total = self.configs_repo.list_configs(
            text=as_none_if_empty(q),
            group_name=None if group_name == UNGROUPED else group_name,
            ungrouped=group_name == UNGROUPED,
            limit=PER_PAGE,
            offset=(page_no - 1) * PER_PAGE,
        )
        return ConfigPage(rows=rows, total=total, page=page_no, per_page=PER_PAGE)

    def get_config(self, config_id: str) -> CheckConfig:
        cfg = self.configs_repo.get_config(self._require_id(config_id))
        if cfg is None:
            raise RecordNotFoundError(TABLE, config_id)
        return cfg

    @staticmethod
    def _require_id(config_id: Optional[str]) -> str:
        return require_text(config_id, "id")

    @staticmethod
    def _draft(
        *,
        name: Any,
        type: Any,
        model: Any,
        endpoint: Any,
        enabled: bool,
        is_maintenance: bool,
        request_header: Optional[dict],
        metadata: Optional[dict],
        group_name: Any,
        api_key: Optional[str],
    ) -> CheckConfigDraft:
        return CheckConfigDraft(
            name=require_text(name, "name"),
            type=require_text(type, "type"),
            model=require_text(model, "model"),
            endpoint=require_http_url(endpoint, "endpoint", require_path=True),
            enabled=bool(enabled),
            is_maintenance=bool(is_maintenance),
            request_header=request_header or None,
            metadata=metadata or None,
            group_name=as_none_if_empty(group_name),
            api_key=api_key,
        )

    def create_config(self, *, api_key: Any, **fields) -> CheckConfig:
        draft = self._draft(api_key=require_text(api_key, "api_key"), **fields)
        cfg = self.configs_repo.insert_config(draft)
        logger.info("Created check config %s (%s)", cfg.id, cfg.name)
        return cfg

    def update_config(self, config_id: str, *, update_api_key: bool = False, api_key: Any = None, **fields) -> CheckConfig:
        config_id = self._require_id(config_id)
        new_key = require_text(api_key, "api_key") if update_api_key else None
        draft = self._draft(api_key=new_key, **fields)
        cfg = self.configs_repo.update_config(config_id, draft)
        logger.info("Updated check config %s", config_id)
        return cfg

    def copy_config(self, source_id: str, *, update_api_key: bool = False, api_key: Any = None, **fields) -> CheckConfig:
        """Insert a new config from edited fields, reusing the source's API key unless replaced."""
        source_id = require_text(source_id, "source_id")
        if update_api_key:
            key = require_text(api_key, "api_key")
        else:
            if self.configs_repo.get_config(source_id) is None:
                raise RecordNotFoundError(TABLE, source_id)
            key = as_none_if_empty(self.configs_repo.get_api_key(source_id))
            if key is None:
                raise ValidationError("api_key", "source config has no API key to reuse; supply a new one")
        draft = self._draft(api_key=key, **fields)
        cfg = self.configs_repo.insert_config(draft)
        logger.info("Copied check config %s -> %s", source_id, cfg.id)
        return cfg

    def delete_config(self, config_id: str) -> None:
        config_id = self._require_id(config_id)
        if not self.configs_repo.delete_config(config_id):
            raise RecordNotFoundError(TABLE, config_id)
        logger.info("Deleted check config %s", config_id)

    def set_enabled(self, config_id: str, enabled: bool) -> CheckConfig:
        return self.configs_repo.set_flags(self._require_id(config_id), enabled=bool(enabled))

    def set_maintenance(self, config_id: str, is_maintenance: bool) -> CheckConfig:
        return self.configs_repo.set_flags(self._require_id(config_id), is_maintenance=bool(is_maintenance))
