from typing import List, Optional, Tuple

from sqlalchemy import String, func, or_, select
from sqlalchemy.orm import Session

from checkcx.db.models import CheckConfig as DBCheckConfig
from checkcx.domain.check_config import CheckConfig, CheckConfigDraft
from checkcx.exceptions import RecordNotFoundError

TABLE = "check_configs"


class CheckConfigsRepository:
    """Row access for `check_configs`.

    Requires an explicit `session_factory` (callable returning a `Session`).
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def get_session(self) -> Session:
        return self.session_factory()

    @staticmethod
    def _to_domain(c: DBCheckConfig) -> CheckConfig:
        return CheckConfig(
            id=c.id,
            name=c.name,
            type=c.type,
            model=c.model,
            endpoint=c.endpoint,
            enabled=c.enabled,
            is_maintenance=c.is_maintenance,
            request_header=c.request_header,
            metadata=c.metadata_,
            group_name=c.group_name,
            created_at=c.created_at,
            updated_at=c.updated_at,
        )

    @staticmethod
    def _filtered(q, text: Optional[str], group_name: Optional[str], ungrouped: bool):
        if ungrouped:
            q = q.where(DBCheckConfig.group_name.is_(None))
        elif group_name:
            q = q.where(DBCheckConfig.group_name == group_name)
        if text:
            needle = text.lower()
            q = q.where(or_(*[
                func.lower(column, type_=String).contains(needle, autoescape=True)
                for column in (
                    DBCheckConfig.name,
                    DBCheckConfig.type,
                    DBCheckConfig.model,
                    DBCheckConfig.endpoint,
                    DBCheckConfig.group_name,
                )
            ]))
        return q

    def list_configs(
        self,
        text: Optional[str] = None,
        group_name: Optional[str] = None,
        ungrouped: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[CheckConfig], int]:
        """Newest first. Returns one page of rows and the total matching count.

        `text` is a case-insensitive substring match on name, type, model,
        endpoint and group name; `ungrouped` selects rows without a group.
        """
        with self.get_session() as session:
            total_q = self._filtered(select(func.count()).select_from(DBCheckConfig), text, group_name, ungrouped)
            total = session.execute(total_q).scalar_one()
            q = self._filtered(select(DBCheckConfig), text, group_name, ungrouped)
            q = q.order_by(DBCheckConfig.created_at.desc(), DBCheckConfig.id).offset(offset)
            if limit is not None:
                q = q.limit(limit)
            rows = session.execute(q).scalars().all()
            return [self._to_domain(c) for c in rows], total

    def get_config(self, config_id: str) -> Optional[CheckConfig]:
        with self.get_session() as session:
            c = session.get(DBCheckConfig, config_id)
            return self._to_domain(c) if c else None

    def get_api_key(self, config_id: str) -> Optional[str]:
        with self.get_session() as session:
            q = select(DBCheckConfig.api_key).where(DBCheckConfig.id == config_id)
            return session.execute(q).scalars().first()

    def insert_config(self, draft: CheckConfigDraft) -> CheckConfig:
        with self.get_session() as session:
            c = DBCheckConfig(
                name=draft.name,
                type=draft.type,
                model=draft.model,
                endpoint=draft.endpoint,
                api_key=draft.api_key,
                enabled=draft.enabled,
                is_maintenance=draft.is_maintenance,
                request_header=draft.request_header,
                metadata_=draft.metadata,
                group_name=draft.group_name,
            )
            session.add(c)
            session.commit()
            session.refresh(c)
            return self._to_domain(c)

    def update_config(self, config_id: str, draft: CheckConfigDraft) -> CheckConfig:
        """Replace all editable fields; the API key only changes when `draft.api_key` is set."""
        with self.get_session() as session:
            c = session.get(DBCheckConfig, config_id)
            if not c:
                raise RecordNotFoundError(TABLE, config_id)
            c.name = draft.name
            c.type = draft.type
            c.model = draft.model
            c.endpoint = draft.endpoint
            c.enabled = draft.enabled
            c.is_maintenance = draft.is_maintenance
            c.request_header = draft.request_header
            c.metadata_ = draft.metadata
            c.group_name = draft.group_name
            if draft.api_key is not None:
                c.api_key = draft.api_key
            session.commit()
            session.refresh(c)
            return self._to_domain(c)

    def set_flags(self, config_id: str, *, enabled: Optional[bool] = None, is_maintenance: Optional[bool] = None) -> CheckConfig:
        with self.get_session() as session:
            c = session.get(DBCheckConfig, config_id)
            if not c:
                raise RecordNotFoundError(TABLE, config_id)
            if enabled is not None:
                c.enabled = enabled
            if is_maintenance is not None:
                c.is_maintenance = is_maintenance
            session.commit()
            session.refresh(c)
            return self._to_domain(c)

    def delete_config(self, config_id: str) -> bool:
        with self.get_session() as session:
            c = session.get(DBCheckConfig, config_id)
            if not c:
                return False
            session.delete(c)
            session.commit()
            return True

    def count(self, **filters) -> int:
        """Count rows matching equality filters, e.g. `count(enabled=True)`."""
        with self.get_session() as session:
            q = select(func.count()).select_from(DBCheckConfig)
            for column, value in filters.items():
                q = q.where(getattr(DBCheckConfig, column) == value)
            return session.execute(q).scalar_one()

    def count_disabled(self) -> int:
        """Rows with `enabled` false or null."""
        with self.get_session() as session:
            q = select(func.count()).select_from(DBCheckConfig).where(
                or_(DBCheckConfig.enabled.is_(False), DBCheckConfig.enabled.is_(None))
            )
            return session.execute(q).scalar_one()
