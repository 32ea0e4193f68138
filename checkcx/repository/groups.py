from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from checkcx.db.models import GroupInfo as DBGroupInfo
from checkcx.domain.group import Group
from checkcx.exceptions import DuplicateRecordError, RecordNotFoundError

TABLE = "group_info"


class GroupsRepository:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def get_session(self) -> Session:
        return self.session_factory()

    @staticmethod
    def _to_domain(g: DBGroupInfo) -> Group:
        return Group(
            id=g.id,
            group_name=g.group_name,
            website_url=g.website_url,
            created_at=g.created_at,
            updated_at=g.updated_at,
        )

    def list_groups(self, limit: Optional[int] = None) -> List[Group]:
        with self.get_session() as session:
            q = select(DBGroupInfo).order_by(DBGroupInfo.group_name.asc())
            if limit is not None:
                q = q.limit(limit)
            rows = session.execute(q).scalars().all()
            return [self._to_domain(g) for g in rows]

    def get_group(self, group_id: str) -> Optional[Group]:
        with self.get_session() as session:
            g = session.get(DBGroupInfo, group_id)
            return self._to_domain(g) if g else None

    def insert_group(self, group_name: str, website_url: str) -> Group:
        with self.get_session() as session:
            g = DBGroupInfo(group_name=group_name, website_url=website_url)
            session.add(g)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateRecordError(TABLE, "group_name", group_name) from e
            session.refresh(g)
            return self._to_domain(g)

    def update_group(self, group_id: str, group_name: str, website_url: str) -> Group:
        with self.get_session() as session:
            g = session.get(DBGroupInfo, group_id)
            if not g:
                raise RecordNotFoundError(TABLE, group_id)
            g.group_name = group_name
            g.website_url = website_url
            g.updated_at = datetime.now(timezone.utc)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateRecordError(TABLE, "group_name", group_name) from e
            session.refresh(g)
            return self._to_domain(g)

    def delete_group(self, group_id: str) -> bool:
        with self.get_session() as session:
            g = session.get(DBGroupInfo, group_id)
            if not g:
                return False
            session.delete(g)
            session.commit()
            return True

    def count(self) -> int:
        with self.get_session() as session:
            return session.execute(select(func.count()).select_from(DBGroupInfo)).scalar_one()
