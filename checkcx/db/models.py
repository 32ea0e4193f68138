from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class CheckConfig(Base):
    __tablename__ = "check_configs"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=True)
    type = Column(Text, nullable=True)
    model = Column(Text, nullable=True)
    endpoint = Column(Text, nullable=True)
    api_key = Column(Text, nullable=True)
    enabled = Column(Boolean, nullable=True, default=True)
    is_maintenance = Column(Boolean, nullable=True, default=False)
    request_header = Column(JSON, nullable=True)
    # `metadata` is reserved on declarative classes
    metadata_ = Column("metadata", JSON, nullable=True)
    group_name = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class GroupInfo(Base):
    __tablename__ = "group_info"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_name = Column(Text, unique=True, nullable=False)
    website_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class SystemNotification(Base):
    __tablename__ = "system_notifications"

    id = Column(String(36), primary_key=True, default=_new_id)
    message = Column(Text, nullable=False)
    level = Column(String(16), nullable=False, default="info")
    is_active = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
