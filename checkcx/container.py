"""Dependency injection containers: the composition root for both halves."""
from dependency_injector import containers, providers
import requests
from sqlalchemy.orm import sessionmaker

from checkcx import config as env
from checkcx.client.admin_client import AdminClient
from checkcx.db.engine import make_engine
from checkcx.repository.check_configs import CheckConfigsRepository
from checkcx.repository.groups import GroupsRepository
from checkcx.repository.notifications import NotificationsRepository
from checkcx.services.check_config_service import CheckConfigService
from checkcx.services.color_scheme import StaticColorSchemeQuery
from checkcx.services.dashboard_service import DashboardService
from checkcx.services.group_service import GroupService
from checkcx.services.inflight_counter import InflightCounter
from checkcx.services.loading_indicator import LoadingIndicator
from checkcx.services.local_storage import FileLocalStorage
from checkcx.services.notification_service import NotificationService
from checkcx.services.request_tracking import TrackingPolicy
from checkcx.services.theme_store import ThemeStore


# Environment variables used by the containers (read via `checkcx.config` helpers).
#
# DATABASE_URL (str, default: "sqlite:///checkcx.db")
#   SQLAlchemy URL for the check_configs / group_info / system_notifications tables.
#
# CHECKCX_HOST (str, default: "127.0.0.1") / CHECKCX_PORT (int, default: 8000)
#   Bind address for `run.py`.
#
# CHECKCX_PREFERENCES_PATH (str, default: ~/.config/check-cx-admin/preferences.json)
#   JSON file backing the local preference storage (theme).
#
# CHECKCX_STORAGE_WATCH_INTERVAL (int seconds, default: 2)
#   How often the preference file is re-read to pick up writes from other processes.
#   0 disables watching.
#
# CHECKCX_LOG_LEVEL (str, default: "INFO")
#
# CHECKCX_API_URL (str, default: "http://127.0.0.1:8000") / ADMIN_TOKEN
#   Base URL and bearer token used by the admin client.
#
# CHECKCX_SHOW_DELAY_MS (int, default: 150) / CHECKCX_MIN_VISIBLE_MS (int, default: 250)
#   Loading indicator debounce and minimum visible duration.
ENV = {
    "DATABASE_URL": env.database_url(),
    "CHECKCX_HOST": env.get_str_env("CHECKCX_HOST", "127.0.0.1"),
    "CHECKCX_PORT": env.get_int_env("CHECKCX_PORT", 8000),
    "CHECKCX_PREFERENCES_PATH": env.preferences_path(),
    "CHECKCX_STORAGE_WATCH_INTERVAL": env.get_int_env("CHECKCX_STORAGE_WATCH_INTERVAL", 2),
    "CHECKCX_LOG_LEVEL": env.get_str_env("CHECKCX_LOG_LEVEL", "INFO").strip().upper(),
    "CHECKCX_API_URL": env.get_str_env("CHECKCX_API_URL", "http://127.0.0.1:8000"),
    "CHECKCX_SHOW_DELAY_MS": env.get_int_env("CHECKCX_SHOW_DELAY_MS", 150),
    "CHECKCX_MIN_VISIBLE_MS": env.get_int_env("CHECKCX_MIN_VISIBLE_MS", 250),
}


class Container(containers.DeclarativeContainer):
    """Server-side container: persistence, admin services, theme preference."""

    config = providers.Configuration(default=ENV)

    db_engine = providers.Singleton(
        make_engine,
        database_url=config.DATABASE_URL,
    )
    session_factory = providers.Factory(
        sessionmaker,
        bind=db_engine,
        future=True,
    )

    check_configs_repository = providers.Singleton(
        CheckConfigsRepository,
        session_factory=session_factory,
    )
    groups_repository = providers.Singleton(
        GroupsRepository,
        session_factory=session_factory,
    )
    notifications_repository = providers.Singleton(
        NotificationsRepository,
        session_factory=session_factory,
    )

    check_config_service = providers.Singleton(
        CheckConfigService,
        configs_repo=check_configs_repository,
    )
    group_service = providers.Singleton(
        GroupService,
        groups_repo=groups_repository,
        configs_repo=check_configs_repository,
    )
    notification_service = providers.Singleton(
        NotificationService,
        notifications_repo=notifications_repository,
    )
    dashboard_service = providers.Singleton(
        DashboardService,
        configs_repo=check_configs_repository,
        groups_repo=groups_repository,
        notifications_repo=notifications_repository,
    )

    preference_storage = providers.Singleton(
        FileLocalStorage,
        path=config.CHECKCX_PREFERENCES_PATH.as_(str),
    )
    color_scheme = providers.Singleton(StaticColorSchemeQuery)
    theme_store = providers.Singleton(
        ThemeStore,
        storage=preference_storage,
        color_scheme=color_scheme,
    )


class ClientContainer(containers.DeclarativeContainer):
    """Client-side container: one in-flight counter shared by the session and indicators."""

    config = providers.Configuration(default=ENV)

    inflight_counter = providers.Singleton(InflightCounter)

    tracking_policy = providers.Singleton(
        TrackingPolicy,
        origin=config.CHECKCX_API_URL.as_(str),
    )

    http_session = providers.Singleton(requests.Session)

    admin_client = providers.Singleton(
        AdminClient,
        base_url=config.CHECKCX_API_URL.as_(str),
        token=providers.Callable(env.get_optional_str_env, "ADMIN_TOKEN"),
        session=http_session,
        counter=inflight_counter,
        policy=tracking_policy,
    )

    loading_indicator = providers.Factory(
        LoadingIndicator,
        counter=inflight_counter,
        show_delay_ms=config.CHECKCX_SHOW_DELAY_MS.as_(int),
        min_visible_ms=config.CHECKCX_MIN_VISIBLE_MS.as_(int),
    )
