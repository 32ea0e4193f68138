"""API router factory functions."""
from .configs import create_configs_router
from .groups import create_groups_router
from .notifications import create_notifications_router
from .dashboard import create_dashboard_router
from .preferences import create_preferences_router
from .systems import create_systems_router
from .auth import create_auth_router

__all__ = [
    "create_configs_router",
    "create_groups_router",
    "create_notifications_router",
    "create_dashboard_router",
    "create_preferences_router",
    "create_systems_router",
    "create_auth_router",
]
