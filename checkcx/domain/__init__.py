"""Domain objects for check-cx admin - explicit re-exports to satisfy linters."""
from .check_config import CheckConfig as CheckConfig
from .check_config import ConfigPage as ConfigPage
from .group import Group as Group
from .notification import Notification as Notification
from .notification import NotificationLevel as NotificationLevel
from .theme import ThemePreference as ThemePreference
from .theme import ResolvedTheme as ResolvedTheme

__all__ = ["CheckConfig", "ConfigPage", "Group", "Notification", "NotificationLevel", "ThemePreference", "ResolvedTheme"]
