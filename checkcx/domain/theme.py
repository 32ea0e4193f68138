from enum import Enum
from typing import Any

THEME_STORAGE_KEY = "check-cx-admin:theme"


class ThemePreference(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ResolvedTheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


def normalize_theme_preference(value: Any) -> ThemePreference:
    """Return the matching preference, or SYSTEM for absent/unrecognized values."""
    if isinstance(value, ThemePreference):
        return value
    if value in ("light", "dark", "system"):
        return ThemePreference(value)
    return ThemePreference.SYSTEM


def resolve_theme(preference: ThemePreference, prefers_dark: bool) -> ResolvedTheme:
    if preference is ThemePreference.SYSTEM:
        return ResolvedTheme.DARK if prefers_dark else ResolvedTheme.LIGHT
    return ResolvedTheme(preference.value)
