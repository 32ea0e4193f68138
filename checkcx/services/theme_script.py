"""Pre-paint theme application.

`THEME_SCRIPT` runs synchronously in `<head>` before the page body renders so
the first frame already matches the resolved theme. Its resolution must stay
identical to `ThemeStore.get_resolved_theme()`; `resolve_pre_paint` is the
Python mirror used to render the initial `<html>` attributes server-side.
"""
from __future__ import annotations

from typing import Optional, Tuple

from checkcx.domain.theme import (
    THEME_STORAGE_KEY,
    ResolvedTheme,
    ThemePreference,
    normalize_theme_preference,
    resolve_theme,
)

THEME_SCRIPT = (
    "(function(){try{"
    "var k='" + THEME_STORAGE_KEY + "';"
    "var t=localStorage.getItem(k);"
    "if(t!=='light'&&t!=='dark'&&t!=='system')t='system';"
    "var m=window.matchMedia('(prefers-color-scheme: dark)');"
    "var d=t==='dark'||(t==='system'&&m.matches);"
    "var r=document.documentElement;"
    "r.classList.toggle('dark',d);"
    "r.style.colorScheme=d?'dark':'light';"
    "r.dataset.theme=t;"
    "}catch(e){}})();"
)


def resolve_pre_paint(stored_value: Optional[str], prefers_dark: bool) -> Tuple[ResolvedTheme, ThemePreference]:
    preference = normalize_theme_preference(stored_value)
    return resolve_theme(preference, prefers_dark), preference


def render_theme_script() -> str:
    return f"<script>{THEME_SCRIPT}</script>"
