"""Server-rendered HTML shell for the admin dashboard."""
from html import escape
from typing import Optional

from checkcx.domain.theme import ResolvedTheme, ThemePreference
from checkcx.services.theme_script import render_theme_script

TITLE = "check-cx admin"


def render_html_attributes(resolved: ResolvedTheme, preference: ThemePreference) -> str:
    is_dark = resolved is ResolvedTheme.DARK
    cls = ' class="dark"' if is_dark else ""
    scheme = "dark" if is_dark else "light"
    return f'lang="en"{cls} style="color-scheme: {scheme}" data-theme="{preference.value}"'


def get_shell_head() -> str:
    # the theme script must stay first so it runs before any stylesheet paints
    return f"""
    <head>
        <meta charset="UTF-8">
        {render_theme_script()}
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>{TITLE}</title>
        <style>
            :root {{ --bg: #ffffff; --text: #111827; --muted: #6b7280; --accent: #2563eb; }}
            :root.dark {{ --bg: #0f1218; --text: #dbe2ea; --muted: #95a2b2; --accent: #4f8cff; }}
            body {{ background: var(--bg); color: var(--text); font-family: ui-sans-serif, system-ui, sans-serif; margin: 0; }}
            main {{ max-width: 72rem; margin: 0 auto; padding: 1.5rem; }}
            .muted {{ color: var(--muted); }}
            .global-loading-bar {{ position: fixed; top: 0; left: 0; right: 0; height: 2px; opacity: 0; transition: opacity 150ms; }}
            .global-loading-bar[data-visible="true"] {{ opacity: 1; }}
            .global-loading-bar__inner {{ height: 100%; width: 40%; background: var(--accent); }}
        </style>
    </head>
    """


def _fmt(value: Optional[int]) -> str:
    return "—" if value is None else f"{value:,}"


def get_overview_body(overview: dict) -> str:
    configs = overview["configs"]
    groups = overview["groups"]
    notifications = overview["notifications"]

    if groups["preview"] is None:
        group_rows = '<p class="muted">Group details unavailable</p>'
    elif not groups["preview"]:
        group_rows = '<p class="muted">No groups yet</p>'
    else:
        items = "".join(
            f"<li>{escape(g['name'])}: {_fmt(g['config_count'])}</li>" for g in groups["preview"]
        )
        if groups["remaining"]:
            items += f'<li class="muted">{groups["remaining"]} more groups…</li>'
        group_rows = f"<ul>{items}</ul>"

    return f"""
    <body>
        <div aria-hidden="true" class="global-loading-bar" data-visible="false"><div class="global-loading-bar__inner"></div></div>
        <main>
            <h1>Dashboard</h1>
            <section>
                <h2>Check configs: {_fmt(configs["total"])}</h2>
                <p>Enabled {_fmt(configs["enabled"])} · Maintenance {_fmt(configs["maintenance"])} · Disabled {_fmt(configs["disabled"])}</p>
            </section>
            <section>
                <h2>Groups: {_fmt(groups["total"])}</h2>
                {group_rows}
            </section>
            <section>
                <h2>Notifications: {_fmt(notifications["total"])}</h2>
                <p>Active {_fmt(notifications["active"])}</p>
            </section>
        </main>
    </body>
    """


def get_signed_out_body() -> str:
    return f"""
    <body>
        <main>
            <h1>{TITLE}</h1>
            <p class="muted">Sign in via <code>POST /api/auth/login</code> to view the dashboard.</p>
        </main>
    </body>
    """


def get_shell_html(overview: Optional[dict], resolved: ResolvedTheme, preference: ThemePreference) -> str:
    """Generate the complete page; `overview=None` renders the signed-out view."""
    body = get_overview_body(overview) if overview is not None else get_signed_out_body()
    return f"""<!DOCTYPE html>
    <html {render_html_attributes(resolved, preference)}>
    {get_shell_head()}
    {body}
    </html>
    """
