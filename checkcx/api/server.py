import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, FastAPI, Header
from fastapi.responses import HTMLResponse

from checkcx.api.auth import SESSION_COOKIE, is_admin_token, require_admin
from checkcx.api.routers import (
    create_auth_router,
    create_configs_router,
    create_dashboard_router,
    create_groups_router,
    create_notifications_router,
    create_preferences_router,
    create_systems_router,
)
from checkcx.api.shell import get_shell_html
from checkcx.services.color_scheme import prefers_dark_from_client_hint
from checkcx.services.theme_script import resolve_pre_paint

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_shell_router(dashboard_service, theme_store, color_scheme) -> APIRouter:
    router = APIRouter(tags=["Shell"])

    @router.get("/", response_class=HTMLResponse)
    def shell(
        sec_ch_prefers_color_scheme: Optional[str] = Header(default=None),
        session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    ):
        # the hint belongs to this request only; shared state is never updated from it
        hint = prefers_dark_from_client_hint(sec_ch_prefers_color_scheme)
        prefers_dark = hint if hint is not None else bool(color_scheme.matches)
        resolved, preference = resolve_pre_paint(theme_store.get_preference().value, prefers_dark)
        overview = dashboard_service.overview() if is_admin_token(session_token) else None
        html = get_shell_html(overview, resolved, preference)
        # ask the browser to send the color-scheme hint on later requests
        return HTMLResponse(html, headers={"Accept-CH": "Sec-CH-Prefers-Color-Scheme", "Vary": "Sec-CH-Prefers-Color-Scheme"})

    return router


def create_app(container) -> FastAPI:
    """Assemble the FastAPI application from a wired `Container`."""
    app = FastAPI(title="check-cx admin")
    admin = [Depends(require_admin)]

    app.include_router(create_auth_router(), prefix=API_PREFIX)
    app.include_router(create_systems_router(container.config()), prefix=API_PREFIX)
    app.include_router(create_configs_router(container.check_config_service()), prefix=API_PREFIX, dependencies=admin)
    app.include_router(create_groups_router(container.group_service()), prefix=API_PREFIX, dependencies=admin)
    app.include_router(create_notifications_router(container.notification_service()), prefix=API_PREFIX, dependencies=admin)
    app.include_router(create_dashboard_router(container.dashboard_service()), prefix=API_PREFIX, dependencies=admin)
    app.include_router(create_preferences_router(container.theme_store()), prefix=API_PREFIX, dependencies=admin)
    app.include_router(create_shell_router(container.dashboard_service(), container.theme_store(), container.color_scheme()))

    logger.info("API routes mounted under %s", API_PREFIX)
    return app
