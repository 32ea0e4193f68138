from fastapi import APIRouter
from pydantic import BaseModel

from checkcx.services.theme_store import ThemeStore


class ThemeRequest(BaseModel):
    theme: str


def create_preferences_router(theme_store: ThemeStore):
    router = APIRouter(prefix="/preferences", tags=["Preferences"])

    def _snapshot():
        return {
            "theme": theme_store.get_preference().value,
            "resolved_theme": theme_store.get_resolved_theme().value,
        }

    @router.get("/theme")
    def get_theme():
        return _snapshot()

    @router.put("/theme")
    def set_theme(req: ThemeRequest):
        # unrecognized values normalize to "system"
        theme_store.set_preference(req.theme)
        return _snapshot()

    return router
