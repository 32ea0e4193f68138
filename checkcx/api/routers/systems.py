from fastapi import APIRouter, Depends
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from checkcx.api.auth import require_admin

# values rendered through `_mask_url` so embedded credentials never leave the process
URL_KEYS = ("DATABASE_URL",)


def _mask_url(value: str) -> str:
    try:
        return make_url(value).render_as_string(hide_password=True)
    except ArgumentError:
        return "***"


def create_systems_router(container_env: dict):
    """Create systems router with access to container environment config."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/config", dependencies=[Depends(require_admin)])
    def get_config():
        """Return current environment configuration values, passwords masked."""
        env = {}
        for key, value in container_env.items():
            if value is None:
                env[key] = None
            elif key in URL_KEYS:
                env[key] = _mask_url(str(value))
            else:
                env[key] = str(value)
        return {"environment": env}

    return router
