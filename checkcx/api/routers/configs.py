from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from checkcx.api.errors import domain_errors
from checkcx.services.check_config_service import CheckConfigService


class ConfigFields(BaseModel):
    name: str
    type: str
    model: str
    endpoint: str
    enabled: bool = True
    is_maintenance: bool = False
    request_header: Optional[Dict[str, str]] = None
    metadata: Optional[Dict[str, Any]] = None
    group_name: Optional[str] = None

    def fields(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "model": self.model,
            "endpoint": self.endpoint,
            "enabled": self.enabled,
            "is_maintenance": self.is_maintenance,
            "request_header": self.request_header,
            "metadata": self.metadata,
            "group_name": self.group_name,
        }


class CreateConfigRequest(ConfigFields):
    api_key: str


class UpdateConfigRequest(ConfigFields):
    update_api_key: bool = False
    api_key: Optional[str] = None


class CopyConfigRequest(UpdateConfigRequest):
    source_id: str


class EnabledRequest(BaseModel):
    enabled: bool


class MaintenanceRequest(BaseModel):
    is_maintenance: bool


def create_configs_router(config_service: CheckConfigService):
    router = APIRouter(prefix="/configs", tags=["Configs"])

    @router.get("/")
    def list_configs(
        q: Optional[str] = None,
        group: Optional[str] = None,
        # kept as text: an unparseable page falls back to the first page
        page: str = "1",
    ):
        result = config_service.list_configs(q=q, group=group, page=page)
        return {
            "rows": [asdict(c) for c in result.rows],
            "total": result.total,
            "page": result.page,
            "per_page": result.per_page,
        }

    @router.post("/", status_code=201)
    def create_config(req: CreateConfigRequest):
        with domain_errors():
            return asdict(config_service.create_config(api_key=req.api_key, **req.fields()))

    @router.post("/copy", status_code=201)
    def copy_config(req: CopyConfigRequest):
        with domain_errors():
            cfg = config_service.copy_config(
                req.source_id,
                update_api_key=req.update_api_key,
                api_key=req.api_key,
                **req.fields(),
            )
            return asdict(cfg)

    @router.get("/{config_id}")
    def get_config(config_id: str):
        with domain_errors():
            return asdict(config_service.get_config(config_id))

    @router.put("/{config_id}")
    def update_config(config_id: str, req: UpdateConfigRequest):
        with domain_errors():
            cfg = config_service.update_config(
                config_id,
                update_api_key=req.update_api_key,
                api_key=req.api_key,
                **req.fields(),
            )
            return asdict(cfg)

    @router.delete("/{config_id}")
    def delete_config(config_id: str):
        with domain_errors():
            config_service.delete_config(config_id)
        return {"status": "deleted"}

    @router.put("/{config_id}/enabled")
    def set_enabled(config_id: str, req: EnabledRequest):
        with domain_errors():
            return asdict(config_service.set_enabled(config_id, req.enabled))

    @router.put("/{config_id}/maintenance")
    def set_maintenance(config_id: str, req: MaintenanceRequest):
        with domain_errors():
            return asdict(config_service.set_maintenance(config_id, req.is_maintenance))

    return router
