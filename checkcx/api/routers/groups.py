from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel

from checkcx.api.errors import domain_errors
from checkcx.services.group_service import GroupService


class GroupRequest(BaseModel):
    group_name: str
    website_url: str


def create_groups_router(group_service: GroupService):
    router = APIRouter(prefix="/groups", tags=["Groups"])

    @router.get("/")
    def list_groups():
        return [dict(asdict(g), config_count=count) for g, count in group_service.list_groups_with_counts()]

    @router.post("/", status_code=201)
    def create_group(req: GroupRequest):
        with domain_errors():
            return asdict(group_service.create_group(req.group_name, req.website_url))

    @router.put("/{group_id}")
    def update_group(group_id: str, req: GroupRequest):
        with domain_errors():
            return asdict(group_service.update_group(group_id, req.group_name, req.website_url))

    @router.delete("/{group_id}")
    def delete_group(group_id: str):
        with domain_errors():
            group_service.delete_group(group_id)
        return {"status": "deleted"}

    return router
