from unittest.mock import Mock

import pytest
from fastapi import HTTPException

from checkcx.api.routers.groups import GroupRequest, create_groups_router
from checkcx.domain.group import Group
from checkcx.exceptions import DuplicateRecordError


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def test_list_groups_includes_config_counts():
    group = Group(id="g1", group_name="alpha", website_url="https://a.example.com")
    service = Mock(list_groups_with_counts=Mock(return_value=[(group, 2), (Group(id="g2", group_name="beta"), None)]))
    endpoint = _get_endpoint(create_groups_router(service), "/groups/", "GET")

    result = endpoint()

    assert result[0] == {
        "id": "g1",
        "group_name": "alpha",
        "website_url": "https://a.example.com",
        "created_at": None,
        "updated_at": None,
        "config_count": 2,
    }
    assert result[1]["config_count"] is None


def test_duplicate_group_is_409():
    service = Mock(create_group=Mock(side_effect=DuplicateRecordError("group_info", "group_name", "alpha")))
    endpoint = _get_endpoint(create_groups_router(service), "/groups/", "POST")

    with pytest.raises(HTTPException) as exc:
        endpoint(GroupRequest(group_name="alpha", website_url="https://a.example.com"))
    assert exc.value.status_code == 409
    assert exc.value.detail == "record already exists"


def test_update_and_delete():
    service = Mock(update_group=Mock(return_value=Group(id="g1", group_name="beta")))
    router = create_groups_router(service)

    result = _get_endpoint(router, "/groups/{group_id}", "PUT")("g1", GroupRequest(group_name="beta", website_url="https://b.example.com"))
    assert result["group_name"] == "beta"
    service.update_group.assert_called_once_with("g1", "beta", "https://b.example.com")

    assert _get_endpoint(router, "/groups/{group_id}", "DELETE")("g1") == {"status": "deleted"}
