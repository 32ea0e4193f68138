import pytest
from fastapi import HTTPException, Response

from checkcx.api.auth import SESSION_COOKIE
from checkcx.api.routers.auth import LoginRequest, create_auth_router


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def test_login_503_when_admin_token_missing(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    endpoint = _get_endpoint(create_auth_router(), "/auth/login", "POST")

    with pytest.raises(HTTPException) as exc:
        endpoint(LoginRequest(password="any"), Response())
    assert exc.value.status_code == 503
    assert exc.value.detail == "ADMIN_TOKEN not configured"


def test_login_401_on_wrong_password(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    endpoint = _get_endpoint(create_auth_router(), "/auth/login", "POST")

    with pytest.raises(HTTPException) as exc:
        endpoint(LoginRequest(password="wrong"), Response())
    assert exc.value.status_code == 401
    assert exc.value.detail == "Unauthorized"


def test_login_success_returns_token_and_sets_cookie(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    endpoint = _get_endpoint(create_auth_router(), "/auth/login", "POST")
    response = Response()

    assert endpoint(LoginRequest(password="secret"), response) == {"access_token": "secret"}
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{SESSION_COOKIE}=secret")
    assert "httponly" in cookie.lower()


def test_logout_clears_cookie():
    endpoint = _get_endpoint(create_auth_router(), "/auth/logout", "POST")
    response = Response()

    assert endpoint(response) == {"status": "signed out"}
    assert response.headers["set-cookie"].startswith(f'{SESSION_COOKIE}=""')


def test_login_401_on_non_ascii_password(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    endpoint = _get_endpoint(create_auth_router(), "/auth/login", "POST")

    with pytest.raises(HTTPException) as exc:
        endpoint(LoginRequest(password="café"), Response())
    assert exc.value.status_code == 401
