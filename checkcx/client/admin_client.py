from typing import Any, Optional

import requests

from checkcx.exceptions import AdminApiError
from checkcx.services.inflight_counter import InflightCounter
from checkcx.services.request_tracking import TrackingPolicy, install_fetch_interceptor


class AdminClient:
    """HTTP client for the admin API.

    The session is instrumented with the fetch interceptor, so every `/api/`
    call made here is counted by `counter` and can drive a `LoadingIndicator`.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        counter: Optional[InflightCounter] = None,
        policy: Optional[TrackingPolicy] = None,
        timeout: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.counter = counter or InflightCounter()
        self.policy = policy or TrackingPolicy(origin=self.base_url)
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        install_fetch_interceptor(self.session, self.counter, self.policy)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise AdminApiError(method, url, original=e) from e

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("detail") if isinstance(body, dict) else resp.text
            raise AdminApiError(method, url, status_code=resp.status_code, detail=str(detail))
        if not resp.content:
            return None
        return resp.json()

    def login(self, password: str) -> str:
        token = self._request("POST", "/api/auth/login", json={"password": password})["access_token"]
        self.session.headers["Authorization"] = f"Bearer {token}"
        return token

    def health(self) -> dict:
        return self._request("GET", "/api/systems/health")

    def dashboard(self) -> dict:
        return self._request("GET", "/api/dashboard/")

    def list_configs(self, q: Optional[str] = None, group: Optional[str] = None, page: int = 1) -> dict:
        """One page: `{rows, total, page, per_page}`."""
        params = {"page": page}
        if q:
            params["q"] = q
        if group:
            params["group"] = group
        return self._request("GET", "/api/configs/", params=params)

    def create_config(self, **fields) -> dict:
        return self._request("POST", "/api/configs/", json=fields)

    def update_config(self, config_id: str, **fields) -> dict:
        return self._request("PUT", f"/api/configs/{config_id}", json=fields)

    def copy_config(self, source_id: str, **fields) -> dict:
        return self._request("POST", "/api/configs/copy", json={"source_id": source_id, **fields})

    def delete_config(self, config_id: str) -> None:
        self._request("DELETE", f"/api/configs/{config_id}")

    def set_enabled(self, config_id: str, enabled: bool) -> dict:
        return self._request("PUT", f"/api/configs/{config_id}/enabled", json={"enabled": enabled})

    def set_maintenance(self, config_id: str, is_maintenance: bool) -> dict:
        return self._request("PUT", f"/api/configs/{config_id}/maintenance", json={"is_maintenance": is_maintenance})

    def list_groups(self) -> list:
        return self._request("GET", "/api/groups/")

    def create_group(self, group_name: str, website_url: str) -> dict:
        return self._request("POST", "/api/groups/", json={"group_name": group_name, "website_url": website_url})

    def update_group(self, group_id: str, group_name: str, website_url: str) -> dict:
        return self._request("PUT", f"/api/groups/{group_id}", json={"group_name": group_name, "website_url": website_url})

    def delete_group(self, group_id: str) -> None:
        self._request("DELETE", f"/api/groups/{group_id}")

    def list_notifications(self) -> list:
        return self._request("GET", "/api/notifications/")

    def create_notification(self, message: str, level: str = "info", is_active: bool = False) -> dict:
        return self._request("POST", "/api/notifications/", json={"message": message, "level": level, "is_active": is_active})

    def toggle_notification(self, notification_id: str) -> dict:
        return self._request("POST", f"/api/notifications/{notification_id}/toggle")

    def delete_notification(self, notification_id: str) -> None:
        self._request("DELETE", f"/api/notifications/{notification_id}")

    def get_theme(self) -> dict:
        return self._request("GET", "/api/preferences/theme")

    def set_theme(self, theme: str) -> dict:
        return self._request("PUT", "/api/preferences/theme", json={"theme": theme})
