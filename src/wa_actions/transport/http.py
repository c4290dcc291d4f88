"""
REST HTTP client for the bridge lookup API.
"""

from typing import Any, Optional

import httpx

from wa_actions.errors import TransportError

DEFAULT_BASE_URL = "http://localhost:21465"


class HttpClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: Optional[str] = None, timeout: float = 30.0):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/api",
            headers={"User-Agent": "wa-actions/0.1.0", "Accept": "application/json"},
            timeout=timeout,
        )

    def set_token(self, token: str) -> None:
        self._token = token

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _unwrap(json_data: Any) -> Any:
        """Unwrap the bridge response: { "status": "success", "data": <actual_data> }"""
        if isinstance(json_data, dict) and "status" in json_data and "data" in json_data:
            return json_data["data"]
        return json_data

    async def get(self, path: str) -> Any:
        resp = await self._client.get(path, headers=self._auth_headers())
        if resp.status_code >= 400:
            raise TransportError(f"HTTP {resp.status_code}: {resp.text[:200]}", code="http_error",
                                 details={"status": resp.status_code, "path": path})
        return self._unwrap(resp.json())

    async def get_optional(self, path: str) -> Any:
        """Like get(), but a 404 yields None."""
        resp = await self._client.get(path, headers=self._auth_headers())
        if resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            raise TransportError(f"HTTP {resp.status_code}: {resp.text[:200]}", code="http_error",
                                 details={"status": resp.status_code, "path": path})
        return self._unwrap(resp.json())

    async def close(self) -> None:
        await self._client.aclose()
