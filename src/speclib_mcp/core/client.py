from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Optional

import httpx
from mcp.server.fastmcp.exceptions import ToolError

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Non-2xx response from the SpecLib backend.
    """

    def __init__(self, status: int, detail: str) -> None:
        self.status = status
        self.detail = detail
        super().__init__(f"API {status}: {detail}")


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown Status"


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "").lower()


class ApiClient:
    """
    Thin async wrapper around the SpecLib REST API.

    One request per call, no retries. JSON responses are decoded, anything
    else (e.g. a rendered markdown document) is returned as text unchanged.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.settings.api_url

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def require_token(self, action: str) -> None:
        if not self.settings.has_token:
            raise ToolError(
                f"SPECLIB_API_TOKEN environment variable is required to {action}."
            )

    async def call(self, path: str, method: str = "GET", body: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        with_body = body is not None

        logger.debug("%s %s", method, url)
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.request(
                method,
                url,
                headers=self._headers(with_body),
                json=body if with_body else None,
            )

        if not response.is_success:
            detail = response.text.strip() or response.reason_phrase or _reason(response.status_code)
            logger.warning("backend returned %s for %s %s", response.status_code, method, path)
            raise ApiError(response.status_code, detail)

        if _is_json(response):
            return response.json()
        return response.text

    async def get(self, path: str) -> Any:
        return await self.call(path)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.call(path, "POST", body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.call(path, "PUT", body)


_installed: Optional[ApiClient] = None


def install_client(client: ApiClient) -> None:
    global _installed
    _installed = client


def get_client() -> ApiClient:
    """
    Client installed at startup, or one built from the environment settings.
    """
    if _installed is not None:
        return _installed
    return ApiClient(get_settings())
