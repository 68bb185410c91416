import json

import httpx
import pytest

from speclib_mcp.core.client import ApiClient
from speclib_mcp.core.config import Settings
from speclib_mcp.tools import documents, recipes, scoped, specs  # noqa: F401

TOOL_MODULES = ("specs", "documents", "scoped", "recipes")


class FakeBackend:
    """
    In-memory stand-in for the SpecLib API, keyed by (method, raw path).
    Every request is recorded, matched or not.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], dict] = {}

    def route(self, method, path, *, status=200, json_body=None, text=None, content_type=None):
        self.routes[(method, path)] = {
            "status": status,
            "json_body": json_body,
            "text": text,
            "content_type": content_type,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode())
        r = self.routes.get(key)
        if r is None:
            return httpx.Response(404, text="")
        if r["json_body"] is not None:
            return httpx.Response(r["status"], json=r["json_body"])
        headers = {"content-type": r["content_type"]} if r["content_type"] else {}
        return httpx.Response(r["status"], text=r["text"] or "", headers=headers)

    def body(self, index=-1):
        return json.loads(self.requests[index].content)


def _install(monkeypatch, settings):
    backend = FakeBackend()
    client = ApiClient(settings, transport=httpx.MockTransport(backend.handler))
    for name in TOOL_MODULES:
        monkeypatch.setattr(f"speclib_mcp.tools.{name}.get_client", lambda: client)
    backend.client = client
    return backend


@pytest.fixture
def backend(monkeypatch):
    return _install(monkeypatch, Settings(api_url="http://speclib.test", api_token="secret-token"))


@pytest.fixture
def anon_backend(monkeypatch):
    return _install(monkeypatch, Settings(api_url="http://speclib.test"))


@pytest.fixture
def scoped_backend(monkeypatch):
    return _install(
        monkeypatch,
        Settings(api_url="http://speclib.test", api_token="secret-token", scheme="scoped"),
    )
