from __future__ import annotations

from typing import Annotated, Any, Literal, Optional

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ..core.client import get_client
from ..core.config import SCHEME_SCOPED
from ..core.fields import decode_list_field, normalize_spec, project_scope, render
from ..core.locators import spec_path
from ..server import mcp

SpecType = Literal["TEXT", "YAML", "MARKDOWN"]
SpecId = Annotated[int, Field(gt=0, description="Spec ID")]

NO_RESULTS = "No specs found matching the criteria."


def _matches_scope(spec: dict, scope: str) -> bool:
    s = spec.get("scope")
    if not isinstance(s, dict):
        return False
    wanted = scope.lower()
    return str(s.get("slug") or "").lower() == wanted or str(s.get("name") or "").lower() == wanted


def _matches_query(spec: dict, query: str) -> bool:
    q = query.lower()
    if q in str(spec.get("title") or "").lower():
        return True
    if any(q in str(tag).lower() for tag in decode_list_field(spec.get("tags"))):
        return True
    if q in str(spec.get("identifier") or "").lower():
        return True
    return q in str(spec.get("content") or "").lower()


def _summary(spec: dict, scheme: str) -> dict:
    # Scoped listings leave content out; get_spec returns it.
    if scheme == SCHEME_SCOPED:
        return {
            "id": spec.get("id"),
            "title": spec.get("title"),
            "type": spec.get("type"),
            "slug": spec.get("slug"),
            "scope": project_scope(spec.get("scope")),
            "tags": decode_list_field(spec.get("tags")),
            "instructions": spec.get("instructions") or None,
        }
    return {**spec, "tags": decode_list_field(spec.get("tags"))}


def filter_specs(
    specs: list[dict],
    query: Optional[str] = None,
    scope: Optional[str] = None,
    type: Optional[str] = None,
) -> list[dict]:
    out = specs
    if scope:
        out = [s for s in out if _matches_scope(s, scope)]
    if type:
        out = [s for s in out if s.get("type") == type]
    if query:
        out = [s for s in out if _matches_query(s, query)]
    return out


@mcp.tool()
async def search_specs(
    query: Annotated[
        Optional[str],
        Field(description="Search query - matches title, tags, identifier and content"),
    ] = None,
    scope: Annotated[Optional[str], Field(description="Filter by scope slug or name")] = None,
    type: Annotated[Optional[SpecType], Field(description="Filter by content type")] = None,
) -> str:
    """
    Search for specs in SpecLib. Use get_spec to retrieve a single spec by id.
    """
    client = get_client()
    specs: Any = await client.get("/api/specs")
    if not isinstance(specs, list):
        raise ToolError(f"Unexpected response from /api/specs: {render(specs)[:200]}")
    specs = [s for s in specs if isinstance(s, dict)]

    results = [_summary(s, client.settings.scheme) for s in filter_specs(specs, query, scope, type)]
    if not results:
        return NO_RESULTS
    return render(results)


@mcp.tool()
async def get_spec(id: SpecId) -> str:
    """
    Get the full record of a spec by numeric id, including its content.
    """
    spec = await get_client().get(spec_path(id))
    if isinstance(spec, dict):
        spec = normalize_spec(spec)
    return render(spec)


@mcp.tool()
async def fork_spec(id: SpecId) -> str:
    """
    Fork an existing spec into a new spec owned by the caller.
    Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("fork specs")
    forked = await client.post(f"{spec_path(id)}/fork")
    return render(forked)
