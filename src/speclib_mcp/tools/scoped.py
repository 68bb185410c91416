from __future__ import annotations

from typing import Annotated, Any, List, Optional

from pydantic import Field

from ..core.client import get_client
from ..core.fields import render
from ..core.locators import scoped_path, spec_path
from ..server import mcp
from .specs import SpecType

Title = Annotated[str, Field(min_length=1, max_length=200)]
Content = Annotated[str, Field(min_length=1, max_length=50000)]


def build_spec_body(
    *,
    title: Optional[str] = None,
    content: Optional[str] = None,
    type: Optional[str] = None,
    tags: Optional[List[str]] = None,
    scope_id: Optional[int] = None,
    is_public: Optional[bool] = None,
    instructions: Optional[str] = None,
) -> dict[str, Any]:
    """
    Request body holding only the fields the caller supplied.
    """
    body: dict[str, Any] = {}
    if title:
        body["title"] = title
    if content:
        body["content"] = content
    if type:
        body["type"] = type
    if tags is not None:
        body["tags"] = tags
    if scope_id is not None:
        body["scopeId"] = scope_id
    if is_public is not None:
        body["isPublic"] = is_public
    if instructions is not None:
        body["instructions"] = instructions
    return body


@mcp.tool()
async def list_scopes() -> str:
    """
    List all scopes. Scope slugs filter search_specs and locate specs with get_scoped_spec.
    """
    scopes = await get_client().get("/api/scopes")
    results = [
        {"id": s.get("id"), "name": s.get("name"), "slug": s.get("slug")}
        for s in (scopes if isinstance(scopes, list) else [])
    ]
    return render(results)


@mcp.tool()
async def get_scoped_spec(
    scope: Annotated[str, Field(min_length=1, description="Scope slug")],
    slug: Annotated[str, Field(min_length=1, description="Spec slug")],
) -> str:
    """
    Get the rendered document of a spec by scope slug and spec slug.
    """
    return render(await get_client().get(scoped_path(scope, slug)))


@mcp.tool()
async def create_spec(
    title: Annotated[Title, Field(description="Spec title")],
    content: Annotated[Content, Field(description="Spec content")],
    type: Annotated[Optional[SpecType], Field(description="Content type (default: TEXT)")] = None,
    tags: Annotated[Optional[List[str]], Field(description="Tags for the spec")] = None,
    scope_id: Annotated[
        Optional[Annotated[int, Field(gt=0)]],
        Field(description="Scope ID to assign the spec to"),
    ] = None,
    is_public: Annotated[Optional[bool], Field(description="Whether the spec is public (default: true)")] = None,
    instructions: Annotated[Optional[str], Field(description="Usage instructions for the spec")] = None,
) -> str:
    """
    Create a new spec. Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("create specs")
    body = build_spec_body(
        title=title,
        content=content,
        type=type,
        tags=tags,
        scope_id=scope_id,
        is_public=is_public,
        instructions=instructions or None,
    )
    return render(await client.post("/api/specs", body))


@mcp.tool()
async def update_spec(
    id: Annotated[int, Field(gt=0, description="Spec ID to update")],
    title: Annotated[Optional[Title], Field(description="New title")] = None,
    content: Annotated[Optional[Content], Field(description="New content")] = None,
    type: Annotated[Optional[SpecType], Field(description="New content type")] = None,
    tags: Annotated[Optional[List[str]], Field(description="New tags")] = None,
    is_public: Annotated[Optional[bool], Field(description="Whether the spec is public")] = None,
    instructions: Annotated[Optional[str], Field(description="New usage instructions")] = None,
) -> str:
    """
    Update fields of an existing spec; omitted fields are left unchanged.
    Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("update specs")
    body = build_spec_body(
        title=title,
        content=content,
        type=type,
        tags=tags,
        is_public=is_public,
        instructions=instructions,
    )
    return render(await client.put(spec_path(id), body))


@mcp.resource("spec://{scope}/{slug}", name="spec", mime_type="text/markdown")
async def spec_resource(scope: str, slug: str) -> str:
    """Spec document by scope slug and spec slug."""
    return render(await get_client().get(scoped_path(scope, slug)))
