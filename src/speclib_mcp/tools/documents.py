from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..core.client import get_client
from ..core.fields import render
from ..core.locators import IDENTIFIER_PATTERN, resolve_path, spec_path
from ..server import mcp

Identifier = Annotated[
    str,
    Field(
        min_length=1,
        max_length=200,
        pattern=IDENTIFIER_PATTERN,
        description="Dotted spec identifier, e.g. 'acme.backend.logging'",
    ),
]

Document = Annotated[
    str,
    Field(
        min_length=1,
        max_length=100000,
        description=(
            "Full spec document: a YAML front-matter preamble between '---' lines "
            "(schema, id, version, title) followed by the markdown body"
        ),
    ),
]


@mcp.tool()
async def resolve_spec(identifier: Identifier) -> str:
    """
    Get the rendered, ready-to-use document of a spec by its dotted identifier.
    """
    return render(await get_client().get(resolve_path(identifier)))


@mcp.tool()
async def create_spec(content: Document) -> str:
    """
    Create a new spec from a complete document.

    The preamble should carry the schema tag, the dotted id, a version and a
    title; the backend validates it. Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("create specs")
    return render(await client.post("/api/specs", {"content": content}))


@mcp.tool()
async def update_spec(
    id: Annotated[int, Field(gt=0, description="Spec ID to update")],
    content: Document,
) -> str:
    """
    Replace a spec with a new version of its complete document.
    Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("update specs")
    return render(await client.put(spec_path(id), {"content": content}))


@mcp.resource("spec://{identifier}", name="spec", mime_type="text/markdown")
async def spec_resource(identifier: str) -> str:
    """Spec document by dotted identifier."""
    return render(await get_client().get(resolve_path(identifier)))
