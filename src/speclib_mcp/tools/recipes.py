from __future__ import annotations

from typing import Annotated, Any, List, Optional

from pydantic import Field

from ..core.client import get_client
from ..core.fields import normalize_spec, render
from ..core.locators import recipe_path
from ..server import mcp

MAX_RECIPE_SPECS = 100

RecipeId = Annotated[int, Field(gt=0, description="Recipe ID")]
Name = Annotated[str, Field(min_length=1, max_length=200)]
Description = Annotated[str, Field(max_length=2000)]
Instructions = Annotated[str, Field(max_length=50000)]
SpecIds = Annotated[
    List[Annotated[int, Field(gt=0)]],
    Field(max_length=MAX_RECIPE_SPECS),
]


def build_recipe_body(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    instructions: Optional[str] = None,
    is_public: Optional[bool] = None,
    spec_ids: Optional[List[int]] = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if name:
        body["name"] = name
    if description is not None:
        body["description"] = description
    if instructions is not None:
        body["instructions"] = instructions
    if is_public is not None:
        body["isPublic"] = is_public
    if spec_ids is not None:
        body["specIds"] = spec_ids
    return body


def _normalize_recipe(recipe: Any) -> Any:
    """Decode tags on member specs, wherever the backend nests them."""
    if not isinstance(recipe, dict):
        return recipe

    out = dict(recipe)
    specs = recipe.get("specs")
    if isinstance(specs, list):
        members = []
        for item in specs:
            if isinstance(item, dict) and isinstance(item.get("spec"), dict):
                item = {**item, "spec": normalize_spec(item["spec"])}
            elif isinstance(item, dict):
                item = normalize_spec(item)
            members.append(item)
        out["specs"] = members
    return out


@mcp.tool()
async def list_recipes() -> str:
    """
    List recipes visible to the caller (public recipes plus the token owner's own).
    """
    recipes = await get_client().get("/api/recipes")
    return render(recipes)


@mcp.tool()
async def get_recipe(id: RecipeId) -> str:
    """
    Get a recipe by ID, including all its bundled specs with full content.
    """
    recipe = await get_client().get(recipe_path(id))
    return render(_normalize_recipe(recipe))


@mcp.tool()
async def create_recipe(
    name: Annotated[Name, Field(description="Recipe name")],
    spec_ids: Annotated[SpecIds, Field(description="Ordered IDs of the specs bundled in the recipe")],
    description: Annotated[Optional[Description], Field(description="Short description")] = None,
    instructions: Annotated[
        Optional[Instructions],
        Field(description="Recipe-level instructions for applying the bundled specs"),
    ] = None,
    is_public: Annotated[Optional[bool], Field(description="Whether the recipe is public")] = None,
) -> str:
    """
    Create a recipe bundling existing specs. Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("create recipes")
    body = build_recipe_body(
        name=name,
        description=description,
        instructions=instructions,
        is_public=is_public,
        spec_ids=spec_ids,
    )
    return render(await client.post("/api/recipes", body))


@mcp.tool()
async def update_recipe(
    id: RecipeId,
    name: Annotated[Optional[Name], Field(description="New name")] = None,
    description: Annotated[Optional[Description], Field(description="New description")] = None,
    instructions: Annotated[Optional[Instructions], Field(description="New instructions")] = None,
    is_public: Annotated[Optional[bool], Field(description="Whether the recipe is public")] = None,
    spec_ids: Annotated[Optional[SpecIds], Field(description="Replacement list of spec IDs")] = None,
) -> str:
    """
    Update a recipe; omitted fields are left unchanged.

    The backend decides whether the change applies directly (owner) or is
    filed for review. Requires SPECLIB_API_TOKEN to be configured.
    """
    client = get_client()
    client.require_token("update recipes")
    body = build_recipe_body(
        name=name,
        description=description,
        instructions=instructions,
        is_public=is_public,
        spec_ids=spec_ids,
    )
    return render(await client.put(recipe_path(id), body))
