import inspect

import anyio

from speclib_mcp.server import mcp, register_scheme_tools

SHARED_TOOLS = {
    "search_specs",
    "get_spec",
    "fork_spec",
    "list_recipes",
    "get_recipe",
    "create_recipe",
    "update_recipe",
}


async def _list_tools_payload():
    """
    Fetch tool schemas through the public FastMCP API, keyed by tool name.
    """
    res = mcp.list_tools()
    if inspect.isawaitable(res):
        res = await res

    payload = {}
    for t in res:
        payload[t.name] = {
            "description": (t.description or "").strip(),
            "inputSchema": t.inputSchema,
        }
    return payload


def _props(tools, name):
    return tools[name]["inputSchema"].get("properties", {})


def test_registered_tools():
    register_scheme_tools("identifier")
    register_scheme_tools("scoped")
    tools = anyio.run(_list_tools_payload)

    assert SHARED_TOOLS <= set(tools)
    assert {"resolve_spec", "list_scopes", "get_scoped_spec", "create_spec", "update_spec"} <= set(tools)
    assert all(tools[name]["description"] for name in tools)


def test_id_bounds_and_required_fields():
    tools = anyio.run(_list_tools_payload)

    for name in ("get_spec", "fork_spec", "get_recipe"):
        schema = tools[name]["inputSchema"]
        assert schema["required"] == ["id"]
        assert schema["properties"]["id"]["type"] == "integer"
        assert schema["properties"]["id"]["exclusiveMinimum"] == 0

    assert sorted(tools["create_recipe"]["inputSchema"]["required"]) == ["name", "spec_ids"]
    assert tools["resolve_spec"]["inputSchema"]["required"] == ["identifier"]


def test_search_type_is_enumerated():
    tools = anyio.run(_list_tools_payload)

    type_schema = _props(tools, "search_specs")["type"]
    enums = [opt.get("enum") for opt in type_schema.get("anyOf", [type_schema]) if opt.get("enum")]
    assert enums == [["TEXT", "YAML", "MARKDOWN"]]
    assert "required" not in tools["search_specs"]["inputSchema"]
