from __future__ import annotations

import json
from typing import Any, List, Optional


def decode_list_field(value: Any) -> List[Any]:
    """
    Decode a tags/parameters field into a list.

    The backend sends these either as arrays or as JSON-encoded strings.
    Anything that does not decode to a list becomes [].
    """
    if not value:
        return []
    if isinstance(value, list):
        return value
    if not isinstance(value, str):
        return []
    try:
        decoded = json.loads(value)
    except ValueError:
        return []
    return decoded if isinstance(decoded, list) else []


def project_scope(scope: Any) -> Optional[dict]:
    if not isinstance(scope, dict):
        return None
    return {"name": scope.get("name"), "slug": scope.get("slug")}


def normalize_spec(spec: dict) -> dict:
    """Full spec record with list fields decoded."""
    out = dict(spec)
    out["tags"] = decode_list_field(spec.get("tags"))
    if "parameters" in spec:
        out["parameters"] = decode_list_field(spec.get("parameters"))
    if "scope" in spec:
        out["scope"] = project_scope(spec.get("scope"))
    return out


def render(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)
