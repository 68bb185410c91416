from __future__ import annotations

import re
from urllib.parse import quote

IDENTIFIER_PATTERN = r"^[^.]+(\.[^.]+)*$"
_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def spec_path(spec_id: int) -> str:
    return f"/api/specs/{spec_id}"


def recipe_path(recipe_id: int) -> str:
    return f"/api/recipes/{recipe_id}"


def check_identifier(identifier: str) -> str:
    """
    Reject identifiers with empty segments ('', 'a..b', '.a', 'a.').
    """
    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Invalid spec identifier: {identifier!r}")
    return identifier


def identifier_to_path(identifier: str) -> str:
    """
    'a.b.c' -> 'a/b/c', each segment percent-encoded.
    """
    return "/".join(_segment(part) for part in check_identifier(identifier).split("."))


def resolve_path(identifier: str) -> str:
    return f"/api/specs/resolve/{identifier_to_path(identifier)}"


def scoped_path(scope: str, slug: str) -> str:
    return f"/api/specs/{_segment(scope)}/{_segment(slug)}"
