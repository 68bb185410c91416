from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from .core.client import ApiClient, install_client
from .core.config import SCHEME_SCOPED, get_settings

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "SpecLib stores reusable specs and recipes (bundles of specs). "
    "Use search_specs to find specs, then get_spec or the resolve tool for full content."
)


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    logger.info("speclib-mcp server running (API: %s)", get_settings().api_url)
    yield


mcp = FastMCP("speclib-mcp", instructions=INSTRUCTIONS, lifespan=_lifespan)

from .tools import recipes, specs  # noqa: E402,F401


def register_scheme_tools(scheme: str) -> None:
    """
    Register the spec-document tools and resource for the configured API generation.
    """
    if scheme == SCHEME_SCOPED:
        from .tools import scoped  # noqa: F401
    else:
        from .tools import documents  # noqa: F401


def main() -> None:
    try:
        settings = get_settings()
        logging.basicConfig(
            level=settings.log_level,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        install_client(ApiClient(settings))
        register_scheme_tools(settings.scheme)
        mcp.run(transport="stdio")
    except Exception:
        logger.exception("Fatal: speclib-mcp failed to start")
        sys.exit(1)
