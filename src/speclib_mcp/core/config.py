from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:3000"

SCHEME_IDENTIFIER = "identifier"
SCHEME_SCOPED = "scoped"
SCHEMES = (SCHEME_IDENTIFIER, SCHEME_SCOPED)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_token: Optional[str] = None
    scheme: str = SCHEME_IDENTIFIER
    log_level: str = "INFO"

    @property
    def has_token(self) -> bool:
        return bool(self.api_token)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from SPECLIB_* environment variables.
    """
    env = os.environ if environ is None else environ

    api_url = (env.get("SPECLIB_API_URL") or DEFAULT_API_URL).rstrip("/")
    scheme = (env.get("SPECLIB_API_SCHEME") or SCHEME_IDENTIFIER).strip().lower()
    if scheme not in SCHEMES:
        raise ConfigError(
            f"SPECLIB_API_SCHEME must be one of {', '.join(SCHEMES)} (got {scheme!r})"
        )

    return Settings(
        api_url=api_url,
        api_token=env.get("SPECLIB_API_TOKEN") or None,
        scheme=scheme,
        log_level=(env.get("SPECLIB_LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
