"""Application configuration and constants.

Upstream settings are read from ``UPSTREAM_*`` variables; the older
``MIROS_API_KEY``, ``MIROS_API_URL`` and ``MIROS_INTEGRATION_ID`` names are
still honoured when the new ones are unset.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Tuple

DEFAULT_UPSTREAM_URL = "https://api.miros.services/graphql"
DEFAULT_INTEGRATION_ID = "fb97f7d4-fe95-402f-a81a-402cb062eaa3"


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing."""


def _get_env(env: Mapping[str, str], name: str, default: str, *fallbacks: str) -> str:
    for key in (name, *fallbacks):
        value = env.get(key)
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class Settings:
    """Immutable settings, built once at process start and passed around explicitly."""

    upstream_api_key: str
    upstream_url: str = DEFAULT_UPSTREAM_URL
    integration_id: str = DEFAULT_INTEGRATION_ID
    upstream_timeout_seconds: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        api_key = _get_env(env, "UPSTREAM_API_KEY", "", "MIROS_API_KEY").strip()
        if not api_key:
            raise ConfigError("UPSTREAM_API_KEY is not set; the gateway cannot authenticate upstream")
        origins = tuple(
            origin.strip()
            for origin in _get_env(env, "CORS_ORIGINS", "*").split(",")
            if origin.strip()
        )
        return cls(
            upstream_api_key=api_key,
            upstream_url=_get_env(env, "UPSTREAM_API_URL", DEFAULT_UPSTREAM_URL, "MIROS_API_URL"),
            integration_id=_get_env(env, "UPSTREAM_INTEGRATION_ID", DEFAULT_INTEGRATION_ID, "MIROS_INTEGRATION_ID"),
            upstream_timeout_seconds=float(_get_env(env, "UPSTREAM_TIMEOUT_SECONDS", "30")),
            host=_get_env(env, "HOST", "0.0.0.0"),
            port=int(_get_env(env, "PORT", "3000")),
            cors_origins=origins or ("*",),
            log_level=_get_env(env, "LOG_LEVEL", "INFO"),
        )
