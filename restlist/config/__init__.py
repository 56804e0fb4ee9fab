"""
restlist Configuration

Environment-driven settings.
"""

from __future__ import annotations

import os
from functools import lru_cache

from .schemas import Settings


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return Settings(
        # Service
        service_name=os.getenv("RESTLIST_SERVICE_NAME", "restlist"),
        environment=os.getenv("RESTLIST_ENVIRONMENT", "development"),
        debug=_env_bool("RESTLIST_DEBUG", "false"),
        log_level=os.getenv("RESTLIST_LOG_LEVEL", "INFO").upper(),
        # HTTP retrieval
        request_timeout=float(os.getenv("RESTLIST_REQUEST_TIMEOUT", "10")),
        verify_ssl=_env_bool("RESTLIST_VERIFY_SSL", "true"),
        follow_redirects=_env_bool("RESTLIST_FOLLOW_REDIRECTS", "true"),
        user_agent=os.getenv("RESTLIST_USER_AGENT", "restlist/0.1.0"),
    )


__all__ = [
    "Settings",
    "get_settings",
]
