"""
Configuration Schemas for restlist.

Pydantic model for service settings, loaded from RESTLIST_* environment
variables by restlist.config.get_settings().
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """
    Service and HTTP retrieval settings.

    The request timeout is the only bound on a resolution: there are no
    retries, so a slow endpoint fails after `request_timeout` seconds.
    """

    # Service identity
    service_name: str = "restlist"
    environment: str = "development"
    debug: bool = False
    log_level: str = Field("INFO", description="Root logging level")

    # HTTP retrieval
    request_timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
    follow_redirects: bool = Field(True, description="Follow HTTP redirects")
    user_agent: str = Field("restlist/0.1.0", description="User-Agent header value")
