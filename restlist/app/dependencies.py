"""
Dependency Injection for restlist.

Provides singleton instances of the credential store, permission
checker and resolution service. Hosts embedding the app replace them
with configure_services() at startup.
"""
from __future__ import annotations

import logging
from typing import Optional

from restlist.config import get_settings
from restlist.credentials import (
    AllowAllPermissions,
    CredentialLookup,
    InMemoryCredentialStore,
    PermissionChecker,
)
from restlist.http import ValueFetcher
from restlist.service import RestValueService

logger = logging.getLogger(__name__)

# Global instances (initialized on first access)
_credentials: Optional[CredentialLookup] = None
_permissions: Optional[PermissionChecker] = None
_service: Optional[RestValueService] = None


def get_credentials() -> CredentialLookup:
    """Get the credential lookup (empty in-memory store by default)."""
    global _credentials
    if _credentials is None:
        _credentials = InMemoryCredentialStore()
    return _credentials


def get_permissions() -> PermissionChecker:
    """Get the permission checker (allow-all by default)."""
    global _permissions
    if _permissions is None:
        _permissions = AllowAllPermissions()
    return _permissions


def get_service() -> RestValueService:
    """Get the resolution service configured from settings."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = RestValueService(ValueFetcher.from_settings(settings))
        logger.info(
            f"Resolution service ready (timeout={settings.request_timeout}s, "
            f"verify_ssl={settings.verify_ssl})"
        )
    return _service


def configure_services(
    *,
    credentials: CredentialLookup | None = None,
    permissions: PermissionChecker | None = None,
    service: RestValueService | None = None,
) -> None:
    """Install host-supplied capabilities. None leaves the current one in place."""
    global _credentials, _permissions, _service
    if credentials is not None:
        _credentials = credentials
    if permissions is not None:
        _permissions = permissions
    if service is not None:
        _service = service


def reset_services() -> None:
    """Drop all singletons (used on shutdown and in tests)."""
    global _credentials, _permissions, _service
    _credentials = None
    _permissions = None
    _service = None
