"""
Credential lookup and permission capabilities.

The host environment owns credentials and permissions; restlist only
consumes them through these protocols. The in-memory implementations
back the HTTP service and the tests.

Usage:
    store = InMemoryCredentialStore([
        TokenCredential(id="api-token", token="..."),
    ])
    credential = store.find_credential("api-token")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Protocol, runtime_checkable

from restlist.errors import PermissionDeniedError
from restlist.models import Credential

logger = logging.getLogger(__name__)


class Permission(str, Enum):
    """Permissions consulted by the configuration form checks."""

    ADMINISTER = "administer"
    CONFIGURE = "item.configure"
    EXTENDED_READ = "item.extended_read"
    USE_ITEM = "credentials.use_item"


@runtime_checkable
class CredentialLookup(Protocol):
    """Protocol for looking up credentials by id."""

    def find_credential(self, credential_id: str) -> Credential | None:
        """Return the credential, or None if absent or not visible."""
        ...


@runtime_checkable
class PermissionChecker(Protocol):
    """Protocol for checking caller permissions on a context (None = server)."""

    def has_permission(self, context: str | None, permission: Permission) -> bool:
        ...


def check_permission(
    checker: PermissionChecker,
    context: str | None,
    permission: Permission,
) -> None:
    """
    Require a permission.

    Raises:
        PermissionDeniedError: If the checker denies it
    """
    if not checker.has_permission(context, permission):
        logger.warning(f"[permissions] Denied {permission.value} on {context or 'server'}")
        raise PermissionDeniedError(permission.value, context)


class InMemoryCredentialStore:
    """Credential store backed by a dict keyed by credential id."""

    def __init__(self, credentials: Iterable[Credential] = ()):
        self._credentials: dict[str, Credential] = {c.id: c for c in credentials}

    def find_credential(self, credential_id: str) -> Credential | None:
        if not credential_id:
            return None
        return self._credentials.get(credential_id)


class AllowAllPermissions:
    """Grants every permission. Used when the host does no access control."""

    def has_permission(self, context: str | None, permission: Permission) -> bool:
        return True


class StaticPermissions:
    """
    Fixed permission grants.

    Grants are keyed by context; the None key holds server-wide grants.
    """

    def __init__(self, grants: dict[str | None, Iterable[Permission]] | None = None):
        self._grants = {
            context: frozenset(permissions)
            for context, permissions in (grants or {}).items()
        }

    def has_permission(self, context: str | None, permission: Permission) -> bool:
        return permission in self._grants.get(context, frozenset())
