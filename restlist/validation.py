"""
Configuration-time form validation.

These checks give fast feedback while a parameter is being configured.
None of them touches the network: expression checks only compile the
expression, endpoint checks only look at the URL shape.

Bad input never raises; it comes back as FormValidation.error(...).
Missing permissions on the endpoint and expression checks raise
PermissionDeniedError, as the host would reject the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from restlist.credentials import (
    CredentialLookup,
    Permission,
    PermissionChecker,
    check_permission,
)
from restlist.errors import ExpressionSyntaxError, InvalidPatternError
from restlist.extraction import validate_syntax
from restlist.filtering import compile_filter
from restlist.models import ENDPOINT_URL_PATTERN, MimeType

logger = logging.getLogger(__name__)

ENDPOINT_EMPTY = "The REST endpoint must not be empty"
ENDPOINT_URL = "The REST endpoint must be a valid http(s) URL"
EXPRESSION_EMPTY = "The value expression must not be empty"
UNKNOWN_MIME = "Unknown mime type, expected JSON or XML"
CREDENTIALS_NOT_FOUND = "Cannot find currently selected credentials"


class ValidationKind(str, Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class FormValidation:
    """Outcome of one form field check."""

    kind: ValidationKind = ValidationKind.OK
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> FormValidation:
        return cls(ValidationKind.OK, message)

    @classmethod
    def error(cls, message: str) -> FormValidation:
        return cls(ValidationKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind is ValidationKind.OK

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


def _require_configure(permissions: PermissionChecker, context: str | None) -> None:
    if context is None:
        check_permission(permissions, None, Permission.ADMINISTER)
    else:
        check_permission(permissions, context, Permission.CONFIGURE)


def check_rest_endpoint(
    value: str | None,
    context: str | None,
    permissions: PermissionChecker,
) -> FormValidation:
    """Check the endpoint URL is present and looks like http(s)://..."""
    _require_configure(permissions, context)

    if not value or not value.strip():
        return FormValidation.error(ENDPOINT_EMPTY)
    if ENDPOINT_URL_PATTERN.match(value.strip()):
        return FormValidation.ok()
    return FormValidation.error(ENDPOINT_URL)


def check_value_expression(
    value: str | None,
    mime_type: MimeType | str | None,
    context: str | None,
    permissions: PermissionChecker,
) -> FormValidation:
    """Check the expression compiles as JSONPath or XPath for the mime type."""
    _require_configure(permissions, context)

    if not value or not value.strip():
        return FormValidation.error(EXPRESSION_EMPTY)

    try:
        mime = MimeType.parse(mime_type) if mime_type is not None else None
    except ValueError:
        mime = None
    if mime is None:
        return FormValidation.error(UNKNOWN_MIME)

    try:
        validate_syntax(value, mime)
    except ExpressionSyntaxError as e:
        logger.debug(f"[validation] Rejected expression: {e.message}")
        return FormValidation.error(e.message)
    return FormValidation.ok()


def check_filter(value: str | None) -> FormValidation:
    """Check the filter compiles as a regular expression. Blank means ".*"."""
    try:
        compile_filter(value)
    except InvalidPatternError as e:
        return FormValidation.error(e.message)
    return FormValidation.ok()


def check_credential_id(
    value: str | None,
    context: str | None,
    permissions: PermissionChecker,
    credentials: CredentialLookup,
) -> FormValidation:
    """
    Check the selected credential id exists.

    Callers who could not see credentials anyway get ok, so the check
    does not reveal which ids exist.
    """
    if context is None:
        if not permissions.has_permission(None, Permission.ADMINISTER):
            return FormValidation.ok()
    elif not (
        permissions.has_permission(context, Permission.EXTENDED_READ)
        or permissions.has_permission(context, Permission.USE_ITEM)
    ):
        return FormValidation.ok()

    if not value or not value.strip():
        return FormValidation.ok()

    if credentials.find_credential(value.strip()) is None:
        return FormValidation.error(CREDENTIALS_NOT_FOUND)
    return FormValidation.ok()
