"""
Exceptions raised inside the resolution pipeline.

Every stage of fetch -> parse -> extract -> filter raises a subclass of
RestListError. RestValueService catches them at its boundary and turns
them into ResultContainer.error(...), so callers of resolve never see
these directly.

ParameterValueError is the exception the host sees when a submitted
choice is not part of the resolved value set.
"""

from __future__ import annotations


# =============================================================================
# Resolution Errors
# =============================================================================


class RestListError(Exception):
    """Base exception for resolution failures."""

    def __init__(self, message: str, *, detail: str = ""):
        super().__init__(message)
        self.detail = detail

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        return self.message


class NetworkError(RestListError):
    """Raised when the endpoint cannot be reached or the request times out."""

    def __init__(self, message: str, *, url: str, timeout: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.url = url
        self.timeout = timeout


class HttpStatusError(RestListError):
    """Raised when the endpoint answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int,
        reason: str = "",
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.response_body = response_body


class ParseError(RestListError):
    """Raised when the body is not valid for the declared mime type."""


class ExpressionSyntaxError(RestListError):
    """Raised when a JSONPath or XPath expression does not compile."""

    def __init__(self, message: str, *, expression: str, **kwargs):
        super().__init__(message, **kwargs)
        self.expression = expression


class EvaluationError(RestListError):
    """Raised when a valid expression cannot be applied to the document."""

    def __init__(self, message: str, *, expression: str, **kwargs):
        super().__init__(message, **kwargs)
        self.expression = expression


class InvalidPatternError(RestListError):
    """Raised when the filter is not a valid regular expression."""

    def __init__(self, message: str, *, pattern: str, **kwargs):
        super().__init__(message, **kwargs)
        self.pattern = pattern


# =============================================================================
# Host-facing Errors
# =============================================================================


class ParameterValueError(ValueError):
    """Raised when a submitted value is not one of the resolved choices."""

    def __init__(self, parameter_name: str, value: str):
        super().__init__(
            f"Value '{value}' is not a valid choice for parameter '{parameter_name}'"
        )
        self.parameter_name = parameter_name
        self.value = value


class PermissionDeniedError(Exception):
    """Raised when the caller lacks a permission required by a form check."""

    def __init__(self, permission: str, context: str | None = None):
        target = context if context is not None else "the server"
        super().__init__(f"Missing permission '{permission}' on {target}")
        self.permission = permission
        self.context = context
