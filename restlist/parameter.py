"""
REST list parameter definition.

A choice parameter whose choices come from a REST endpoint. The values
are resolved lazily, once per definition instance, and cached for the
lifetime of the instance. There is no refresh: build a new definition
to resolve again.

Concurrency:
    Concurrent first calls to get_values() on the same instance share a
    single resolution. The fill is guarded by an asyncio.Lock and an
    explicit resolved flag, so a resolution that legitimately yields no
    values is not repeated.

Usage:
    definition = RestListParameterDefinition(
        name="COLOR",
        description="Pick a color",
        rest_endpoint="https://api.example.com/colors",
        credential_id="",
        mime_type=MimeType.APPLICATION_JSON,
        value_expression="$.colors[*]",
    )

    choices = await definition.get_values()
    if definition.error_msg:
        print(f"Could not load choices: {definition.error_msg}")

    value = definition.create_value("red")  # raises ParameterValueError if invalid
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from restlist.credentials import CredentialLookup
from restlist.errors import ParameterValueError
from restlist.models import DEFAULT_FILTER, EndpointSpec, MimeType
from restlist.service import RestValueService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RestListParameterValue:
    """A submitted choice for a RestListParameterDefinition."""

    name: str
    value: str
    description: str = ""


class RestListParameterDefinition:
    """
    Choice parameter backed by a REST endpoint.

    Attributes:
        name: Parameter name
        description: Human-readable description
        endpoint: Resolved EndpointSpec (url, credential, mime, expression, filter)
        default_value: Configured default choice, may be blank
    """

    def __init__(
        self,
        name: str,
        description: str,
        rest_endpoint: str,
        credential_id: str | None,
        mime_type: MimeType | str,
        value_expression: str,
        filter: str | None = DEFAULT_FILTER,
        default_value: str | None = "",
        *,
        credentials: CredentialLookup | None = None,
        service: RestValueService | None = None,
    ):
        """
        Initialize the definition.

        Args:
            name: Parameter name
            description: Human-readable description
            rest_endpoint: http(s) URL of the endpoint
            credential_id: Id of the credential to attach (blank = anonymous)
            mime_type: Declared body type
            value_expression: JSONPath or XPath selecting the values
            filter: Full-match regex applied to values (blank = ".*")
            default_value: Default choice (blank = none)
            credentials: Credential lookup supplied by the host
            service: Resolution service (default: RestValueService())

        Raises:
            pydantic.ValidationError: If the endpoint configuration is invalid
        """
        self._name = name
        self._description = description or ""
        self._endpoint = EndpointSpec(
            url=rest_endpoint,
            credential_id=credential_id,
            mime_type=mime_type,
            value_expression=value_expression,
            filter=filter,
        )
        self._default_value = default_value.strip() if default_value and default_value.strip() else ""
        self._credentials = credentials
        self._service = service or RestValueService()

        # Resolved state, filled once by get_values()
        self._values: tuple[str, ...] = ()
        self._error_msg = ""
        self._resolved = False
        self._lock = asyncio.Lock()

    # ==================== Configuration ====================

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def endpoint(self) -> EndpointSpec:
        return self._endpoint

    @property
    def rest_endpoint(self) -> str:
        return self._endpoint.url

    @property
    def credential_id(self) -> str:
        return self._endpoint.credential_id

    @property
    def mime_type(self) -> MimeType:
        return self._endpoint.mime_type

    @property
    def value_expression(self) -> str:
        return self._endpoint.value_expression

    @property
    def filter(self) -> str:
        return self._endpoint.filter

    @property
    def default_value(self) -> str:
        return self._default_value

    # ==================== Resolved State ====================

    @property
    def values(self) -> tuple[str, ...]:
        """Cached values (empty until resolved or after a failed resolution)."""
        return self._values

    @property
    def error_msg(self) -> str:
        """Error of the last resolution, "" on success or before resolution."""
        return self._error_msg

    @property
    def resolved(self) -> bool:
        return self._resolved

    async def get_values(self) -> tuple[str, ...]:
        """
        Resolve the choices on first call and return the cached values.

        Never raises for resolution failures: on error the values are
        empty and error_msg holds the reason.
        """
        if self._resolved:
            return self._values

        async with self._lock:
            # Another caller may have filled the cache while we waited
            if self._resolved:
                return self._values

            credential = None
            if self.credential_id and self._credentials is not None:
                credential = self._credentials.find_credential(self.credential_id)

            logger.info(f"[parameter:{self._name}] Resolving values from {self.rest_endpoint}")
            container = await self._service.get(self._endpoint, credential)

            self._error_msg = container.error_msg
            self._values = container.value
            self._resolved = True

            if container.is_error:
                logger.warning(f"[parameter:{self._name}] Resolution failed: {container.error_msg}")
            else:
                logger.info(f"[parameter:{self._name}] Cached {len(self._values)} value(s)")

        return self._values

    # ==================== Validation ====================

    def is_member(self, candidate: str) -> bool:
        """Whether candidate is one of the cached values. False until resolved."""
        return candidate in self._values

    def is_valid(self, value: RestListParameterValue) -> bool:
        return self.is_member(value.value)

    def create_value(self, value: str) -> RestListParameterValue:
        """
        Create a parameter value for a submitted choice.

        Raises:
            ParameterValueError: If value is not one of the cached values
        """
        parameter_value = RestListParameterValue(
            name=self._name,
            value=value,
            description=self._description,
        )
        self._check_value(parameter_value)
        return parameter_value

    def _check_value(self, value: RestListParameterValue) -> None:
        if not self.is_valid(value):
            logger.warning(f"[parameter:{self._name}] Rejected value '{value.value}'")
            raise ParameterValueError(self._name, value.value)

    def __repr__(self) -> str:
        return (
            f"RestListParameterDefinition(name={self._name!r}, "
            f"endpoint={self.rest_endpoint!r}, "
            f"mime_type={self.mime_type.value!r}, "
            f"resolved={self._resolved})"
        )
