"""
Data models for REST list resolution.

EndpointSpec describes one resolvable query. Credentials are looked up
by id through restlist.credentials and attached by the fetcher.

Security:
    Secret fields use SecretStr to prevent accidental logging
    of credentials. Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

if TYPE_CHECKING:
    from restlist.extraction import ExtractionStrategy

ENDPOINT_URL_PATTERN = re.compile(r"^http(s)?://.+")
DEFAULT_FILTER = ".*"


class MimeType(str, Enum):
    """Declared content type of the endpoint body."""

    APPLICATION_JSON = "application/json"
    APPLICATION_XML = "application/xml"

    @property
    def strategy(self) -> ExtractionStrategy:
        """Parse/evaluate strategy for this mime type."""
        from restlist.extraction import STRATEGIES

        return STRATEGIES[self]

    @property
    def display_name(self) -> str:
        return "JSON" if self is MimeType.APPLICATION_JSON else "XML"

    @classmethod
    def parse(cls, value: str | MimeType) -> MimeType:
        """
        Parse a mime type from loose input.

        Accepts enum members, values ("application/json"), member names
        ("APPLICATION_XML") and short names ("json", "xml").

        Raises:
            ValueError: If the value names no known mime type
        """
        if isinstance(value, cls):
            return value

        text = str(value).strip()
        for member in cls:
            if text.lower() in (member.value, member.name.lower(), member.display_name.lower()):
                return member
        raise ValueError(f"Unknown mime type: '{value}'")


class EndpointSpec(BaseModel):
    """
    A single resolvable query.

    Immutable once constructed. Blank filters fall back to ".*" and
    blank credential ids to "" (anonymous request).
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="http(s) URL of the REST endpoint")
    credential_id: str = Field("", description="Id of the credential to attach")
    mime_type: MimeType = Field(MimeType.APPLICATION_JSON, description="Declared body type")
    value_expression: str = Field(..., description="JSONPath or XPath selecting the values")
    filter: str = Field(DEFAULT_FILTER, description="Full-match regex applied to values")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not ENDPOINT_URL_PATTERN.match(value):
            raise ValueError("The REST endpoint must be a valid http(s) URL")
        return value

    @field_validator("credential_id", mode="before")
    @classmethod
    def _blank_credential(cls, value: str | None) -> str:
        return value.strip() if value and value.strip() else ""

    @field_validator("mime_type", mode="before")
    @classmethod
    def _loose_mime_type(cls, value: str | MimeType) -> MimeType:
        return MimeType.parse(value)

    @field_validator("value_expression")
    @classmethod
    def _check_expression(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("The value expression must not be empty")
        return value

    @field_validator("filter", mode="before")
    @classmethod
    def _blank_filter(cls, value: str | None) -> str:
        return value if value and value.strip() else DEFAULT_FILTER


# =============================================================================
# Credentials
# =============================================================================


class UsernamePasswordCredential(BaseModel):
    """Credential sent as HTTP basic auth."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    password: SecretStr
    description: str = ""


class TokenCredential(BaseModel):
    """Secret text credential sent as a bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    token: SecretStr
    description: str = ""


Credential = Union[UsernamePasswordCredential, TokenCredential]


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Body of a fetched endpoint. Transient, never persisted."""

    body: str
    success: bool
    status_code: int = 0
    content_type: str = ""
    content: bytes = b""

    def payload(self, mime_type: MimeType) -> str | bytes:
        """
        Body handed to the parser.

        XML is parsed from the raw bytes so the prolog's encoding
        declaration (or BOM) decides the charset. JSON uses the decoded text.
        """
        if mime_type is MimeType.APPLICATION_XML and self.content:
            return self.content
        return self.body
