"""
restlist - REST-backed choice parameter values.

Resolves the selectable values of a build choice parameter by querying
a REST endpoint:

- **Fetch**: one GET with optional basic or bearer credentials
- **Extract**: JSONPath (JSON bodies) or XPath (XML bodies)
- **Filter**: full-match regular expression over the extracted values
- **Cache**: resolved once per parameter definition, failures captured
  as an error message instead of raised

Quick Start:
    >>> from restlist import MimeType, RestListParameterDefinition
    >>>
    >>> definition = RestListParameterDefinition(
    ...     name="COLOR",
    ...     description="Pick a color",
    ...     rest_endpoint="https://api.example.com/colors",
    ...     credential_id="",
    ...     mime_type=MimeType.APPLICATION_JSON,
    ...     value_expression="$.colors[*]",
    ... )
    >>> choices = await definition.get_values()
"""

__version__ = "0.1.0"
__license__ = "MIT"

from restlist.models import (
    Credential,
    EndpointSpec,
    MimeType,
    RawResponse,
    TokenCredential,
    UsernamePasswordCredential,
)
from restlist.result import ResultContainer
from restlist.service import RestValueService, resolve_values
from restlist.parameter import RestListParameterDefinition, RestListParameterValue

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Models
    "Credential",
    "EndpointSpec",
    "MimeType",
    "RawResponse",
    "TokenCredential",
    "UsernamePasswordCredential",
    # Resolution
    "ResultContainer",
    "RestValueService",
    "resolve_values",
    # Parameter
    "RestListParameterDefinition",
    "RestListParameterValue",
]
