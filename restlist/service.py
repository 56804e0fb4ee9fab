"""
Resolution Orchestrator.

Runs one resolution: fetch -> parse -> extract -> filter.

Design Principle:
    Failures never escape. Any stage that fails short-circuits the rest
    and the caller gets ResultContainer.error(message) with no values.
    A resolution that succeeds but matches nothing is still success.

Usage:
    service = RestValueService(ValueFetcher(timeout=10.0))

    spec = EndpointSpec(
        url="https://api.example.com/colors",
        mime_type=MimeType.APPLICATION_JSON,
        value_expression="$.colors[*]",
        filter="^r.*",
    )
    result = await service.get(spec, credential=None)
"""

from __future__ import annotations

import logging

from restlist.credentials import CredentialLookup
from restlist.errors import RestListError
from restlist.extraction import evaluate, parse_document
from restlist.filtering import filter_values
from restlist.http import ValueFetcher
from restlist.models import Credential, EndpointSpec
from restlist.result import ResultContainer

logger = logging.getLogger(__name__)


class RestValueService:
    """Resolves an EndpointSpec into a ResultContainer."""

    def __init__(self, fetcher: ValueFetcher | None = None):
        self._fetcher = fetcher or ValueFetcher()

    @property
    def fetcher(self) -> ValueFetcher:
        return self._fetcher

    async def get(
        self,
        spec: EndpointSpec,
        credential: Credential | None = None,
    ) -> ResultContainer:
        """
        Resolve the values of one endpoint.

        Args:
            spec: Endpoint, mime type, expression and filter
            credential: Optional credential attached to the request

        Returns:
            ResultContainer with the filtered values, or with an error
            message and no values
        """
        try:
            response = await self._fetcher.fetch(
                spec.url, credential, mime_type=spec.mime_type
            )
            document = parse_document(response.payload(spec.mime_type), spec.mime_type)
            extracted = evaluate(document, spec.value_expression, spec.mime_type)
            values = filter_values(extracted, spec.filter)

        except RestListError as e:
            logger.warning(f"[rest_value_service] {spec.url}: {e.message}")
            return ResultContainer.error(e.message)

        except Exception as e:
            logger.error(
                f"[rest_value_service] Unexpected error resolving {spec.url}: {e}",
                exc_info=True,
            )
            return ResultContainer.error(f"Unexpected error resolving values: {e}")

        logger.info(
            f"[rest_value_service] {spec.url}: {len(extracted)} extracted, "
            f"{len(values)} after filter '{spec.filter}'"
        )
        return ResultContainer.success(values)


async def resolve_values(
    spec: EndpointSpec,
    credential_id: str | None,
    credentials: CredentialLookup | None = None,
    *,
    service: RestValueService | None = None,
) -> ResultContainer:
    """
    Look up the credential by id and resolve the endpoint's values.

    A missing credential is not an error: the request goes out anonymous.
    """
    credential = None
    if credential_id and credentials is not None:
        credential = credentials.find_credential(credential_id)
        if credential is None:
            logger.warning(
                f"[rest_value_service] Credential '{credential_id}' not found, "
                f"sending anonymous request"
            )

    return await (service or RestValueService()).get(spec, credential)
