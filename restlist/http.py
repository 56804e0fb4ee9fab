"""
HTTP Retriever.

Issues the single GET request of a resolution and returns the raw body.

Lifecycle:
    HTTP clients are managed automatically. By default, a fresh client
    is created for each fetch() call and closed afterward. Pass a shared
    client via the constructor to reuse connections; the caller then
    manages its lifecycle.

Authentication:
    - UsernamePasswordCredential: Authorization: Basic ...
    - TokenCredential: Authorization: Bearer ...
    - None: anonymous request

Usage:
    fetcher = ValueFetcher(timeout=10.0)
    response = await fetcher.fetch("https://api.example.com/colors", credential)
    print(response.body)

    # With shared client for connection pooling:
    async with httpx.AsyncClient() as client:
        fetcher = ValueFetcher(http_client=client)
        response = await fetcher.fetch(url)
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import TYPE_CHECKING

import httpx

from restlist.errors import HttpStatusError, NetworkError
from restlist.models import (
    Credential,
    MimeType,
    RawResponse,
    TokenCredential,
    UsernamePasswordCredential,
)

if TYPE_CHECKING:
    from restlist.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ValueFetcher:
    """
    Fetches endpoint bodies with optional credentials.

    No retries: a failed request raises NetworkError or HttpStatusError
    and the caller decides what to do with it.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        follow_redirects: bool = True,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Upper bound on the whole request in seconds
            verify: Verify TLS certificates
            follow_redirects: Follow HTTP redirects
            user_agent: User-Agent header value
            http_client: Optional shared HTTP client (caller manages lifecycle).
                        If not provided, a fresh client is created per fetch
                        and closed automatically.
        """
        self._timeout = timeout
        self._verify = verify
        self._follow_redirects = follow_redirects
        self._user_agent = user_agent
        self._shared_client = http_client  # Caller-managed (don't close)

    @classmethod
    def from_settings(cls, settings: Settings, *, http_client: httpx.AsyncClient | None = None) -> ValueFetcher:
        """Create a fetcher configured from restlist Settings."""
        return cls(
            timeout=settings.request_timeout,
            verify=settings.verify_ssl,
            follow_redirects=settings.follow_redirects,
            user_agent=settings.user_agent,
            http_client=http_client,
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def fetch(
        self,
        url: str,
        credential: Credential | None = None,
        *,
        mime_type: MimeType | None = None,
    ) -> RawResponse:
        """
        GET the endpoint.

        Args:
            url: Endpoint URL
            credential: Optional credential to attach
            mime_type: Declared body type, sent as the Accept header

        Returns:
            RawResponse with the decoded body and the raw bytes

        Raises:
            NetworkError: On connection failure or timeout
            HttpStatusError: On a non-2xx response
        """
        if self._shared_client is not None:
            client = self._shared_client
            close_after = False
        else:
            client = httpx.AsyncClient(
                timeout=self._timeout,
                verify=self._verify,
                follow_redirects=self._follow_redirects,
            )
            close_after = True

        headers = self._build_headers(credential, mime_type)

        try:
            logger.info(
                f"[fetcher] GET {url} "
                f"auth={type(credential).__name__ if credential else None}"
            )

            try:
                # httpx timeouts apply per phase; wait_for caps the whole exchange
                response = await asyncio.wait_for(
                    client.get(url, headers=headers, timeout=self._timeout),
                    timeout=self._timeout,
                )
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                logger.warning(f"[fetcher] Timeout after {self._timeout}s: {url}")
                raise NetworkError(
                    f"Request to {url} timed out after {self._timeout}s",
                    url=url,
                    timeout=True,
                    detail=str(e),
                ) from e
            except httpx.HTTPError as e:
                logger.warning(f"[fetcher] Connection error for {url}: {e}")
                raise NetworkError(
                    f"Could not reach {url}: {e}",
                    url=url,
                    detail=str(e),
                ) from e

            logger.info(f"[fetcher] Response: {response.status_code}")

            if not 200 <= response.status_code < 300:
                reason = response.reason_phrase or ""
                status_line = f"{response.status_code} {reason}".strip()
                error_text = response.text[:500]
                logger.warning(
                    f"[fetcher] Error {response.status_code} {reason}: {error_text}"
                )
                raise HttpStatusError(
                    f"HTTP {status_line} from {url}",
                    url=url,
                    status_code=response.status_code,
                    reason=reason,
                    response_body=error_text,
                )

            return RawResponse(
                body=response.text,
                success=True,
                status_code=response.status_code,
                content_type=response.headers.get("content-type", ""),
                content=response.content,
            )

        finally:
            # Clean up owned client (never close shared client)
            if close_after:
                await client.aclose()

    def _build_headers(
        self,
        credential: Credential | None,
        mime_type: MimeType | None,
    ) -> dict[str, str]:
        headers: dict[str, str] = {}

        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        if mime_type is not None:
            headers["Accept"] = mime_type.value

        self._add_auth_headers(headers, credential)
        return headers

    @staticmethod
    def _add_auth_headers(headers: dict[str, str], credential: Credential | None) -> None:
        """Add authentication headers based on credential kind."""
        if isinstance(credential, UsernamePasswordCredential):
            pair = f"{credential.username}:{credential.password.get_secret_value()}"
            encoded = base64.b64encode(pair.encode()).decode()
            headers["Authorization"] = f"Basic {encoded}"

        elif isinstance(credential, TokenCredential):
            headers["Authorization"] = f"Bearer {credential.token.get_secret_value()}"
