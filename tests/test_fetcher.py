"""
Tests for the HTTP retriever.

Tests cover:
- Successful GET and RawResponse contents
- Basic and bearer authentication headers
- Non-2xx responses, timeouts and connection errors
- HTTP client lifecycle (shared vs owned)
"""

import asyncio
import base64
import time
from unittest.mock import patch

import httpx
import pytest

from restlist.config import Settings
from restlist.errors import HttpStatusError, NetworkError
from restlist.http import ValueFetcher
from restlist.models import MimeType, TokenCredential, UsernamePasswordCredential

from conftest import COLORS_URL, make_client, make_response


class TrickleStream(httpx.AsyncByteStream):
    """Response body delivered one byte at a time."""

    def __init__(self, body: bytes, delay: float):
        self._body = body
        self._delay = delay

    async def __aiter__(self):
        for i in range(len(self._body)):
            await asyncio.sleep(self._delay)
            yield self._body[i : i + 1]


class TestFetch:
    """Tests for ValueFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_fetch_success(self, colors_json):
        client = make_client(make_response(200, colors_json))
        fetcher = ValueFetcher(http_client=client)

        response = await fetcher.fetch(COLORS_URL)

        assert response.success is True
        assert response.status_code == 200
        assert response.body == colors_json
        assert response.content_type == "application/json"
        client.get.assert_awaited_once()
        assert client.get.call_args.args[0] == COLORS_URL

    @pytest.mark.asyncio
    async def test_anonymous_request_has_no_auth_header(self):
        client = make_client(make_response(200, "{}"))
        fetcher = ValueFetcher(http_client=client)

        await fetcher.fetch(COLORS_URL, None)

        headers = client.get.call_args.kwargs["headers"]
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_accept_header_from_mime_type(self):
        client = make_client(make_response(200, "<a/>", content_type="application/xml"))
        fetcher = ValueFetcher(http_client=client)

        await fetcher.fetch(COLORS_URL, mime_type=MimeType.APPLICATION_XML)

        headers = client.get.call_args.kwargs["headers"]
        assert headers["Accept"] == "application/xml"

    @pytest.mark.asyncio
    async def test_timeout_passed_to_request(self):
        client = make_client(make_response(200, "{}"))
        fetcher = ValueFetcher(timeout=3.5, http_client=client)

        await fetcher.fetch(COLORS_URL)

        assert client.get.call_args.kwargs["timeout"] == 3.5

    @pytest.mark.asyncio
    async def test_non_2xx_raises_status_error(self):
        client = make_client(make_response(404, "no such resource"))
        fetcher = ValueFetcher(http_client=client)

        with pytest.raises(HttpStatusError) as exc_info:
            await fetcher.fetch(COLORS_URL)

        error = exc_info.value
        assert error.status_code == 404
        assert error.reason == "Not Found"
        assert error.response_body == "no such resource"
        assert str(error) == f"HTTP 404 Not Found from {COLORS_URL}"

    @pytest.mark.asyncio
    async def test_server_error_raises_status_error(self):
        client = make_client(make_response(503, ""))
        fetcher = ValueFetcher(http_client=client)

        with pytest.raises(HttpStatusError) as exc_info:
            await fetcher.fetch(COLORS_URL)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_timeout_raises_network_error(self):
        client = make_client(side_effect=httpx.ReadTimeout("Timeout"))
        fetcher = ValueFetcher(timeout=1.0, http_client=client)

        with pytest.raises(NetworkError) as exc_info:
            await fetcher.fetch(COLORS_URL)

        assert exc_info.value.timeout is True
        assert "timed out after 1.0s" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_raw_bytes_kept(self):
        body = '<?xml version="1.0" encoding="ISO-8859-1"?><n>café</n>'.encode("iso-8859-1")
        client = make_client(make_response(200, body, content_type="application/xml"))
        fetcher = ValueFetcher(http_client=client)

        response = await fetcher.fetch(COLORS_URL, mime_type=MimeType.APPLICATION_XML)

        assert response.content == body
        assert response.payload(MimeType.APPLICATION_XML) == body
        assert response.payload(MimeType.APPLICATION_JSON) == response.body

    @pytest.mark.asyncio
    async def test_slow_body_bounded_by_total_timeout(self, colors_json):
        def handler(request):
            return httpx.Response(
                200,
                headers={"content-type": "application/json"},
                stream=TrickleStream(colors_json.encode(), delay=0.05),
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = ValueFetcher(timeout=0.3, http_client=client)

            started = time.monotonic()
            with pytest.raises(NetworkError) as exc_info:
                await fetcher.fetch(COLORS_URL)
            elapsed = time.monotonic() - started

        assert exc_info.value.timeout is True
        assert "timed out after 0.3s" in str(exc_info.value)
        assert elapsed < 1.0

    @pytest.mark.asyncio
    async def test_connection_error_raises_network_error(self):
        client = make_client(side_effect=httpx.ConnectError("Connection refused"))
        fetcher = ValueFetcher(http_client=client)

        with pytest.raises(NetworkError) as exc_info:
            await fetcher.fetch(COLORS_URL)

        assert exc_info.value.timeout is False
        assert exc_info.value.url == COLORS_URL
        assert "Connection refused" in str(exc_info.value)


class TestAuthHeaders:
    """Tests for credential -> Authorization header mapping."""

    def test_basic_auth(self):
        fetcher = ValueFetcher()
        credential = UsernamePasswordCredential(id="c1", username="bob", password="s3cret")

        headers = fetcher._build_headers(credential, None)

        expected = base64.b64encode(b"bob:s3cret").decode()
        assert headers["Authorization"] == f"Basic {expected}"

    def test_bearer_token(self):
        fetcher = ValueFetcher()
        credential = TokenCredential(id="c2", token="tok-123")

        headers = fetcher._build_headers(credential, None)

        assert headers["Authorization"] == "Bearer tok-123"

    def test_user_agent(self):
        fetcher = ValueFetcher(user_agent="restlist-test")

        headers = fetcher._build_headers(None, None)

        assert headers == {"User-Agent": "restlist-test"}

    @pytest.mark.asyncio
    async def test_credential_sent_with_request(self):
        client = make_client(make_response(200, "{}"))
        fetcher = ValueFetcher(http_client=client)

        await fetcher.fetch(COLORS_URL, TokenCredential(id="c", token="abc"))

        headers = client.get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer abc"


class TestClientLifecycle:
    """Tests for shared vs owned HTTP clients."""

    @pytest.mark.asyncio
    async def test_shared_client_not_closed(self):
        client = make_client(make_response(200, "{}"))
        fetcher = ValueFetcher(http_client=client)

        await fetcher.fetch(COLORS_URL)

        client.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        client = make_client(make_response(200, "{}"))

        with patch("restlist.http.httpx.AsyncClient", return_value=client) as factory:
            fetcher = ValueFetcher(timeout=2.0, verify=False, follow_redirects=False)
            await fetcher.fetch(COLORS_URL)

        factory.assert_called_once_with(timeout=2.0, verify=False, follow_redirects=False)
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_owned_client_closed_on_error(self):
        client = make_client(side_effect=httpx.ConnectError("down"))

        with patch("restlist.http.httpx.AsyncClient", return_value=client):
            fetcher = ValueFetcher()
            with pytest.raises(NetworkError):
                await fetcher.fetch(COLORS_URL)

        client.aclose.assert_awaited_once()

    def test_from_settings(self):
        settings = Settings(request_timeout=4.0, verify_ssl=False, user_agent="ua")

        fetcher = ValueFetcher.from_settings(settings)

        assert fetcher.timeout == 4.0
        assert fetcher._verify is False
        assert fetcher._user_agent == "ua"
