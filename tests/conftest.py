"""
Pytest configuration and fixtures for restlist tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from restlist.service import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


COLORS_URL = "https://api.example.com/colors"


def make_response(
    status_code: int = 200,
    body: str | bytes = "",
    *,
    url: str = COLORS_URL,
    content_type: str = "application/json",
) -> httpx.Response:
    """Build a real httpx.Response bound to a GET request. Bytes bodies are sent as-is."""
    payload = {"content": body} if isinstance(body, bytes) else {"text": body}
    return httpx.Response(
        status_code,
        headers={"content-type": content_type},
        request=httpx.Request("GET", url),
        **payload,
    )


def make_client(response=None, *, side_effect=None) -> AsyncMock:
    """Mock httpx.AsyncClient whose get() returns response or raises side_effect."""
    client = AsyncMock()
    if side_effect is not None:
        client.get = AsyncMock(side_effect=side_effect)
    else:
        client.get = AsyncMock(return_value=response)
    return client


@pytest.fixture
def colors_json():
    """Endpoint body with three colors."""
    return '{"colors": ["red", "green", "blue"]}'


@pytest.fixture
def items_xml():
    """Endpoint body with two items."""
    return "<items><item>a</item><item>b</item></items>"


@pytest.fixture
def catalog_json():
    """Nested endpoint body with mixed value types."""
    return """
    {
        "catalog": {
            "name": "tools",
            "items": [
                {"id": 1, "name": "hammer", "tags": ["steel", "heavy"], "price": 12.5},
                {"id": 2, "name": "saw", "tags": ["steel"], "price": 20},
                {"id": 3, "name": "hammer", "tags": [], "price": 9.99}
            ],
            "flags": [true, false, 3]
        }
    }
    """


@pytest.fixture
def catalog_xml():
    """XML endpoint body with attributes and nested text."""
    return """<?xml version="1.0" encoding="UTF-8"?>
    <catalog name="tools">
        <item id="1"><name>hammer</name><price>12.5</price></item>
        <item id="2"><name>saw</name><price>20</price></item>
        <item id="3"><name>hammer</name><price>9.99</price></item>
    </catalog>
    """
