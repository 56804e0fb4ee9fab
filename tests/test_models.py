"""
Tests for data models and the result container.
"""

import pytest
from pydantic import ValidationError

from restlist.models import (
    EndpointSpec,
    MimeType,
    TokenCredential,
    UsernamePasswordCredential,
)
from restlist.result import ResultContainer


class TestMimeType:
    """Tests for MimeType parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("application/json", MimeType.APPLICATION_JSON),
            ("APPLICATION_JSON", MimeType.APPLICATION_JSON),
            ("json", MimeType.APPLICATION_JSON),
            ("XML", MimeType.APPLICATION_XML),
            (" application/xml ", MimeType.APPLICATION_XML),
            (MimeType.APPLICATION_XML, MimeType.APPLICATION_XML),
        ],
    )
    def test_parse(self, text, expected):
        assert MimeType.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            MimeType.parse("text/csv")


class TestEndpointSpec:
    """Tests for EndpointSpec validation and defaults."""

    def test_defaults(self):
        spec = EndpointSpec(url="https://api.example.com", value_expression="$.a")

        assert spec.mime_type is MimeType.APPLICATION_JSON
        assert spec.filter == ".*"
        assert spec.credential_id == ""

    def test_blank_filter_and_credential_normalised(self):
        spec = EndpointSpec(
            url="http://api.example.com",
            value_expression="$.a",
            filter="  ",
            credential_id=None,
        )

        assert spec.filter == ".*"
        assert spec.credential_id == ""

    def test_loose_mime_type(self):
        spec = EndpointSpec(url="https://x.io", value_expression="//a", mime_type="xml")
        assert spec.mime_type is MimeType.APPLICATION_XML

    @pytest.mark.parametrize("url", ["", "ftp://example.com", "example.com", "https://"])
    def test_invalid_url(self, url):
        with pytest.raises(ValidationError):
            EndpointSpec(url=url, value_expression="$.a")

    def test_blank_expression_rejected(self):
        with pytest.raises(ValidationError):
            EndpointSpec(url="https://x.io", value_expression="  ")

    def test_immutable(self):
        spec = EndpointSpec(url="https://x.io", value_expression="$.a")
        with pytest.raises(ValidationError):
            spec.url = "https://y.io"


class TestCredentials:
    """Tests for credential models."""

    def test_secrets_are_masked(self):
        basic = UsernamePasswordCredential(id="c1", username="bob", password="hunter2")
        token = TokenCredential(id="c2", token="tok-123")

        assert "hunter2" not in repr(basic)
        assert "tok-123" not in repr(token)
        assert basic.password.get_secret_value() == "hunter2"


class TestResultContainer:
    """Tests for the value/error union."""

    def test_success(self):
        result = ResultContainer.success(["a", "b"])

        assert result.value == ("a", "b")
        assert result.error_msg == ""
        assert result.is_error is False
        assert result.error_msg_or_none is None

    def test_empty_success_is_not_error(self):
        result = ResultContainer.success([])

        assert result.value == ()
        assert result.is_error is False

    def test_error(self):
        result = ResultContainer.error("boom")

        assert result.value == ()
        assert result.is_error is True
        assert result.error_msg_or_none == "boom"

    def test_error_requires_message(self):
        with pytest.raises(ValueError):
            ResultContainer.error("")

    def test_to_dict(self):
        assert ResultContainer.success(["a"]).to_dict() == {"values": ["a"], "error": ""}
