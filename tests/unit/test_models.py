"""
Unit tests for Pydantic models.

This module tests the page request parsed from the query string and the
environment settings model.
"""

import pytest
from pydantic import ValidationError

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars
from public_data_proxy.handlers.utils.errors import ConfigurationError
from public_data_proxy.handlers.utils.errors import ValidationError as RequestValidationError
from public_data_proxy.handlers.utils.request_parsing import get_request_id, load_env_vars, parse_page_request
from public_data_proxy.models.input import PageRequest


class TestPageRequest:
    """Test cases for PageRequest model."""

    def test_query_aliases(self):
        """Test parsing of the camelCase and Korean query keys."""
        request = PageRequest.from_query(
            {"startIdx": "11", "endIdx": "20", "dong": "종로1가", "업태구분명": "한식"},
            default_end_index=100,
        )

        assert request.start_index == 11
        assert request.end_index == 20
        assert request.district == "종로1가"
        assert request.business_type == "한식"
        assert request.page_size == 10

    def test_defaults(self):
        """Test the defaults applied to an empty query."""
        request = PageRequest.from_query(None, default_end_index=100)

        assert request.start_index == 1
        assert request.end_index == 100
        assert request.district is None
        assert request.business_type is None
        assert request.page_size == 100

    def test_blank_filters_are_absent(self):
        """Test that whitespace-only filters are treated as not sent."""
        request = PageRequest.from_query({"dong": "  ", "업태구분명": ""}, default_end_index=5)

        assert request.district is None
        assert request.business_type is None

    def test_filters_are_trimmed(self):
        """Test that surrounding whitespace is removed from filters."""
        request = PageRequest.from_query({"dong": " 공평동 "}, default_end_index=5)

        assert request.district == "공평동"

    def test_single_record_window(self):
        """Test that startIdx equal to endIdx is one record."""
        request = PageRequest(start_index=7, end_index=7)

        assert request.page_size == 1

    def test_inverted_window_rejected(self):
        """Test that endIdx below startIdx is rejected."""
        with pytest.raises(ValidationError):
            PageRequest(start_index=10, end_index=5)

    @pytest.mark.parametrize("query", [
        {"startIdx": "0"},
        {"startIdx": "abc"},
        {"endIdx": "-1"},
        {"endIdx": "1.5"},
    ])
    def test_invalid_indices_rejected(self, query):
        """Test that non-positive or non-integer indices are rejected."""
        with pytest.raises(ValidationError):
            PageRequest.from_query(query, default_end_index=100)

    def test_frozen(self):
        """Test that a parsed request cannot be changed."""
        request = PageRequest(start_index=1, end_index=2)

        with pytest.raises(ValidationError):
            request.end_index = 3


class TestParsePageRequest:
    """Test cases for the event to PageRequest conversion."""

    def test_reads_query_string(self, make_event):
        """Test that values come from queryStringParameters."""
        request = parse_page_request(make_event({"startIdx": "2", "endIdx": "4"}), default_end_index=100)

        assert (request.start_index, request.end_index) == (2, 4)

    def test_missing_query_string(self, make_event):
        """Test that a null query string uses the defaults."""
        request = parse_page_request(make_event(None), default_end_index=50)

        assert request.end_index == 50

    def test_invalid_query_raises_service_error(self, make_event):
        """Test that pydantic errors become the service ValidationError."""
        with pytest.raises(RequestValidationError) as exc_info:
            parse_page_request(make_event({"startIdx": "x"}), default_end_index=100)

        assert "startIdx" in exc_info.value.message
        assert exc_info.value.error_code == "VALIDATION_ERROR"

    def test_request_id(self, make_event):
        """Test request id extraction with a fallback."""
        assert get_request_id(make_event()) == "api-request-id-456"
        assert get_request_id({}, default="ctx-id") == "ctx-id"


class TestProxyEnvVars:
    """Test cases for ProxyEnvVars model."""

    def test_defaults(self):
        """Test the defaults of every optional setting."""
        env_vars = ProxyEnvVars(PUBLIC_DATA_KEY="key")

        assert env_vars.upstream_base_url == "http://openapi.seoul.go.kr:8088"
        assert env_vars.UPSTREAM_SERVICE_NAME == "LOCALDATA_072404_JN"
        assert env_vars.UPSTREAM_FORMAT == "xml"
        assert env_vars.UPSTREAM_TIMEOUT_SECONDS == 25.0
        assert env_vars.MAX_PAGE_SIZE == 3000
        assert env_vars.DEFAULT_END_INDEX == 100
        assert env_vars.DISTRICT_MATCH_MODE == "lot"
        assert env_vars.is_production is False

    def test_values_from_strings(self):
        """Test that environment strings are coerced."""
        env_vars = ProxyEnvVars(
            PUBLIC_DATA_KEY="key",
            UPSTREAM_TIMEOUT_SECONDS="8",
            MAX_PAGE_SIZE="500",
            UPSTREAM_FORMAT="json",
            ENVIRONMENT="prod",
        )

        assert env_vars.UPSTREAM_TIMEOUT_SECONDS == 8.0
        assert env_vars.MAX_PAGE_SIZE == 500
        assert env_vars.UPSTREAM_FORMAT == "json"
        assert env_vars.is_production is True

    def test_missing_key_rejected(self):
        """Test that the API key is required."""
        with pytest.raises(ValidationError):
            ProxyEnvVars()

    def test_empty_key_rejected(self):
        """Test that an empty API key is rejected."""
        with pytest.raises(ValidationError):
            ProxyEnvVars(PUBLIC_DATA_KEY="")

    @pytest.mark.parametrize("field, value", [
        ("UPSTREAM_FORMAT", "csv"),
        ("UPSTREAM_TIMEOUT_SECONDS", "0"),
        ("UPSTREAM_TIMEOUT_SECONDS", "120"),
        ("MAX_PAGE_SIZE", "0"),
        ("DISTRICT_MATCH_MODE", "road"),
        ("UPSTREAM_BASE_URL", "not a url"),
    ])
    def test_invalid_values_rejected(self, field, value):
        """Test the bounds and patterns of the settings."""
        with pytest.raises(ValidationError):
            ProxyEnvVars(PUBLIC_DATA_KEY="key", **{field: value})

    def test_load_env_vars_wraps_errors(self, monkeypatch):
        """Test that an invalid environment surfaces as ConfigurationError."""
        def invalid_env():
            return ProxyEnvVars()

        monkeypatch.setattr("public_data_proxy.handlers.utils.request_parsing.get_proxy_env_vars", invalid_env)

        with pytest.raises(ConfigurationError) as exc_info:
            load_env_vars()

        assert exc_info.value.error_code == "CONFIGURATION_ERROR"
