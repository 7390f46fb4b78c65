"""
Integration tests for the districts Lambda handler.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from public_data_proxy.handlers import districts_handler


@pytest.fixture
def stub_upstream(upstream):
    """Route the handler's upstream client through the stub transport."""
    with patch.object(districts_handler, "create_upstream_client", lambda env_vars: upstream.client()):
        yield upstream


def invoke(event, context):
    response = districts_handler.lambda_handler(event, context)
    return response, json.loads(response["body"]) if response["body"] else None


class TestDistrictsHandler:
    """Test cases for the districts endpoint."""

    def test_district_list(self, stub_upstream, build_xml_body, sample_rows, make_event, lambda_context):
        """Test the sorted dong list and scan size."""
        stub_upstream.respond(build_xml_body(sample_rows))

        response, body = invoke(make_event(path="/api/districts"), lambda_context)

        assert response["statusCode"] == 200
        assert body["success"] is True
        assert body["districts"] == ["공평동", "관철동", "종로1가"]
        assert body["totalCount"] == 3
        assert body["extractedFrom"] == 3
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_samples_configured_window(self, stub_upstream, build_xml_body, sample_rows, make_event, lambda_context):
        """Test that the default sample covers records 1 to 3000."""
        stub_upstream.respond(build_xml_body(sample_rows))

        invoke(make_event(path="/api/districts"), lambda_context)

        assert stub_upstream.requests[0].url.path.endswith("/1/3000/")

    def test_preflight(self, stub_upstream, make_event, lambda_context):
        """Test the CORS preflight answer."""
        response, body = invoke(make_event(method="OPTIONS", path="/api/districts"), lambda_context)

        assert response["statusCode"] == 200
        assert body is None
        assert stub_upstream.requests == []

    def test_upstream_timeout(self, stub_upstream, make_event, lambda_context):
        """Test that a timeout returns the district failure envelope."""
        stub_upstream.fail_with(httpx.ConnectTimeout("timed out"))

        response, body = invoke(make_event(path="/api/districts"), lambda_context)

        assert response["statusCode"] == 500
        assert body["error"] == "동 목록 추출 실패"
        assert body["errorCode"] == "UPSTREAM_TIMEOUT"
