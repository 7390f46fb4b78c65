"""
Pytest configuration and shared fixtures for the public data proxy.

This module provides the test environment, Lambda context, API Gateway
events and a stubbed upstream API built on httpx.MockTransport.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock
from xml.sax.saxutils import escape

import httpx
import pytest

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars
from public_data_proxy.logic.fetcher import UpstreamClient

SERVICE_NAME = "LOCALDATA_072404_JN"
TEST_API_KEY = "test-public-data-key"


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "AWS_DEFAULT_REGION": "ap-northeast-2",
        "PUBLIC_DATA_KEY": TEST_API_KEY,
        "ENVIRONMENT": "test",
        "SERVICE_VERSION": "test-1.0.0",
        "POWERTOOLS_SERVICE_NAME": "test-public-data-proxy",
        "POWERTOOLS_METRICS_NAMESPACE": "TestPublicDataProxy",
        "LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
        "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",
    })


@pytest.fixture
def env_vars() -> ProxyEnvVars:
    """Settings equivalent to the test environment."""
    return ProxyEnvVars(PUBLIC_DATA_KEY=TEST_API_KEY, ENVIRONMENT="test")


# Sample data fixtures
@pytest.fixture
def sample_rows() -> List[Dict[str, str]]:
    """Three upstream rows: two trading, one closed."""
    return [
        {
            "MGTNO": "3000000-101-2001-00001",
            "BPLCNM": "종로칼국수",
            "UPTAENM": "한식",
            "SITEWHLADDR": "서울특별시 종로구 종로1가 24",
            "RDNWHLADDR": "서울특별시 종로구 종로 19, 1층 (종로1가)",
            "SITETEL": "02-734-0000",
            "TRDSTATENM": "영업/정상",
            "DCBYMD": "",
            "APVPERMYMD": "2001-03-15",
            "X": "198013.123456",
            "Y": "451948.654321",
            "FACILTOTSCP": "66.12",
            "SITEPOSTNO": "110-121",
            "RDNPOSTNO": "03154",
        },
        {
            "MGTNO": "3000000-101-1998-00002",
            "BPLCNM": "관철분식",
            "UPTAENM": "분식",
            "SITEWHLADDR": "서울특별시 종로구 관철동 5-3",
            "RDNWHLADDR": "서울특별시 종로구 삼일대로19길 7 (관철동)",
            "TRDSTATENM": "폐업",
            "DCBYMD": "2015-08-31",
            "APVPERMYMD": "1998-06-01",
        },
        {
            "MGTNO": "3000000-101-2010-00003",
            "BPLCNM": "공평식당",
            "UPTAENM": "한식",
            "SITEWHLADDR": "서울특별시 종로구 공평동 70",
            "RDNWHLADDR": "서울특별시 종로구 우정국로 26 (공평동)",
            "TRDSTATENM": "영업",
            "APVPERMYMD": "2010-11-02",
            "X": "198120.5",
            "Y": "452010.25",
        },
    ]


@pytest.fixture
def build_xml_body() -> Callable[..., str]:
    """Render rows as an upstream XML document."""

    def build(
        rows: List[Dict[str, str]],
        total_count: Optional[int] = 18234,
        code: str = "INFO-000",
        message: str = "정상 처리되었습니다",
        root: str = SERVICE_NAME,
    ) -> str:
        parts = ['<?xml version="1.0" encoding="UTF-8"?>', f"<{root}>"]
        if total_count is not None:
            parts.append(f"<list_total_count>{total_count}</list_total_count>")
        parts.append(f"<RESULT><CODE>{code}</CODE><MESSAGE>{escape(message)}</MESSAGE></RESULT>")
        for row in rows:
            fields = "".join(f"<{key}>{escape(value)}</{key}>" for key, value in row.items())
            parts.append(f"<row>{fields}</row>")
        parts.append(f"</{root}>")
        return "\n".join(parts)

    return build


@pytest.fixture
def build_json_body() -> Callable[..., str]:
    """Render rows as an upstream JSON document."""

    def build(
        rows: List[Dict[str, Any]],
        total_count: Optional[int] = 18234,
        code: str = "INFO-000",
        message: str = "정상 처리되었습니다",
        root: str = SERVICE_NAME,
    ) -> str:
        body: Dict[str, Any] = {"RESULT": {"CODE": code, "MESSAGE": message}, "row": rows}
        if total_count is not None:
            body["list_total_count"] = total_count
        return json.dumps({root: body}, ensure_ascii=False)

    return build


class UpstreamStub:
    """Records every upstream request and answers with a canned response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body = ""
        self.error: Optional[Exception] = None

    def respond(self, body: str, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.body.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, content_format: str = "xml", timeout_seconds: float = 25.0) -> UpstreamClient:
        return UpstreamClient(
            base_url="http://openapi.seoul.go.kr:8088",
            api_key=TEST_API_KEY,
            service_name=SERVICE_NAME,
            content_format=content_format,
            timeout_seconds=timeout_seconds,
            transport=self.transport,
        )


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


# Lambda fixtures
@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-public-data-proxy"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:ap-northeast-2:123456789012:function:test-public-data-proxy"
    context.memory_limit_in_mb = 256
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-public-data-proxy"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Build an API Gateway REST proxy event."""

    def make(
        query: Optional[Dict[str, str]] = None,
        method: str = "GET",
        path: str = "/api/restaurants",
    ) -> Dict[str, Any]:
        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {"Accept": "application/json", "User-Agent": "pytest/test-agent"},
            "queryStringParameters": query,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "requestContext": {
                "requestId": "api-request-id-456",
                "stage": "test",
                "httpMethod": method,
                "path": path,
            },
            "body": None,
            "isBase64Encoded": False,
        }

    return make


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "benchmark" in str(item.fspath):
            item.add_marker(pytest.mark.benchmark)
