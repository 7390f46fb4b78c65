"""
Upstream open-data API client.

Issues exactly one GET per call. timeout_seconds bounds every network wait
and is also an overall deadline for the response body. There are no retries:
any failure is terminal for the invocation and surfaces as an
ExternalServiceError subclass.
"""

import time
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote, urlencode

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars
from public_data_proxy.handlers.utils.errors import (
    UpstreamConnectionError,
    UpstreamHttpError,
    UpstreamTimeoutError,
)
from public_data_proxy.handlers.utils.observability import logger, metrics, tracer

USER_AGENT = 'Restaurant-Finder/1.0'


def read_before_deadline(response: httpx.Response, deadline: float) -> bytes:
    """
    Read a streamed body, giving up once time.monotonic() passes deadline.

    httpx timeouts bound each network wait, not the whole body.

    Raises:
        httpx.ReadTimeout: The deadline passed before the body was complete
    """
    chunks = []
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout("Upstream response exceeded the overall deadline", request=response.request)
        chunks.append(chunk)
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout("Upstream response exceeded the overall deadline", request=response.request)
    return b''.join(chunks)


@dataclass(frozen=True)
class UpstreamResponse:
    body: str
    content_format: str
    status_code: int
    elapsed_ms: float


class UpstreamClient:
    """Client for the Seoul open-data API (`/{key}/{format}/{service}/{start}/{end}/`)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        service_name: str,
        content_format: str = 'xml',
        timeout_seconds: float = 25.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the upstream client.

        Args:
            base_url: Scheme, host and port of the open-data API
            api_key: Key embedded in the request path
            service_name: Dataset name, e.g. LOCALDATA_072404_JN
            content_format: 'xml' or 'json'
            timeout_seconds: Bound on each network wait and deadline for the whole response
            transport: Optional httpx transport, used by tests to stub the network
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.service_name = service_name
        self.content_format = content_format
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @classmethod
    def from_env(cls, env_vars: ProxyEnvVars, transport: Optional[httpx.BaseTransport] = None) -> 'UpstreamClient':
        return cls(
            base_url=env_vars.upstream_base_url,
            api_key=env_vars.PUBLIC_DATA_KEY,
            service_name=env_vars.UPSTREAM_SERVICE_NAME,
            content_format=env_vars.UPSTREAM_FORMAT,
            timeout_seconds=env_vars.UPSTREAM_TIMEOUT_SECONDS,
            transport=transport,
        )

    def build_url(self, start_index: int, end_index: int, params: Optional[Mapping[str, str]] = None) -> str:
        url = (
            f"{self.base_url}/{quote(self.api_key, safe='')}/{self.content_format}/"
            f"{self.service_name}/{start_index}/{end_index}/"
        )
        query = {key: value for key, value in (params or {}).items() if value}
        if query:
            url += f"?{urlencode(query)}"
        return url

    def mask_url(self, url: str) -> str:
        """Hide the API key before a URL is logged."""
        key = quote(self.api_key, safe='')
        return url.replace(key, f"{key[:4]}***")

    @tracer.capture_method(capture_response=False)
    def fetch_page(
        self,
        start_index: int,
        end_index: int,
        params: Optional[Mapping[str, str]] = None,
    ) -> UpstreamResponse:
        """
        Fetch one page of the upstream dataset.

        Args:
            start_index: 1-based first record index
            end_index: 1-based last record index, inclusive
            params: Optional filters forwarded as query parameters

        Returns:
            Raw response body and timing information

        Raises:
            UpstreamTimeoutError: A network wait or the whole call exceeded the configured timeout
            UpstreamHttpError: The API answered with a non-2xx status
            UpstreamConnectionError: The API could not be reached
        """
        url = self.build_url(start_index, end_index, params)
        logger.info("Calling upstream API", extra={"url": self.mask_url(url)})

        start_time = time.monotonic()
        deadline = start_time + self.timeout_seconds
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self.timeout_seconds),
                headers={'User-Agent': USER_AGENT},
                transport=self.transport,
            ) as client:
                with client.stream('GET', url) as response:
                    content = read_before_deadline(response, deadline) if response.is_success else b''
        except httpx.TimeoutException as e:
            metrics.add_metric(name="UpstreamTimeout", unit=MetricUnit.Count, value=1)
            logger.error("Upstream API timed out", extra={
                "timeout_seconds": self.timeout_seconds,
                "error": str(e),
            })
            raise UpstreamTimeoutError(timeout_seconds=self.timeout_seconds) from e
        except httpx.RequestError as e:
            logger.error("Upstream API unreachable", extra={"error": str(e)})
            raise UpstreamConnectionError(reason=type(e).__name__) from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        metrics.add_metric(name="UpstreamLatency", unit=MetricUnit.Milliseconds, value=elapsed_ms)
        logger.info("Upstream API responded", extra={
            "status_code": response.status_code,
            "elapsed_ms": round(elapsed_ms, 2),
            "body_length": len(content),
        })

        if not response.is_success:
            raise UpstreamHttpError(status_code=response.status_code, reason=response.reason_phrase)

        return UpstreamResponse(
            body=content.decode(response.encoding or 'utf-8', errors='replace'),
            content_format=self.content_format,
            status_code=response.status_code,
            elapsed_ms=elapsed_ms,
        )
