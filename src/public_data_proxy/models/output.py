"""
Output models for API responses using Pydantic.

Every endpoint answers with a JSON envelope whose keys are camelCase; the
models below are serialized with by_alias=True.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from public_data_proxy.models.record import CanonicalRecord


class _Envelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class RequestInfo(_Envelope):
    """Echo of the page request that produced a response."""

    start_idx: Annotated[int, Field(description='First requested upstream index', examples=[1])]
    end_idx: Annotated[int, Field(description='Last requested upstream index', examples=[100])]
    dong: Annotated[str | None, Field(default=None, description='Dong filter, when sent')] = None
    business_type: Annotated[str | None, Field(
        default=None,
        alias='업태구분명',
        description='Business-type filter forwarded upstream, when sent'
    )] = None
    timestamp: Annotated[str, Field(description='ISO-8601 generation time')]


class UpstreamResult(_Envelope):
    """Result status reported by the open-data API."""

    code: Annotated[str, Field(description='Upstream result code', examples=['INFO-000'])] = ''
    message: Annotated[str, Field(description='Upstream result message')] = ''


class RestaurantListResponse(_Envelope):
    """Successful restaurants response."""

    success: Annotated[bool, Field(description='Always true for this model')] = True
    data: Annotated[list[CanonicalRecord], Field(description='Open records in upstream order')]
    count: Annotated[int, Field(description='Number of records in data', examples=[42])]
    total_count: Annotated[int, Field(
        description='Dataset size declared by the upstream API, not the filtered count',
        examples=[18234]
    )]
    request_info: Annotated[RequestInfo, Field(description='Echo of the page request')]
    upstream_result: Annotated[UpstreamResult | None, Field(
        default=None,
        description='Upstream result status, when the source reports one'
    )] = None
    timestamp: Annotated[str, Field(description='ISO-8601 generation time')]


class DistrictListResponse(_Envelope):
    """Successful districts response."""

    success: Annotated[bool, Field(description='Always true for this model')] = True
    districts: Annotated[list[str], Field(description='Sorted unique dong names', examples=[['관철동', '종로1가']])]
    total_count: Annotated[int, Field(description='Number of dong names')]
    extracted_from: Annotated[int, Field(description='Number of upstream rows scanned')]
    timestamp: Annotated[str, Field(description='ISO-8601 generation time')]


class HealthResponse(_Envelope):
    """Health check response."""

    success: Annotated[bool, Field(description='Service is answering')] = True
    message: Annotated[str, Field(examples=['Public Data Proxy Server is running!'])]
    timestamp: Annotated[str, Field(description='ISO-8601 generation time')]
    endpoints: Annotated[dict[str, str], Field(description='Known endpoint paths')]
    details: Annotated[dict[str, Any] | None, Field(
        default=None,
        description='Configuration and runtime details when requested'
    )] = None


class ErrorResponse(_Envelope):
    """Failure envelope shared by all endpoints."""

    success: Annotated[bool, Field(description='Always false for this model')] = False
    error: Annotated[str, Field(description='Short error label', examples=['API 호출 실패'])]
    error_code: Annotated[str, Field(description='Stable error code', examples=['UPSTREAM_HTTP_ERROR'])]
    detail: Annotated[str, Field(description='Human-readable error message')]
    timestamp: Annotated[str, Field(description='ISO-8601 generation time')]
