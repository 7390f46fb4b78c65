"""
Construction of the JSON envelopes returned by every endpoint.
"""

from datetime import datetime, timezone
from typing import List, Optional

from public_data_proxy.handlers.utils.errors import BaseServiceError
from public_data_proxy.logic.parser import ParsedPage
from public_data_proxy.models.input import PageRequest
from public_data_proxy.models.output import ErrorResponse, RequestInfo, RestaurantListResponse, UpstreamResult
from public_data_proxy.models.record import CanonicalRecord

INTERNAL_ERROR_CODE = 'INTERNAL_SERVER_ERROR'


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_success_envelope(
    records: List[CanonicalRecord],
    page: ParsedPage,
    page_request: PageRequest,
    timestamp: Optional[str] = None,
) -> RestaurantListResponse:
    """
    Wrap filtered records in the success envelope.

    totalCount is the size the upstream API declares for the whole dataset.
    When the source omits it, the number of rows received is used instead.
    """
    timestamp = timestamp or utc_timestamp()
    total_count = page.total_count if page.total_count is not None else len(page.rows)

    upstream_result = None
    if page.result_code or page.result_message:
        upstream_result = UpstreamResult(code=page.result_code, message=page.result_message)

    return RestaurantListResponse(
        data=records,
        count=len(records),
        total_count=total_count,
        request_info=RequestInfo(
            start_idx=page_request.start_index,
            end_idx=page_request.end_index,
            dong=page_request.district,
            business_type=page_request.business_type,
            timestamp=timestamp,
        ),
        upstream_result=upstream_result,
        timestamp=timestamp,
    )


def build_error_envelope(label: str, error: Exception) -> ErrorResponse:
    """Failure envelope; non-service exceptions get the generic internal error code."""
    if isinstance(error, BaseServiceError):
        error_code, detail = error.error_code, error.message
    else:
        error_code, detail = INTERNAL_ERROR_CODE, str(error) or type(error).__name__
    return ErrorResponse(
        error=label,
        error_code=error_code,
        detail=detail,
        timestamp=utc_timestamp(),
    )
