"""
API Gateway proxy response helpers.

All proxy responses carry the same CORS headers so that browser clients can
call the endpoints directly.
"""

from typing import Any, Dict, Optional

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def create_api_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Create standardized API Gateway response."""

    default_headers = {
        "Content-Type": "application/json; charset=utf-8",
        **CORS_HEADERS,
    }

    if request_id:
        default_headers["X-Request-ID"] = request_id

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": body if isinstance(body, str) else str(body),
    }


def create_preflight_response(request_id: Optional[str] = None) -> Dict[str, Any]:
    """CORS preflight answer: 200 with an empty body."""
    response = create_api_response(status_code=200, body="", request_id=request_id)
    del response["headers"]["Content-Type"]
    return response


def is_preflight(http_method: Optional[str]) -> bool:
    return (http_method or "").upper() == "OPTIONS"
