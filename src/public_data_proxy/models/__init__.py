"""
Service Models Package

Pydantic models for inbound page requests, canonical records and the
response envelopes of every endpoint.
"""

from .input import PageRequest
from .output import (
    DistrictListResponse,
    ErrorResponse,
    HealthResponse,
    RequestInfo,
    RestaurantListResponse,
    UpstreamResult,
)
from .record import CanonicalRecord

__all__ = [
    # Input models
    "PageRequest",

    # Output models
    "DistrictListResponse",
    "ErrorResponse",
    "HealthResponse",
    "RequestInfo",
    "RestaurantListResponse",
    "UpstreamResult",

    # Domain models
    "CanonicalRecord",
]
