"""
Public Data Proxy Service Module.

Serverless proxy in front of the Seoul open-data restaurant registry. It
forwards one page request upstream, normalizes the XML or JSON answer into
a stable JSON shape and keeps only trading businesses, optionally within one
dong.

- handlers: Lambda entry points, configuration and error conversion
- logic: fetch, parse, normalize, filter and envelope construction
- models: Pydantic request, record and response models
"""

__version__ = "1.0.0"
__description__ = "Serverless proxy for the Seoul open-data restaurant registry"

from public_data_proxy.models.input import PageRequest
from public_data_proxy.models.output import ErrorResponse, RestaurantListResponse
from public_data_proxy.models.record import CanonicalRecord
from public_data_proxy.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "CanonicalRecord",
    "ErrorResponse",
    "PageRequest",
    "RestaurantListResponse",
    "logger",
    "tracer",
    "metrics",
]
