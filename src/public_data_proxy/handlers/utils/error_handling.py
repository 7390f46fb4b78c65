"""
Conversion of handler results and failures into API Gateway responses.
"""

import functools
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from public_data_proxy.handlers.utils.errors import BaseServiceError, get_http_status_code, log_error_metrics
from public_data_proxy.handlers.utils.observability import logger, metrics
from public_data_proxy.handlers.utils.responses import create_api_response
from public_data_proxy.logic.responder import build_error_envelope

INVALID_REQUEST_LABEL = '잘못된 요청'


def handle_service_errors(error_label: str, headers: Optional[Dict[str, str]] = None):
    """
    Decorator for functions that take (event, context) and return an envelope model.

    The envelope becomes a 200 response. BaseServiceError becomes a failure
    envelope with the mapped status; anything else becomes a 500 failure
    envelope. No exception escapes to API Gateway.

    Args:
        error_label: Short label placed in the failure envelope for 5xx errors
        headers: Extra headers added to every response
    """

    def decorator(func: Callable[..., Any]):
        @functools.wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            request_id = context.aws_request_id
            try:
                envelope = func(event, context)
                metrics.add_metric(name="RequestSuccess", unit=MetricUnit.Count, value=1)
                return create_api_response(
                    status_code=200,
                    body=envelope.to_json(),
                    headers=headers,
                    request_id=request_id,
                )

            except BaseServiceError as e:
                log_error_metrics(e)
                status_code = get_http_status_code(e)
                label = INVALID_REQUEST_LABEL if status_code == 400 else error_label
                return create_api_response(
                    status_code=status_code,
                    body=build_error_envelope(label, e).to_json(),
                    headers=headers,
                    request_id=request_id,
                )

            except Exception as e:
                logger.exception("Unexpected error in handler", extra={
                    "error": str(e),
                    "function_name": func.__name__,
                })
                metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)
                return create_api_response(
                    status_code=500,
                    body=build_error_envelope(error_label, e).to_json(),
                    headers=headers,
                    request_id=request_id,
                )

        return wrapper

    return decorator
