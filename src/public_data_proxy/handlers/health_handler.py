"""
Health Check Handler - liveness endpoint for the proxy.

The basic answer only proves the function runs. With include_details=true it
also reports whether the configuration needed to reach the upstream API is
present, without calling the upstream API.
"""

import os
import sys
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from public_data_proxy.handlers.models.env_vars import get_proxy_env_vars
from public_data_proxy.handlers.utils.error_handling import handle_service_errors
from public_data_proxy.handlers.utils.observability import logger, metrics, tracer
from public_data_proxy.handlers.utils.request_parsing import get_query_params
from public_data_proxy.handlers.utils.responses import NO_CACHE_HEADERS
from public_data_proxy.logic.responder import utc_timestamp
from public_data_proxy.models.output import HealthResponse

HEALTH_MESSAGE = 'Public Data Proxy Server is running!'
ENDPOINTS = {
    'restaurants': '/api/restaurants',
    'districts': '/api/districts',
    'health': '/api/health',
}


@tracer.capture_method
def check_configuration() -> Dict[str, Any]:
    """
    Check that the environment parses into proxy settings.

    Returns:
        Health check results for the configuration
    """
    try:
        env_vars = get_proxy_env_vars()
    except ValueError as e:
        logger.warning("Configuration health check failed", extra={"error": str(e)})
        return {
            "component": "configuration",
            "status": "degraded",
            "api_key_configured": bool(os.environ.get('PUBLIC_DATA_KEY')),
        }

    return {
        "component": "configuration",
        "status": "healthy",
        "api_key_configured": True,
        "upstream_service": env_vars.UPSTREAM_SERVICE_NAME,
        "upstream_format": env_vars.UPSTREAM_FORMAT,
        "upstream_timeout_seconds": env_vars.UPSTREAM_TIMEOUT_SECONDS,
        "max_page_size": env_vars.MAX_PAGE_SIZE,
        "district_match_mode": env_vars.DISTRICT_MATCH_MODE,
        "service_name": env_vars.POWERTOOLS_SERVICE_NAME,
        "environment": env_vars.ENVIRONMENT,
        "version": env_vars.SERVICE_VERSION,
    }


def check_lambda_environment(context: LambdaContext) -> Dict[str, Any]:
    return {
        "component": "lambda_environment",
        "function_name": context.function_name,
        "function_version": context.function_version,
        "runtime": os.environ.get('AWS_EXECUTION_ENV', 'unknown'),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }


@tracer.capture_method
@handle_service_errors(error_label='헬스 체크 실패', headers=NO_CACHE_HEADERS)
def report_health(event: Dict[str, Any], context: LambdaContext) -> HealthResponse:
    query_params = get_query_params(event)
    include_details = str(query_params.get('include_details', 'false')).lower() == 'true'

    details = None
    if include_details:
        configuration = check_configuration()
        details = {
            "status": configuration["status"],
            "components": [configuration, check_lambda_environment(context)],
        }
        if configuration["status"] != "healthy":
            metrics.add_metric(name="HealthCheckDegraded", unit=MetricUnit.Count, value=1)

    logger.info("Health check completed", extra={"include_details": include_details})

    return HealthResponse(
        message=HEALTH_MESSAGE,
        timestamp=utc_timestamp(),
        endpoints=ENDPOINTS,
        details=details,
    )


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda handler for health check endpoint.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway response with the health envelope
    """
    metrics.add_metric(name="HealthCheckRequestCount", unit=MetricUnit.Count, value=1)
    tracer.put_annotation("service", "health-check")

    return report_health(event, context)
