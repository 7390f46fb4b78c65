"""
Restaurants Handler - Lambda function for the restaurant listing API.

GET returns the open restaurants of one upstream page, optionally narrowed
to a dong; OPTIONS answers the CORS preflight.
"""

import os
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars
from public_data_proxy.handlers.utils.error_handling import handle_service_errors
from public_data_proxy.handlers.utils.errors import create_error_context
from public_data_proxy.handlers.utils.observability import logger, metrics, tracer
from public_data_proxy.handlers.utils.request_parsing import get_request_id, load_env_vars, parse_page_request
from public_data_proxy.handlers.utils.responses import create_preflight_response, is_preflight
from public_data_proxy.logic.fetcher import UpstreamClient
from public_data_proxy.logic.restaurant_service import RestaurantService
from public_data_proxy.models.output import RestaurantListResponse

ERROR_LABEL = 'API 호출 실패'


def create_upstream_client(env_vars: ProxyEnvVars) -> UpstreamClient:
    return UpstreamClient.from_env(env_vars)


@tracer.capture_method(capture_response=False)
@handle_service_errors(error_label=ERROR_LABEL)
def list_restaurants(event: Dict[str, Any], context: LambdaContext) -> RestaurantListResponse:
    """
    List open restaurants for the requested page.

    Returns:
        Success envelope; failures are converted by handle_service_errors
    """
    error_context = create_error_context(
        request_id=get_request_id(event, default=context.aws_request_id),
        operation="list_restaurants",
    )

    env_vars = load_env_vars()
    page_request = parse_page_request(event, default_end_index=env_vars.DEFAULT_END_INDEX, context=error_context)

    logger.info("List restaurants request received", extra={
        "start_idx": page_request.start_index,
        "end_idx": page_request.end_index,
        "dong": page_request.district,
        "business_type": page_request.business_type,
    })

    service = RestaurantService.from_env(env_vars, upstream_client=create_upstream_client(env_vars))
    return service.list_restaurants(page_request, context=error_context)


@tracer.capture_lambda_handler(capture_response=False)
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("service", "restaurants-api")
    tracer.put_annotation("environment", os.environ.get("ENVIRONMENT", "unknown"))

    if is_preflight(event.get('httpMethod')):
        return create_preflight_response(request_id=context.aws_request_id)

    return list_restaurants(event, context)
