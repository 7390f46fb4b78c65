"""
Districts Handler - Lambda function listing the dong names found in the dataset.
"""

import os
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars
from public_data_proxy.handlers.utils.error_handling import handle_service_errors
from public_data_proxy.handlers.utils.observability import logger, metrics, tracer
from public_data_proxy.handlers.utils.request_parsing import load_env_vars
from public_data_proxy.handlers.utils.responses import create_preflight_response, is_preflight
from public_data_proxy.logic.district_service import DistrictService
from public_data_proxy.logic.fetcher import UpstreamClient
from public_data_proxy.models.output import DistrictListResponse

ERROR_LABEL = '동 목록 추출 실패'


def create_upstream_client(env_vars: ProxyEnvVars) -> UpstreamClient:
    return UpstreamClient.from_env(env_vars)


@tracer.capture_method(capture_response=False)
@handle_service_errors(error_label=ERROR_LABEL)
def list_districts(event: Dict[str, Any], context: LambdaContext) -> DistrictListResponse:
    env_vars = load_env_vars()

    logger.info("District list requested", extra={"sample_size": env_vars.DISTRICT_SAMPLE_SIZE})

    service = DistrictService(
        upstream_client=create_upstream_client(env_vars),
        sample_size=env_vars.DISTRICT_SAMPLE_SIZE,
        address_prefix=env_vars.DISTRICT_ADDRESS_PREFIX,
    )
    return service.list_districts()


@tracer.capture_lambda_handler(capture_response=False)
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda handler for the districts endpoint."""
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("service", "districts-api")
    tracer.put_annotation("environment", os.environ.get("ENVIRONMENT", "unknown"))

    if is_preflight(event.get('httpMethod')):
        return create_preflight_response(request_id=context.aws_request_id)

    return list_districts(event, context)
