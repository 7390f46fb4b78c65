"""
Helpers that turn the raw API Gateway event and environment into typed values.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from public_data_proxy.handlers.models.env_vars import ProxyEnvVars, get_proxy_env_vars
from public_data_proxy.handlers.utils.errors import ConfigurationError, ErrorContext, ValidationError
from public_data_proxy.handlers.utils.observability import logger
from public_data_proxy.models.input import PageRequest


def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    return event.get('queryStringParameters') or {}


def get_request_id(event: Dict[str, Any], default: str = 'unknown') -> str:
    return (event.get('requestContext') or {}).get('requestId') or default


def load_env_vars() -> ProxyEnvVars:
    """
    Raises:
        ConfigurationError: A required variable is missing or a value is invalid
    """
    try:
        return get_proxy_env_vars()
    except ValueError as e:
        logger.error("Invalid environment configuration", extra={"error": str(e)})
        raise ConfigurationError(message="서버 환경 설정이 올바르지 않습니다") from e


def _describe(error: Dict[str, Any]) -> str:
    location = '.'.join(str(part) for part in error.get('loc', ())) or 'query'
    return f"{location}: {error.get('msg', '')}"


def parse_page_request(
    event: Dict[str, Any],
    default_end_index: int,
    context: Optional[ErrorContext] = None,
) -> PageRequest:
    """
    Raises:
        ValidationError: startIdx/endIdx are not positive integers or are inverted
    """
    try:
        return PageRequest.from_query(get_query_params(event), default_end_index=default_end_index)
    except PydanticValidationError as e:
        problems = '; '.join(_describe(error) for error in e.errors())
        raise ValidationError(message=f"잘못된 요청 파라미터: {problems}", context=context) from e
