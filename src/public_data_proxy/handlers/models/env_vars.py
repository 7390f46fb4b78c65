"""
Environment variable models for type-safe configuration.

The proxy reads its settings once per process through aws-lambda-env-modeler
and passes the resulting object down to the upstream client; nothing below
the handler layer touches os.environ.
"""

from typing import Annotated

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import Field, HttpUrl

DISTRICT_MATCH_LOT = 'lot'
DISTRICT_MATCH_LOT_OR_ROAD = 'lot_or_road'


class ProxyEnvVars(BaseEnvModel):
    """Environment variables for the proxy Lambda handlers."""

    # Open-data API key, embedded in the upstream URL path
    PUBLIC_DATA_KEY: Annotated[str, Field(
        description='Seoul open-data API key',
        min_length=1
    )]

    UPSTREAM_BASE_URL: Annotated[HttpUrl, Field(
        default='http://openapi.seoul.go.kr:8088',
        description='Base URL of the upstream open-data API'
    )] = 'http://openapi.seoul.go.kr:8088'

    UPSTREAM_SERVICE_NAME: Annotated[str, Field(
        default='LOCALDATA_072404_JN',
        description='Upstream dataset name, also the root key of its responses',
        min_length=1
    )] = 'LOCALDATA_072404_JN'

    UPSTREAM_FORMAT: Annotated[str, Field(
        default='xml',
        description='Response format requested from the upstream API',
        pattern=r'^(xml|json)$'
    )] = 'xml'

    UPSTREAM_TIMEOUT_SECONDS: Annotated[float, Field(
        default=25.0,
        description='Hard timeout for the single upstream call',
        gt=0,
        le=60
    )] = 25.0

    MAX_PAGE_SIZE: Annotated[int, Field(
        default=3000,
        description='Largest allowed endIdx - startIdx + 1',
        ge=1,
        le=10000
    )] = 3000

    DEFAULT_END_INDEX: Annotated[int, Field(
        default=100,
        description='endIdx used when the client does not send one',
        ge=1
    )] = 100

    # Lot address only is the documented behaviour; lot_or_road is the older variant
    DISTRICT_MATCH_MODE: Annotated[str, Field(
        default=DISTRICT_MATCH_LOT,
        description='Address fields checked by the dong filter',
        pattern=r'^(lot|lot_or_road)$'
    )] = DISTRICT_MATCH_LOT

    DISTRICT_SAMPLE_SIZE: Annotated[int, Field(
        default=3000,
        description='Number of records scanned to build the district list',
        ge=1,
        le=10000
    )] = 3000

    DISTRICT_ADDRESS_PREFIX: Annotated[str, Field(
        default='서울특별시 종로구',
        description='City and district words that precede the dong name in addresses',
        min_length=1
    )] = '서울특별시 종로구'

    ENVIRONMENT: Annotated[str, Field(
        default='dev',
        description='Deployment environment name'
    )] = 'dev'

    SERVICE_VERSION: Annotated[str, Field(
        default='1.0.0',
        description='Application version string'
    )] = '1.0.0'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='public-data-proxy',
        description='Service name for AWS Powertools'
    )] = 'public-data-proxy'

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'prod'

    @property
    def upstream_base_url(self) -> str:
        return str(self.UPSTREAM_BASE_URL).rstrip('/')


def get_proxy_env_vars() -> ProxyEnvVars:
    """
    Get typed environment variables for the proxy handlers.

    Returns:
        Validated environment variables model instance

    Raises:
        ValueError: If a required variable is missing or a value is invalid
    """
    return get_environment_variables(model=ProxyEnvVars)
