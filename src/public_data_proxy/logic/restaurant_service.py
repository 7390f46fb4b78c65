"""
Business Logic Layer for the restaurant listing.

Runs the per-request pipeline: page-size check, single upstream fetch,
parse, normalize, filter and envelope construction.
"""

from typing import Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from public_data_proxy.handlers.models.env_vars import DISTRICT_MATCH_LOT, ProxyEnvVars
from public_data_proxy.handlers.utils.errors import ErrorContext, PageSizeLimitError
from public_data_proxy.handlers.utils.observability import logger, metrics, tracer
from public_data_proxy.logic.fetcher import UpstreamClient
from public_data_proxy.logic.normalizer import normalize_records
from public_data_proxy.logic.parser import parse_upstream_body
from public_data_proxy.logic.record_filter import filter_records
from public_data_proxy.logic.responder import build_success_envelope
from public_data_proxy.models.input import PageRequest
from public_data_proxy.models.output import RestaurantListResponse

BUSINESS_TYPE_PARAM = '업태구분명'


class RestaurantService:
    """Stateless restaurant listing service; build one per invocation."""

    def __init__(
        self,
        upstream_client: UpstreamClient,
        max_page_size: int = 3000,
        district_match_mode: str = DISTRICT_MATCH_LOT,
    ):
        """
        Initialize restaurant service.

        Args:
            upstream_client: Client for the open-data API
            max_page_size: Largest page a client may request
            district_match_mode: 'lot' or 'lot_or_road', see record_filter.matches_district
        """
        self.upstream_client = upstream_client
        self.max_page_size = max_page_size
        self.district_match_mode = district_match_mode

    @classmethod
    def from_env(cls, env_vars: ProxyEnvVars, upstream_client: UpstreamClient) -> 'RestaurantService':
        return cls(
            upstream_client=upstream_client,
            max_page_size=env_vars.MAX_PAGE_SIZE,
            district_match_mode=env_vars.DISTRICT_MATCH_MODE,
        )

    def validate_page_size(self, page_request: PageRequest, context: Optional[ErrorContext] = None) -> None:
        """
        Raises:
            PageSizeLimitError: The requested window is larger than max_page_size
        """
        if page_request.page_size > self.max_page_size:
            raise PageSizeLimitError(
                requested_size=page_request.page_size,
                max_page_size=self.max_page_size,
                context=context,
            )

    @tracer.capture_method(capture_response=False)
    def list_restaurants(
        self,
        page_request: PageRequest,
        context: Optional[ErrorContext] = None,
    ) -> RestaurantListResponse:
        """
        Fetch one page from the upstream API and return its open restaurants.

        Args:
            page_request: Validated page window and filters
            context: Error context for tracing

        Returns:
            Success envelope with the filtered records

        Raises:
            PageSizeLimitError: Checked before any network call
            ExternalServiceError: Upstream timeout, non-2xx or malformed body
        """
        self.validate_page_size(page_request, context)

        tracer.put_annotation("page_size", page_request.page_size)
        tracer.put_annotation("district_filter", page_request.district or "all")

        params: Dict[str, str] = {}
        if page_request.business_type:
            params[BUSINESS_TYPE_PARAM] = page_request.business_type

        response = self.upstream_client.fetch_page(
            start_index=page_request.start_index,
            end_index=page_request.end_index,
            params=params,
        )
        page = parse_upstream_body(
            body=response.body,
            content_format=response.content_format,
            service_name=self.upstream_client.service_name,
        )
        records = filter_records(
            normalize_records(page.rows),
            district=page_request.district,
            mode=self.district_match_mode,
        )

        metrics.add_metric(name="UpstreamRows", unit=MetricUnit.Count, value=len(page.rows))
        metrics.add_metric(name="RecordsReturned", unit=MetricUnit.Count, value=len(records))

        logger.info("Restaurants listed", extra={
            "upstream_rows": len(page.rows),
            "records_returned": len(records),
            "total_count": page.total_count,
            "result_code": page.result_code,
        })

        return build_success_envelope(records=records, page=page, page_request=page_request)
