"""
Dong (neighbourhood) list extraction.

Scans a sample of the dataset and collects the word that follows the
configured city and district in each address.
"""

import re
from typing import Iterable, List

from aws_lambda_powertools.metrics import MetricUnit

from public_data_proxy.handlers.utils.observability import logger, metrics, tracer
from public_data_proxy.logic.fetcher import UpstreamClient
from public_data_proxy.logic.normalizer import normalize_records
from public_data_proxy.logic.parser import parse_upstream_body
from public_data_proxy.logic.responder import utc_timestamp
from public_data_proxy.models.output import DistrictListResponse
from public_data_proxy.models.record import CanonicalRecord

DONG_MARKERS = ('동', '가')


def build_dong_pattern(address_prefix: str) -> re.Pattern:
    """'서울특별시 종로구' -> r'서울특별시\\s+종로구\\s+([^\\s]+)'"""
    words = [re.escape(word) for word in address_prefix.split()]
    return re.compile(r'\s+'.join(words) + r'\s+([^\s]+)')


def extract_dong(address: str, pattern: re.Pattern) -> str | None:
    match = pattern.search(address)
    if not match:
        return None
    name = match.group(1)
    if not any(marker in name for marker in DONG_MARKERS) or len(name) <= 1:
        return None
    return name


def collect_districts(records: Iterable[CanonicalRecord], pattern: re.Pattern) -> List[str]:
    """Sorted unique dong names; the lot address is used, falling back to the road address."""
    names = set()
    for record in records:
        dong = extract_dong(record.lot_address or record.road_address, pattern)
        if dong:
            names.add(dong)
    return sorted(names)


class DistrictService:
    """Builds the dong list from the first sample_size upstream records."""

    def __init__(self, upstream_client: UpstreamClient, sample_size: int = 3000, address_prefix: str = '서울특별시 종로구'):
        self.upstream_client = upstream_client
        self.sample_size = sample_size
        self.pattern = build_dong_pattern(address_prefix)

    @tracer.capture_method
    def list_districts(self) -> DistrictListResponse:
        response = self.upstream_client.fetch_page(start_index=1, end_index=self.sample_size)
        page = parse_upstream_body(
            body=response.body,
            content_format=response.content_format,
            service_name=self.upstream_client.service_name,
        )
        districts = collect_districts(normalize_records(page.rows), self.pattern)

        metrics.add_metric(name="DistrictsExtracted", unit=MetricUnit.Count, value=len(districts))
        logger.info("District list extracted", extra={
            "district_count": len(districts),
            "rows_scanned": len(page.rows),
        })

        return DistrictListResponse(
            districts=districts,
            total_count=len(districts),
            extracted_from=len(page.rows),
            timestamp=utc_timestamp(),
        )
