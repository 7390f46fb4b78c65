"""
Business Logic Layer Module.

The per-request pipeline of the proxy, in call order:

- fetcher: one bounded-timeout GET to the open-data API
- parser: XML/JSON body -> rows, total count and result status
- normalizer: upstream row -> CanonicalRecord
- record_filter: open-status and dong filtering, order preserving
- responder: success and failure envelopes

restaurant_service and district_service wire the stages together for the
two data endpoints.
"""

from public_data_proxy.logic.normalizer import normalize_record
from public_data_proxy.logic.parser import first_or_default, parse_upstream_body
from public_data_proxy.logic.record_filter import filter_records, is_open_status

__all__ = [
    "filter_records",
    "first_or_default",
    "is_open_status",
    "normalize_record",
    "parse_upstream_body",
]
