"""
Business-status and district filtering of canonical records.

Filtering never reorders: the output keeps upstream order.
"""

from typing import Iterable, List, Optional

from public_data_proxy.handlers.models.env_vars import DISTRICT_MATCH_LOT, DISTRICT_MATCH_LOT_OR_ROAD
from public_data_proxy.handlers.utils.observability import logger, tracer
from public_data_proxy.models.record import CanonicalRecord

OPEN_STATUS_SUBSTRINGS = ('영업', '정상')
OPEN_STATUS_EXACT = frozenset({'운영중', '영업/정상'})


def is_open_status(status: Optional[str]) -> bool:
    """True when the status names a trading business. Case-sensitive; empty is never open."""
    if not status:
        return False
    return any(token in status for token in OPEN_STATUS_SUBSTRINGS) or status in OPEN_STATUS_EXACT


def matches_district(record: CanonicalRecord, district: Optional[str], mode: str = DISTRICT_MATCH_LOT) -> bool:
    """
    Check a record against the dong filter.

    The lot address is authoritative. An older deployment also accepted a
    match on the road address; that behaviour is only used when mode is
    explicitly set to 'lot_or_road'.
    """
    if not district:
        return True
    if district in record.lot_address:
        return True
    if mode == DISTRICT_MATCH_LOT_OR_ROAD:
        return district in record.road_address
    return False


@tracer.capture_method(capture_response=False)
def filter_records(
    records: Iterable[CanonicalRecord],
    district: Optional[str] = None,
    mode: str = DISTRICT_MATCH_LOT,
) -> List[CanonicalRecord]:
    """Keep open records, optionally narrowed to one dong."""
    records = list(records)
    kept = [
        record for record in records
        if is_open_status(record.status) and matches_district(record, district, mode)
    ]
    logger.debug("Records filtered", extra={
        "input_count": len(records),
        "kept_count": len(kept),
        "district": district,
        "district_match_mode": mode,
    })
    return kept
