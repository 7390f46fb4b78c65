"""
Mapping of upstream rows onto the canonical record.
"""

from typing import Any, Dict, List, Mapping

from public_data_proxy.logic.parser import scalar
from public_data_proxy.models.record import CanonicalRecord

# canonical field -> upstream field code
FIELD_MAP: Dict[str, str] = {
    'id': 'MGTNO',
    'business_name': 'BPLCNM',
    'business_type': 'UPTAENM',
    'lot_address': 'SITEWHLADDR',
    'road_address': 'RDNWHLADDR',
    'phone': 'SITETEL',
    'status': 'TRDSTATENM',
    'closure_date': 'DCBYMD',
    'permit_date': 'APVPERMYMD',
    'x': 'X',
    'y': 'Y',
    'facility_scale': 'FACILTOTSCP',
    'lot_postal_code': 'SITEPOSTNO',
    'road_postal_code': 'RDNPOSTNO',
}


def field_value(raw: Mapping[str, Any], code: str) -> str:
    """String value of one upstream field, '' when absent."""
    value = scalar(raw.get(code), '')
    if isinstance(value, (Mapping, list)):
        # nested element where a leaf was expected
        return ''
    return str(value)


def normalize_record(raw: Mapping[str, Any]) -> CanonicalRecord:
    """Map one upstream row to a CanonicalRecord. Total and side-effect free."""
    return CanonicalRecord(**{name: field_value(raw, code) for name, code in FIELD_MAP.items()})


def normalize_records(rows: List[Mapping[str, Any]]) -> List[CanonicalRecord]:
    return [normalize_record(row) for row in rows]
