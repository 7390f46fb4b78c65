"""
Decoding of upstream response bodies.

Both formats are reduced to the same nested-mapping shape. XML elements
become ``{child_tag: [value, ...]}`` mappings whose leaves are strings, so a
row field arrives as a single-element list; JSON rows already hold scalars,
with numbers decoded as their literal text. ``scalar`` unwraps either form.
"""

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar

from public_data_proxy.handlers.utils.errors import MalformedUpstreamResponse
from public_data_proxy.handlers.utils.observability import logger, tracer

T = TypeVar('T')

ROW_KEY = 'row'
TOTAL_COUNT_KEY = 'list_total_count'
RESULT_KEY = 'RESULT'


@dataclass
class ParsedPage:
    rows: List[Mapping[str, Any]] = field(default_factory=list)
    total_count: Optional[int] = None
    result_code: str = ''
    result_message: str = ''


def first_or_default(sequence: Optional[Sequence[T]], default: T) -> T:
    """Return the first item of a sequence, or default when it is absent or empty."""
    if not sequence:
        return default
    return sequence[0]


def scalar(value: Any, default: Any = '') -> Any:
    """Unwrap an XML single-element list; pass JSON scalars through."""
    if isinstance(value, list):
        value = first_or_default(value, default)
    return default if value is None else value


def _element_to_node(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        return element.text or ''
    node: Dict[str, List[Any]] = {}
    for child in children:
        node.setdefault(child.tag, []).append(_element_to_node(child))
    return node


def xml_to_mapping(body: str) -> Dict[str, Any]:
    """Convert an XML document into ``{root_tag: node}``."""
    root = ET.fromstring(body)
    return {root.tag: _element_to_node(root)}


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _decode(body: str, content_format: str) -> Any:
    if content_format == 'xml':
        return xml_to_mapping(body)
    if content_format == 'json':
        # numbers keep their upstream text
        return json.loads(body, parse_float=str, parse_int=str)
    raise ValueError(f"Unsupported upstream format: {content_format}")


@tracer.capture_method(capture_response=False)
def parse_upstream_body(body: str, content_format: str, service_name: str) -> ParsedPage:
    """
    Decode an upstream body and pull out its rows and response metadata.

    Args:
        body: Raw response body
        content_format: 'xml' or 'json'
        service_name: Dataset name, expected as the document root key

    Returns:
        Rows in upstream order with the declared total count and result status

    Raises:
        MalformedUpstreamResponse: The body does not decode, or the root key
            or row list is missing
    """
    body_length = len(body)

    try:
        document = _decode(body, content_format)
    except (ET.ParseError, json.JSONDecodeError) as e:
        logger.error("Upstream body could not be decoded", extra={
            "content_format": content_format,
            "body_length": body_length,
            "error": str(e),
        })
        raise MalformedUpstreamResponse(body_length=body_length, reason=type(e).__name__) from e

    root = document.get(service_name) if isinstance(document, Mapping) else None
    root = scalar(root, None)
    if not isinstance(root, Mapping) or ROW_KEY not in root:
        logger.error("Upstream body is missing the expected structure", extra={
            "content_format": content_format,
            "body_length": body_length,
            "root_present": root is not None,
        })
        raise MalformedUpstreamResponse(body_length=body_length, reason="missing root or row list")

    rows = root[ROW_KEY]
    if isinstance(rows, Mapping):
        rows = [rows]
    if not isinstance(rows, list):
        raise MalformedUpstreamResponse(body_length=body_length, reason="row is not a list")

    result = scalar(root.get(RESULT_KEY), {})
    if not isinstance(result, Mapping):
        result = {}

    total = scalar(root.get(TOTAL_COUNT_KEY), None)

    return ParsedPage(
        rows=[row if isinstance(row, Mapping) else {} for row in rows],
        total_count=_to_int(total) if total is not None else None,
        result_code=str(scalar(result.get('CODE'))),
        result_message=str(scalar(result.get('MESSAGE'))),
    )
