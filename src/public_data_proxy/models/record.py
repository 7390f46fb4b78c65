"""
Canonical restaurant record exposed to clients.

Field declaration order is the serialization order, so it must not change.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalRecord(BaseModel):
    """Flat, client-facing representation of one business entry."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: Annotated[str, Field(description='Management number', examples=['3000000-101-2004-00123'])] = ''
    business_name: Annotated[str, Field(description='Business name', examples=['종로칼국수'])] = ''
    business_type: Annotated[str, Field(description='Business-type category', examples=['한식'])] = ''
    lot_address: Annotated[str, Field(description='Full lot-number address')] = ''
    road_address: Annotated[str, Field(description='Full road-name address')] = ''
    phone: Annotated[str, Field(description='Site phone number')] = ''
    status: Annotated[str, Field(description='Business status name', examples=['영업/정상', '폐업'])] = ''
    closure_date: Annotated[str, Field(description='Closure date (YYYY-MM-DD)')] = ''
    permit_date: Annotated[str, Field(description='Permit date (YYYY-MM-DD)')] = ''
    x: Annotated[str, Field(description='X coordinate as sent by the source')] = ''
    y: Annotated[str, Field(description='Y coordinate as sent by the source')] = ''
    facility_scale: Annotated[str, Field(description='Total facility scale')] = ''
    lot_postal_code: Annotated[str, Field(description='Postal code of the lot address')] = ''
    road_postal_code: Annotated[str, Field(description='Postal code of the road address')] = ''
