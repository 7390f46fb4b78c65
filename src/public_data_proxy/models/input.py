"""
Input models for request validation using Pydantic.

This module defines the page request parsed from the inbound query string
of the restaurants endpoint.
"""

from typing import Annotated, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PageRequest(BaseModel):
    """A bounded [start_index, end_index] window over the upstream dataset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_index: Annotated[int, Field(
        alias='startIdx',
        ge=1,
        description='1-based index of the first upstream record',
        examples=[1]
    )] = 1

    end_index: Annotated[int, Field(
        alias='endIdx',
        ge=1,
        description='1-based index of the last upstream record, inclusive',
        examples=[100, 1000]
    )]

    district: Annotated[str | None, Field(
        default=None,
        alias='dong',
        max_length=50,
        description='Dong name that must appear in the record address',
        examples=['종로1가']
    )] = None

    business_type: Annotated[str | None, Field(
        default=None,
        alias='업태구분명',
        max_length=50,
        description='Business-type category forwarded to the upstream API',
        examples=['한식']
    )] = None

    @field_validator('district', 'business_type', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only filters as absent."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode='after')
    def check_bounds(self) -> 'PageRequest':
        if self.end_index < self.start_index:
            raise ValueError('endIdx must be greater than or equal to startIdx')
        return self

    @property
    def page_size(self) -> int:
        return self.end_index - self.start_index + 1

    @classmethod
    def from_query(cls, query: Mapping[str, str] | None, default_end_index: int) -> 'PageRequest':
        """Build a page request from API Gateway query string parameters."""
        params = dict(query or {})
        params.setdefault('endIdx', default_end_index)
        return cls.model_validate(params)
