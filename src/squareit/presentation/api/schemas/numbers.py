"""Numeric record schemas."""

from pydantic import BaseModel, Field

from squareit.domain.numbers import MAX_VALUE, MIN_VALUE, NumberRecord


class NumberCreateRequest(BaseModel):
    """Request schema for storing a number."""

    number: int = Field(..., ge=MIN_VALUE, le=MAX_VALUE)


class NumberItem(BaseModel):
    id: int
    number: int

    @classmethod
    def from_record(cls, record: NumberRecord) -> "NumberItem":
        return cls(id=record.id, number=record.value)


class NumberResponse(NumberItem):
    """One record together with the rotated session token."""

    token: str

    @classmethod
    def from_record_with_token(
        cls,
        record: NumberRecord,
        token: str,
    ) -> "NumberResponse":
        return cls(id=record.id, number=record.value, token=token)


class NumberListResponse(BaseModel):
    """One zero-based page of records."""

    items: list[NumberItem]
    page: int
    page_size: int
    token: str
