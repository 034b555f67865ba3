"""Numeric records owned by accounts."""

from squareit.domain.numbers.aggregates import MAX_VALUE, MIN_VALUE, NumberRecord
from squareit.domain.numbers.exceptions import (
    NumberNotFoundError,
    NumberOutOfRangeError,
)
from squareit.domain.numbers.repositories import NumberRepository

__all__ = [
    "MAX_VALUE",
    "MIN_VALUE",
    "NumberNotFoundError",
    "NumberOutOfRangeError",
    "NumberRecord",
    "NumberRepository",
]
