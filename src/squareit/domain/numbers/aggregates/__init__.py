from squareit.domain.numbers.aggregates.number_record import (
    MAX_VALUE,
    MIN_VALUE,
    NumberRecord,
)

__all__ = ["MAX_VALUE", "MIN_VALUE", "NumberRecord"]
