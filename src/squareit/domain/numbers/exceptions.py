"""Numeric record domain exceptions."""

from squareit.domain.shared.exceptions import (
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class NumberNotFoundError(EntityNotFoundError):
    """Record is unknown, owned by another account or soft-deleted."""

    def __init__(self, number_id: int) -> None:
        self.number_id = number_id
        super().__init__(
            f"Number object with id = {number_id} does not exist",
            ErrorCode.NUMBER_NOT_FOUND,
            {"number_id": number_id},
        )


class NumberOutOfRangeError(ValidationError):
    """Value does not fit into a signed 64-bit integer."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Number must fit into 64 bits, got: {value}")
