"""Numeric record owned by exactly one account."""

from datetime import datetime
from uuid import UUID

from squareit.domain.numbers.exceptions import NumberOutOfRangeError

MIN_VALUE = -(2**63)
MAX_VALUE = 2**63 - 1


class NumberRecord:
    """A single stored number.

    ``id`` is assigned by the store on first save and is ``None`` until then.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_id: UUID,
        value: int,
        created_at: datetime,
        updated_at: datetime | None = None,
        deleted: bool = False,
        id: int | None = None,
    ):
        if not MIN_VALUE <= value <= MAX_VALUE:
            raise NumberOutOfRangeError(value)
        self._id = id
        self._account_id = account_id
        self._value = value
        self._deleted = deleted
        self._created_at = created_at
        self._updated_at = updated_at or created_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def account_id(self) -> UUID:
        return self._account_id

    @property
    def value(self) -> int:
        return self._value

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def is_owned_by(self, account_id: UUID) -> bool:
        return self._account_id == account_id

    def mark_deleted(self, now: datetime) -> None:
        self._deleted = True
        self._updated_at = now

    @classmethod
    def create(cls, account_id: UUID, value: int, now: datetime) -> "NumberRecord":
        return cls(account_id=account_id, value=value, created_at=now)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        account_id: UUID,
        value: int,
        deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "NumberRecord":
        return cls(
            id=id,
            account_id=account_id,
            value=value,
            deleted=deleted,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumberRecord):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return (
            f"NumberRecord(id={self._id}, account_id={self._account_id}, "
            f"value={self._value}, deleted={self._deleted})"
        )
