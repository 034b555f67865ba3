"""SQLAlchemy model for NumberRecord."""

from uuid import UUID

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from squareit.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin


class NumberModel(Base, TimestampMixin):
    __tablename__ = "numbers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    value: Mapped[int] = mapped_column(BigInteger, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<NumberModel(id={self.id}, account_id={self.account_id}, "
            f"value={self.value}, deleted={self.deleted})>"
        )
