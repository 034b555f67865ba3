"""SQLAlchemy model for the Account aggregate."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from squareit.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin


class AccountModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    The session token is stored inline; an account always has exactly one.
    ``version`` is an optimistic lock so two requests that resolved the same
    token cannot both rotate it.
    """

    __tablename__ = "accounts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(30), default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(30), default="", nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="USER", nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    token_value: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        nullable=False,
        index=True,
    )
    confirmation_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    sliding_anchor: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return (
            f"<AccountModel(id={self.id}, username={self.username}, "
            f"email={self.email}, enabled={self.enabled}, deleted={self.deleted})>"
        )
