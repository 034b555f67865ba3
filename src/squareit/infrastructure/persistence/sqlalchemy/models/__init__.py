"""SQLAlchemy models.

Importing this package registers every table on ``Base.metadata``,
including the identity tables the numbers table refers to.
"""

from squareit.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin
from squareit.infrastructure.persistence.sqlalchemy.models.number_model import (
    NumberModel,
)
from squareit_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)

__all__ = [
    "AccountModel",
    "Base",
    "NumberModel",
    "TimestampMixin",
]
