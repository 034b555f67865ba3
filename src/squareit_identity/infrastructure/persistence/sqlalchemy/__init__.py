"""SQLAlchemy persistence for identity aggregates."""

from squareit_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)
from squareit_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)

__all__ = ["AccountModel", "AccountRepositorySQLAlchemy"]
