from squareit.infrastructure.persistence.sqlalchemy.repositories.number_repository import (  # noqa: E501
    NumberRepositorySQLAlchemy,
)

__all__ = ["NumberRepositorySQLAlchemy"]
