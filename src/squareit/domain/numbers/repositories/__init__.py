from squareit.domain.numbers.repositories.number_repository import NumberRepository

__all__ = ["NumberRepository"]
