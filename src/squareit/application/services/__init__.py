from squareit.application.services.number_service import NumberService

__all__ = ["NumberService"]
