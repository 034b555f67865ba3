from squareit.presentation.api.routers.numbers import router as numbers_router
from squareit.presentation.api.routers.registration import (
    router as registration_router,
)
from squareit.presentation.api.routers.users import router as users_router

__all__ = [
    "numbers_router",
    "registration_router",
    "users_router",
]
