from squareit.presentation.api.schemas.common import (
    CountResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from squareit.presentation.api.schemas.numbers import (
    NumberCreateRequest,
    NumberItem,
    NumberListResponse,
    NumberResponse,
)
from squareit.presentation.api.schemas.registration import ConfirmationResponse
from squareit.presentation.api.schemas.users import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
    LoginRequest,
)

__all__ = [
    "AccountCreateRequest",
    "AccountResponse",
    "AccountUpdateRequest",
    "ConfirmationResponse",
    "CountResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "NumberCreateRequest",
    "NumberItem",
    "NumberListResponse",
    "NumberResponse",
]
