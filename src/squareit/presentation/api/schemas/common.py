"""Response bodies used by more than one router."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every domain and storage error."""

    detail: str = Field(..., description="Message of the raised error")
    code: str = Field(..., description="Stable ErrorCode value")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "The token has expired",
                "code": "TOKEN_EXPIRED",
            },
        },
    )


class HealthResponse(BaseModel):
    """Liveness probe answer."""

    status: str
    version: str


class CountResponse(BaseModel):
    """A count together with the rotated session token."""

    count: int
    token: str


class MessageResponse(BaseModel):
    """Plain message, optionally with the caller's current session token."""

    message: str
    token: str | None = None
