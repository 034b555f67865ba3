"""Email confirmation schemas."""

from pydantic import BaseModel

from squareit_identity import ConfirmationResult, ConfirmationStatus


class ConfirmationResponse(BaseModel):
    """Outcome of following a confirmation link.

    ``token`` is always the newest session token, whether the account got
    confirmed or a fresh confirmation mail went out.
    """

    status: ConfirmationStatus
    message: str
    token: str

    @classmethod
    def from_result(cls, result: ConfirmationResult) -> "ConfirmationResponse":
        return cls(status=result.status, message=result.message, token=result.token)
