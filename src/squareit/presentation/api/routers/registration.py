"""Email confirmation router."""

import logging

from fastapi import APIRouter

from squareit.presentation.api.dependencies import BearerToken, DBSession, Guard
from squareit.presentation.api.schemas import ConfirmationResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CONFIRMATION_SENT_MESSAGE = "Confirmation email sent"
CONFIRMATION_RESENT_MESSAGE = "New confirmation email sent"


@router.post("/email", summary="Send the confirmation mail again")
async def request_confirmation_email(
    token: BearerToken,
    guard: Guard,
) -> MessageResponse:
    token_value = await guard.request_confirmation_email(token)
    return MessageResponse(message=CONFIRMATION_SENT_MESSAGE, token=token_value)


@router.get(
    "/resend/{email}",
    summary="Reissue the confirmation link",
    responses={
        200: {"description": "New token mailed to the account"},
        400: {"description": "Unknown or already confirmed account"},
        404: {"description": "Account deleted"},
    },
)
async def resend_confirmation(
    email: str,
    guard: Guard,
    session: DBSession,
) -> MessageResponse:
    """
    Reissue the token of an unconfirmed account.

    The new token only travels by mail; the response does not carry it.
    """
    await guard.resend_confirmation(email)
    await session.commit()

    return MessageResponse(message=CONFIRMATION_RESENT_MESSAGE)


@router.get(
    "/confirm/{token}",
    summary="Confirm the account email",
    responses={
        200: {"description": "Confirmed, or pending with a fresh mail sent"},
        400: {"description": "Malformed token or already confirmed"},
        404: {"description": "Account deleted"},
    },
)
async def confirm(
    token: str,
    guard: Guard,
    session: DBSession,
) -> ConfirmationResponse:
    result = await guard.confirm(token)
    await session.commit()

    logger.debug("Confirmation finished with status %s", result.status.value)
    return ConfirmationResponse.from_result(result)
