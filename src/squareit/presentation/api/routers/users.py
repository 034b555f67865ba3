"""Account router: registration, profile, login and deletion."""

import logging

from fastapi import APIRouter, status

from squareit.presentation.api.dependencies import (
    BearerToken,
    DBSession,
    Guard,
    Identity,
)
from squareit.presentation.api.schemas import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
    CountResponse,
    LoginRequest,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ACCOUNT_DELETED_MESSAGE = "User account deleted"


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account created, confirmation mail sent"},
        400: {"description": "Email or username already taken"},
        422: {"description": "Invalid profile fields"},
    },
)
async def create_account(
    request: AccountCreateRequest,
    identity: Identity,
    session: DBSession,
) -> AccountResponse:
    """
    Create an unconfirmed account.

    The returned token is only good for confirming the email and for
    requesting another confirmation mail until the account is confirmed.
    """
    account = await identity.create_account(request.to_profile())
    await session.commit()

    return AccountResponse.from_account(account, account.session_token.value)


@router.put(
    "",
    summary="Update the account profile",
    responses={
        200: {"description": "Profile updated, token rotated"},
        400: {"description": "Token mismatch or field already taken"},
        404: {"description": "Account deleted"},
        406: {"description": "Session expired"},
    },
)
async def update_account(
    request: AccountUpdateRequest,
    token: BearerToken,
    identity: Identity,
    guard: Guard,
    session: DBSession,
) -> AccountResponse:
    account = await identity.update_account(
        request.current_email,
        request.to_profile(),
        token,
    )
    new_token = await guard.rotate(account)
    await session.commit()

    return AccountResponse.from_account(account, new_token)


@router.post(
    "/login",
    summary="Authenticate by email or username",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Unknown or unconfirmed account"},
        404: {"description": "Account deleted"},
        406: {"description": "Wrong password"},
    },
)
async def login(
    request: LoginRequest,
    identity: Identity,
    session: DBSession,
) -> AccountResponse:
    """
    Return the account with its session token.

    A still-live token comes back unchanged, so parallel clients of the
    same account keep working. A stale token is rotated first.
    """
    result = await identity.login(request.identifier, request.password)
    if result.rotated:
        await session.commit()

    logger.info("Login for account %s (rotated: %s)", result.account.id, result.rotated)

    return AccountResponse.from_account(result.account, result.token)


@router.get("/me", summary="Get the current account")
async def get_current_account(
    token: BearerToken,
    guard: Guard,
    session: DBSession,
) -> AccountResponse:
    account = await guard.resolve(token)
    new_token = await guard.rotate(account)
    await session.commit()

    return AccountResponse.from_account(account, new_token)


@router.get("/count", summary="Count active accounts")
async def count_accounts(
    token: BearerToken,
    guard: Guard,
    identity: Identity,
    session: DBSession,
) -> CountResponse:
    account = await guard.resolve(token)
    count = await identity.count_active()
    new_token = await guard.rotate(account)
    await session.commit()

    return CountResponse(count=count, token=new_token)


@router.delete(
    "",
    summary="Delete the current account",
    responses={
        200: {"description": "Account soft-deleted"},
        404: {"description": "Account already deleted"},
    },
)
async def delete_account(
    token: BearerToken,
    guard: Guard,
    identity: Identity,
    session: DBSession,
) -> MessageResponse:
    """
    Soft-delete the account. Unconfirmed accounts may delete themselves.

    The token is not rotated; every later use of it fails as deleted.
    """
    account = await guard.resolve(token, require_activation=False)
    await identity.delete_account(account)
    await session.commit()

    return MessageResponse(message=ACCOUNT_DELETED_MESSAGE)
