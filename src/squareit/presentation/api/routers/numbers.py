"""Numeric records router.

Every endpoint rotates the caller's token and returns the new value.
"""

import logging

from fastapi import APIRouter, Query, status

from squareit.presentation.api.dependencies import (
    BearerToken,
    DBSession,
    Numbers,
    SettingsDep,
)
from squareit.presentation.api.schemas import (
    CountResponse,
    NumberCreateRequest,
    NumberItem,
    NumberListResponse,
    NumberResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, summary="Store a number")
async def save_number(
    request: NumberCreateRequest,
    token: BearerToken,
    numbers: Numbers,
    session: DBSession,
) -> NumberResponse:
    record, new_token = await numbers.save_number(token, request.number)
    await session.commit()

    return NumberResponse.from_record_with_token(record, new_token)


@router.get("", summary="List stored numbers")
async def list_numbers(
    token: BearerToken,
    numbers: Numbers,
    session: DBSession,
    settings: SettingsDep,
    page: int = Query(default=0, description="Zero-based page number"),
) -> NumberListResponse:
    records, new_token = await numbers.list_numbers(token, page)
    await session.commit()

    logger.debug("Listed %d numbers on page %d", len(records), page)

    return NumberListResponse(
        items=[NumberItem.from_record(r) for r in records],
        page=page,
        page_size=settings.record_page_size,
        token=new_token,
    )


@router.get("/count", summary="Count stored numbers")
async def count_numbers(
    token: BearerToken,
    numbers: Numbers,
    session: DBSession,
) -> CountResponse:
    count, new_token = await numbers.count_numbers(token)
    await session.commit()

    return CountResponse(count=count, token=new_token)


@router.get(
    "/{number_id}",
    summary="Get one number",
    responses={404: {"description": "Unknown, foreign or deleted number"}},
)
async def get_number(
    number_id: int,
    token: BearerToken,
    numbers: Numbers,
    session: DBSession,
) -> NumberResponse:
    record, new_token = await numbers.get_number(token, number_id)
    await session.commit()

    return NumberResponse.from_record_with_token(record, new_token)


@router.delete(
    "/{number_id}",
    summary="Delete one number",
    responses={404: {"description": "Unknown, foreign or deleted number"}},
)
async def delete_number(
    number_id: int,
    token: BearerToken,
    numbers: Numbers,
    session: DBSession,
) -> NumberResponse:
    record, new_token = await numbers.delete_number(token, number_id)
    await session.commit()

    return NumberResponse.from_record_with_token(record, new_token)
