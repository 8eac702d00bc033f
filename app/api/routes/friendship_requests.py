from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.api.http_errors import value_error
from app.models.user import User
from app.schemas.friendship_requests import FriendshipRequestIn, SuccessResponse
from app.services.friendship_requests import (
    accept_friendship_request,
    decline_friendship_request,
    send_friendship_request,
)

router = APIRouter(prefix="/friendship-requests", tags=["friendship-requests"])

_SEND_STATUSES = {
    "user_not_found": 400,
    "cannot_friend_self": 400,
}
_SEND_DETAILS = {
    "user_not_found": "User not found",
    "cannot_friend_self": "You cannot friend yourself",
}
_ANSWER_STATUSES = {"request_not_found": 400}
_ANSWER_DETAILS = {"request_not_found": "No pending friendship request from this user"}


@router.post("/send", response_model=SuccessResponse)
async def send_request(
    payload: FriendshipRequestIn,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        await send_friendship_request(db, user.id, payload.friend_user_id)
        return SuccessResponse(success=True)
    except ValueError as e:
        await db.rollback()
        raise value_error(
            e,
            code_statuses=_SEND_STATUSES,
            detail_overrides=_SEND_DETAILS,
            default_detail="Could not send friendship request",
        ) from e


@router.post("/accept", response_model=SuccessResponse)
async def accept_request(
    payload: FriendshipRequestIn,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        await accept_friendship_request(db, user.id, payload.friend_user_id)
        return SuccessResponse(success=True)
    except ValueError as e:
        await db.rollback()
        raise value_error(
            e,
            code_statuses=_ANSWER_STATUSES,
            detail_overrides=_ANSWER_DETAILS,
            default_detail="Could not accept friendship request",
        ) from e


@router.post("/decline", response_model=SuccessResponse)
async def decline_request(
    payload: FriendshipRequestIn,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        await decline_friendship_request(db, user.id, payload.friend_user_id)
        return SuccessResponse(success=True)
    except ValueError as e:
        await db.rollback()
        raise value_error(
            e,
            code_statuses=_ANSWER_STATUSES,
            detail_overrides=_ANSWER_DETAILS,
            default_detail="Could not decline friendship request",
        ) from e
