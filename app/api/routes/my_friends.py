from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.api.http_errors import value_error
from app.models.user import User
from app.schemas.my_friends import FriendProfile
from app.services.my_friends import get_friend_profile

router = APIRouter(prefix="/my-friends", tags=["my-friends"])


@router.get("/{friend_user_id}", response_model=FriendProfile)
async def get_friend_by_id(
    friend_user_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return await get_friend_profile(db, user.id, friend_user_id)
    except ValueError as e:
        raise value_error(
            e,
            code_statuses={"friendship_not_found": 404},
            detail_overrides={"friendship_not_found": "Friend not found"},
            default_status=404,
        ) from e
