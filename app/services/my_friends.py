from __future__ import annotations

from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.models.friendship import Friendship, FriendshipStatus
from app.models.user import User
from app.schemas.my_friends import FriendProfile


def user_total_friend_count() -> sa.Select:
    """Accepted-friend count per user, one row per ``user_id``."""
    return (
        sa.select(
            Friendship.user_id,
            sa.func.count(Friendship.friend_user_id).label("total_friend_count"),
        )
        .where(Friendship.status == FriendshipStatus.accepted)
        .group_by(Friendship.user_id)
    )


def mutual_friend_count(user_id: UUID, friend_user_id: UUID) -> sa.Select:
    """Users accepted-friends with both ``user_id`` and ``friend_user_id``.

    Yields a single row, or no row at all when they share nobody.
    """
    f1 = aliased(Friendship)
    f2 = aliased(Friendship)
    return (
        sa.select(sa.func.count(sa.distinct(f1.friend_user_id)).label("mutual_friend_count"))
        .select_from(f1)
        .join(f2, f1.friend_user_id == f2.friend_user_id)
        .where(
            f1.user_id == user_id,
            f2.user_id == friend_user_id,
            f1.status == FriendshipStatus.accepted,
            f2.status == FriendshipStatus.accepted,
        )
        .group_by(f1.user_id)
    )


def friend_profile_query(user_id: UUID, friend_user_id: UUID) -> sa.Select:
    friend = aliased(User, name="friends")
    totals = user_total_friend_count().subquery("total_friend_counts")
    mutual = mutual_friend_count(user_id, friend_user_id).scalar_subquery()

    return (
        sa.select(
            friend.id,
            friend.full_name,
            friend.phone_number,
            sa.func.coalesce(totals.c.total_friend_count, 0).label("total_friend_count"),
            sa.func.coalesce(mutual, 0).label("mutual_friend_count"),
        )
        .join(Friendship, Friendship.friend_user_id == friend.id)
        .outerjoin(totals, totals.c.user_id == friend.id)
        .where(
            Friendship.user_id == user_id,
            Friendship.friend_user_id == friend_user_id,
            Friendship.status == FriendshipStatus.accepted,
        )
        .limit(1)
    )


async def get_friend_profile(db: AsyncSession, user_id: UUID, friend_user_id: UUID) -> FriendProfile:
    row = (await db.execute(friend_profile_query(user_id, friend_user_id))).one_or_none()
    if row is None:
        raise ValueError("friendship_not_found")

    return FriendProfile(
        id=row.id,
        full_name=row.full_name,
        phone_number=row.phone_number,
        total_friend_count=row.total_friend_count,
        mutual_friend_count=row.mutual_friend_count,
    )
