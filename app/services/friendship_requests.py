from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.friendship import Friendship, FriendshipStatus
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardResult:
    ok: bool
    reason: str | None = None


_OK = GuardResult(ok=True)


def _rejected(reason: str) -> GuardResult:
    return GuardResult(ok=False, reason=reason)


def _require(guard: GuardResult) -> None:
    if not guard.ok:
        raise ValueError(guard.reason)


async def check_can_send(db: AsyncSession, user_id: UUID, friend_user_id: UUID) -> GuardResult:
    if user_id == friend_user_id:
        return _rejected("cannot_friend_self")

    q = sa.select(User.id).where(User.id == friend_user_id).limit(1)
    if (await db.execute(q)).scalar_one_or_none() is None:
        return _rejected("user_not_found")

    return _OK


async def check_can_answer(db: AsyncSession, user_id: UUID, requester_id: UUID) -> GuardResult:
    # The pending edge points from the requester to the caller.
    q = (
        sa.select(Friendship.id)
        .where(
            Friendship.user_id == requester_id,
            Friendship.friend_user_id == user_id,
            Friendship.status == FriendshipStatus.requested,
        )
        .limit(1)
    )
    if (await db.execute(q)).scalar_one_or_none() is None:
        return _rejected("request_not_found")

    return _OK


def _insert_for(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"edge upsert is not supported on {dialect}")


async def _upsert_edge(
    db: AsyncSession,
    user_id: UUID,
    friend_user_id: UUID,
    status: FriendshipStatus,
) -> None:
    insert = _insert_for(db)
    stmt = insert(Friendship).values(
        user_id=user_id,
        friend_user_id=friend_user_id,
        status=status,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "friend_user_id"],
        set_={"status": stmt.excluded.status, "updated_at": sa.func.now()},
    )
    await db.execute(stmt)


async def _answer_request(
    db: AsyncSession,
    requester_id: UUID,
    user_id: UUID,
    status: FriendshipStatus,
) -> None:
    # Only a still-pending edge may be answered; the guard read may be stale.
    result = await db.execute(
        sa.update(Friendship)
        .where(
            Friendship.user_id == requester_id,
            Friendship.friend_user_id == user_id,
            Friendship.status == FriendshipStatus.requested,
        )
        .values(status=status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise ValueError("request_not_found")


async def send_friendship_request(db: AsyncSession, user_id: UUID, friend_user_id: UUID) -> None:
    _require(await check_can_send(db, user_id, friend_user_id))

    # A declined (or any earlier) edge is reopened instead of duplicated.
    await _upsert_edge(db, user_id, friend_user_id, FriendshipStatus.requested)
    await db.commit()
    logger.info("Friendship request sent: %s -> %s", user_id, friend_user_id)


async def accept_friendship_request(db: AsyncSession, user_id: UUID, requester_id: UUID) -> None:
    _require(await check_can_answer(db, user_id, requester_id))

    try:
        await _answer_request(db, requester_id, user_id, FriendshipStatus.accepted)
        await _upsert_edge(db, user_id, requester_id, FriendshipStatus.accepted)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Accepting friendship request %s -> %s failed", requester_id, user_id)
        raise

    logger.info("Friendship request accepted: %s -> %s", requester_id, user_id)


async def decline_friendship_request(db: AsyncSession, user_id: UUID, requester_id: UUID) -> None:
    _require(await check_can_answer(db, user_id, requester_id))

    await _answer_request(db, requester_id, user_id, FriendshipStatus.declined)
    await db.commit()
    logger.info("Friendship request declined: %s -> %s", requester_id, user_id)
