from __future__ import annotations

import enum
import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base


class FriendshipStatus(str, enum.Enum):
    requested = "requested"
    accepted = "accepted"
    declined = "declined"


class Friendship(Base):
    """One directed edge: ``user_id`` -> ``friend_user_id``.

    An accepted friendship is stored as two accepted edges, one per direction.
    Requested and declined edges are one-directional.
    """

    __tablename__ = "friendships"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True)
    friend_user_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True)

    status: Mapped[FriendshipStatus] = mapped_column(
        sa.Enum(
            FriendshipStatus,
            name="friendship_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=FriendshipStatus.requested,
    )

    created_at: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
        nullable=False,
    )

    __table_args__ = (
        sa.UniqueConstraint("user_id", "friend_user_id", name="uq_friendships_edge"),
        sa.CheckConstraint("user_id <> friend_user_id", name="ck_friendships_not_self"),
    )
