import os
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

# IMPORTANT:
# Set env vars BEFORE importing app.settings/app.main (pydantic settings load at import time)
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "dev-test-secret")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:5173")

import sqlalchemy as sa  # noqa: E402

from app.main import app as fastapi_app  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.base_class import Base  # noqa: E402
import app.db.base  # noqa: F401,E402  (register models)
from app.db.session import engine, AsyncSessionLocal  # noqa: E402
from app.models.friendship import Friendship, FriendshipStatus  # noqa: E402
from app.models.user import User  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
async def _create_test_schema(anyio_backend):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    """
    Requests get their own sessions (the real get_db). Committed rows are
    visible to db_session, and a route-level rollback never expires the
    objects a test is holding.
    """
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# --- Small helpers ---

@pytest.fixture
def user_factory(db_session):
    async def _create(*, full_name: str | None = None, phone_number: str = "+15550100") -> User:
        user = User(
            full_name=full_name or f"User {uuid.uuid4().hex[:6]}",
            phone_number=phone_number,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


@pytest.fixture
def login_as():
    def _login(client: AsyncClient, user: User) -> None:
        client.cookies.clear()
        client.cookies.set("access_token", create_access_token(subject=str(user.id)))

    return _login


@pytest.fixture
def edge_factory(db_session):
    async def _create(user: User, friend: User, status: FriendshipStatus) -> None:
        db_session.add(Friendship(user_id=user.id, friend_user_id=friend.id, status=status))
        await db_session.commit()

    return _create


@pytest.fixture
def befriend(edge_factory):
    async def _befriend(a: User, b: User) -> None:
        await edge_factory(a, b, FriendshipStatus.accepted)
        await edge_factory(b, a, FriendshipStatus.accepted)

    return _befriend


@pytest.fixture
def edges(db_session):
    """Current friendship rows as ``(user_id, friend_user_id, status)`` tuples."""

    async def _edges() -> list[tuple[uuid.UUID, uuid.UUID, FriendshipStatus]]:
        rows = await db_session.execute(
            sa.select(Friendship.user_id, Friendship.friend_user_id, Friendship.status)
        )
        return [tuple(r) for r in rows.all()]

    return _edges
