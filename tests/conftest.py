"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite (aiosqlite) DB, session, and httpx
client fixtures. Each test gets a fresh schema on its own engine.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from complaint_portal.database import Base, get_db
from complaint_portal.main import app
from complaint_portal.models import *  # noqa: F401,F403 — register all models with metadata
from complaint_portal.models.enums import Role
from complaint_portal.models.user import User
from complaint_portal.schemas.actor import Actor
from complaint_portal.services.auth_service import auth_service, to_actor
from complaint_portal.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# 테스트 속도를 위한 낮은 bcrypt cost — Low bcrypt cost for fixtures
TEST_BCRYPT_ROUNDS = 4
TEST_PASSWORD = "secret123"


class FrozenClock:
    """수동으로 진행하는 시계 — Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now: datetime = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 단일 연결을 공유하는 인메모리 DB."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 사용자 생성
# ---------------------------------------------------------------------------
async def make_user(
    db: AsyncSession,
    name: str,
    email: str,
    role: Role,
    department: str | None = None,
) -> User:
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(TEST_PASSWORD, rounds=TEST_BCRYPT_ROUNDS),
        role=role,
        department=department,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await make_user(db, "Alice Admin", "admin@portal.io", Role.ADMIN)


@pytest_asyncio.fixture
async def staff_user(db: AsyncSession) -> User:
    return await make_user(db, "Sam Staff", "staff@portal.io", Role.STAFF, department="Maintenance")


@pytest_asyncio.fixture
async def other_staff(db: AsyncSession) -> User:
    return await make_user(db, "Olga Staff", "olga@portal.io", Role.STAFF, department="Electrical")


@pytest_asyncio.fixture
async def submitter(db: AsyncSession) -> User:
    """민원 작성자 — Complaint submitter (User role)."""
    return await make_user(db, "Uma User", "uma@portal.io", Role.USER)


@pytest_asyncio.fixture
async def other_user(db: AsyncSession) -> User:
    return await make_user(db, "Victor User", "victor@portal.io", Role.USER)


def actor_of(user: User) -> Actor:
    return to_actor(user)


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return auth_service.issue_token(user)


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}
