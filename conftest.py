import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import fnmatch
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import eventquote.core.redis as redis_module
from eventquote.main import app
from eventquote.db.session import get_db
from eventquote.models.base import Base
from eventquote.models.user import User
from eventquote.core.security import create_access_token, hash_password
from eventquote.core.enums import UserRole


test_engine = create_async_engine(
    "sqlite+aiosqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)

AsyncSessionTest = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class FakeRedis:
    """In-memory stand-in for the redis.asyncio client; TTLs are recorded, not enforced."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        if isinstance(value, str):
            value = value.encode()
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def incr(self, key):
        value = int(self.data.get(key, b"0")) + 1
        self.data[key] = str(value).encode()
        return value

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def scan_iter(self, match="*"):
        for key in list(self.data):
            if fnmatch.fnmatch(key, match):
                yield key

    async def close(self):
        pass


class FailingRedis(FakeRedis):
    async def get(self, key):
        raise ConnectionError("redis is down")

    async def set(self, key, value, ex=None):
        raise ConnectionError("redis is down")

    async def scan_iter(self, match="*"):
        raise ConnectionError("redis is down")
        yield


async def override_get_db():
    async with AsyncSessionTest() as session:
        yield session


@pytest.fixture
async def setup_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.dependency_overrides[get_db] = override_get_db
    yield

    app.dependency_overrides.pop(get_db, None)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(setup_db):
    async with AsyncSessionTest() as session:
        yield session


@pytest.fixture
def fake_redis():
    previous = redis_module.redis
    redis_module.redis = FakeRedis()
    yield redis_module.redis
    redis_module.redis = previous


@pytest.fixture
def failing_redis():
    previous = redis_module.redis
    redis_module.redis = FailingRedis()
    yield redis_module.redis
    redis_module.redis = previous


@pytest.fixture
async def test_client(setup_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _create_user(email: str, role: UserRole) -> User:
    async with AsyncSessionTest() as session:
        user = User(email=email, name=email.split("@")[0], password_hash=hash_password("secret123"), role=role)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
async def admin_user(setup_db):
    return await _create_user("admin@example.com", UserRole.ADMIN)


@pytest.fixture
async def quoter_user(setup_db):
    return await _create_user("quoter@example.com", UserRole.QUOTER)


@pytest.fixture
async def other_quoter_user(setup_db):
    return await _create_user("other@example.com", UserRole.QUOTER)


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(str(admin_user.id), admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def quoter_headers(quoter_user):
    token = create_access_token(str(quoter_user.id), quoter_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_quoter_headers(other_quoter_user):
    token = create_access_token(str(other_quoter_user.id), other_quoter_user.role)
    return {"Authorization": f"Bearer {token}"}
