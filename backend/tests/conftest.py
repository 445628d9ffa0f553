import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from auth.application.services import create_user
from auth.domain.entities import Role, User
from shared.dependencies import get_db
from shared.infrastructure.database import Base
from shared.infrastructure.unit_of_work import DbUnitOfWork

import auth.infrastructure.models  # noqa: F401
import documents.infrastructure.models  # noqa: F401
import sharing.infrastructure.models  # noqa: F401

PASSWORD = "secret123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def test_engine(tmp_path):
    url = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(db):
    return DbUnitOfWork(db)


@pytest.fixture(autouse=True)
async def override_db(session_factory):
    async def _override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def make_user(uow: DbUnitOfWork, name: str, role: Role = Role.USER) -> User:
    return await create_user(uow, email=f"{name}@example.com", password=PASSWORD, role=role)


async def create_user_and_get_headers(
    client: AsyncClient, uow: DbUnitOfWork, name: str = "alice", role: Role = Role.USER
) -> tuple[User, dict]:
    """Provision a user directly and log in through the API."""
    user = await make_user(uow, name, role)
    resp = await client.post(
        "/api/auth/login",
        json={"email": user.email, "password": PASSWORD},
    )
    token = resp.json()["access_token"]
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def alice(uow):
    return await make_user(uow, "alice")


@pytest.fixture
async def bob(uow):
    return await make_user(uow, "bob")


@pytest.fixture
async def auth_headers(client, uow) -> dict:
    _, headers = await create_user_and_get_headers(client, uow)
    return headers
