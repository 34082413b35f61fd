from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.api.utils.jwt import generate_jwt
from src.app.services.member_lock import MemberLockRegistry
from src.depends import get_unit_of_work
from src.domain.entities import Campus, Member
from tests.fixtures.json_loader import TestDataLoader


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Directory rows (members and campuses) the service only reads"""
    async with session_factory() as session:
        for campus in TestDataLoader.get_copy("campuses"):
            session.add(
                Campus(
                    id=UUID(campus["id"]),
                    organization_id=UUID(campus["organization_id"]),
                    name=campus["name"],
                )
            )
        for member in TestDataLoader.get_copy("members"):
            session.add(
                Member(
                    id=UUID(member["id"]),
                    display_name=member["display_name"],
                    email=member["email"],
                )
            )
        await session.commit()
    return TestDataLoader


@pytest_asyncio.fixture
async def db_session(session_factory, seeded):
    async with session_factory() as session:
        yield session


@pytest.fixture
def member_locks():
    return MemberLockRegistry(timeout=2.0)


@pytest_asyncio.fixture
async def client(session_factory, seeded, member_locks):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session, member_locks)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    token = generate_jwt(UUID(TestDataLoader.get("actor")["id"]))
    return {"Authorization": f"Bearer {token}"}
