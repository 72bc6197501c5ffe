import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.api.app import create_app
from auth_service.depends import (
    get_notification_producer,
    get_unit_of_work,
    get_user_profile_client,
)
from tests.fixtures.fakes import FakeNotificationProducer, FakeUserProfileClient


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def user_profile():
    return FakeUserProfileClient()


@pytest_asyncio.fixture
def notifications():
    return FakeNotificationProducer()


@pytest_asyncio.fixture
async def client(db_session, user_profile, notifications):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_user_profile_client] = lambda: user_profile
    app.dependency_overrides[get_notification_producer] = lambda: notifications

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(client, user_profile):
    """User known to the user service with password Secret123!"""
    user = user_profile.add_user("u@x.com")
    response = await client.post(
        "/auth/credentials",
        json={
            "userId": str(user.id),
            "firstName": user.first_name,
            "email": user.email,
            "password": "Secret123!",
        },
    )
    assert response.status_code == 204
    return user
