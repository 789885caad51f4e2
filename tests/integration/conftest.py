from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.fake_gateways import (
    FakeDirectoryGateway,
    FakeLicenseGateway,
    FakeNotificationGateway,
)
from src.depends import (
    get_directory_gateway,
    get_license_gateway,
    get_notification_gateway,
    get_unit_of_work,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
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


@pytest.fixture
def licenses():
    return FakeLicenseGateway({"default": 10, "user_license": 10})


@pytest.fixture
def directory():
    return FakeDirectoryGateway(["acme.com"])


@pytest.fixture
def notifications():
    return FakeNotificationGateway()


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def auth_headers(tenant_id):
    token = generate_jwt(uuid4(), tenant_id)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(db_session, licenses, directory, notifications):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_license_gateway] = lambda: licenses
    app.dependency_overrides[get_directory_gateway] = lambda: directory
    app.dependency_overrides[get_notification_gateway] = lambda: notifications

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
