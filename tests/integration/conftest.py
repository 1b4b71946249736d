from datetime import datetime
from urllib.parse import parse_qs, urlparse

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Return
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import SigningContext
from src.app.services.email_dispatcher import IEmailDispatcher
from src.depends import get_clock, get_email_dispatcher, get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader


class IntegrationConfig(ApplicationConfig):
    JWT_SECRET = "integration-test-signing-secret-0123456789"
    ENVIRONMENT = "test"
    CREATE_TABLES_ON_STARTUP = False
    ENABLE_LOGGING_MIDDLEWARE = True
    FRONTEND_URL = "http://frontend.test"
    SMTP_HOST = ""


class CapturingEmailDispatcher(IEmailDispatcher):
    """Keeps sent reset emails in memory instead of mailing them"""

    def __init__(self):
        self.sent = []

    async def send_password_reset(self, to_address, reset_url, recipient_name):
        self.sent.append(
            {"to": to_address, "url": reset_url, "name": recipient_name}
        )
        return Return.ok(None)

    def last_token(self) -> str:
        query = parse_qs(urlparse(self.sent[-1]["url"]).query)
        return query["token"][0]


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr("src.app.services.credentials.BCRYPT_ROUNDS", 4)


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def email_outbox():
    return CapturingEmailDispatcher()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 12, 0, 0))


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
def app(db_session, email_outbox, clock):
    from src.api.app import create_app

    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_dispatcher] = lambda: email_outbox
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(client, test_data):
    """Registers a@x.com / Passw0rd1 and returns the register response body"""
    response = await client.post("/api/auth/register", json=test_data.get_copy("register_user"))
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def signing_context():
    return SigningContext.from_config(IntegrationConfig)


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}
