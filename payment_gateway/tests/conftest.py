import httpx
import pytest
from httpx import ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from payment_gateway.api.deps import get_http_client
from payment_gateway.app import create_app
from payment_gateway.db.base import Base
from payment_gateway.db.core import get_db_session
import payment_gateway.models  # noqa: F401


class ProviderStub:
    """
    Stands in for the provider endpoints behind httpx.MockTransport.
    Set `handler` to control what the provider answers.
    """

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
async def db_engine(tmp_path):
    """File backed sqlite so concurrent sessions see the same database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}",
        echo=False,
        future=True
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    """Factory to create multiple sessions for concurrent tests."""
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False
    )


@pytest.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def provider_stub():
    return ProviderStub()


@pytest.fixture
async def http_client(provider_stub):
    client = httpx.AsyncClient(transport=httpx.MockTransport(provider_stub))
    yield client
    await client.aclose()


@pytest.fixture
async def api_client(db_session_factory, http_client):
    app = create_app()

    async def override_get_db_session():
        async with db_session_factory() as session:
            yield session

    async def override_get_http_client():
        return http_client

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_http_client] = override_get_http_client

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
