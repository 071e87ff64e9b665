"""
Centralized Test Configuration.
"""

import pytest
import httpx
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from parcel_delivery.app.main import app
from parcel_delivery.app.db.session import get_db, Base
from parcel_delivery.app.core.dependencies import get_token_verifier
from parcel_delivery.app.core.jwt import Identity, TokenVerifier, TokenVerificationError
from parcel_delivery.app.core.reliability import CircuitBreaker
from parcel_delivery.app.services.payment_gateway import PaymentGateway, get_payment_gateway

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeTokenVerifier(TokenVerifier):
    """Accepts only tokens it issued itself and maps them to emails."""

    def __init__(self):
        self.tokens = {}

    def issue(self, email: str) -> str:
        token = f"token-for-{email}"
        self.tokens[token] = email
        return token

    def verify(self, token: str) -> Identity:
        if token not in self.tokens:
            raise TokenVerificationError("unknown token")
        return Identity(email=self.tokens[token], subject=token)


def payment_provider(request: httpx.Request) -> httpx.Response:
    """Stand-in for the provider's payment-intent endpoint."""
    return httpx.Response(200, json={"id": "pi_123", "client_secret": "pi_123_secret_abc"})


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def token_verifier():
    return FakeTokenVerifier()


@pytest.fixture
def payment_gateway():
    return PaymentGateway(
        api_key="sk_test_123",
        base_url="https://payments.test",
        transport=httpx.MockTransport(payment_provider),
        breaker=CircuitBreaker("test-gateway", failure_threshold=2, reset_timeout=60),
    )


@pytest.fixture(autouse=True)
def apply_overrides(session_factory, token_verifier, payment_gateway):
    """Route the app's dependencies to the test doubles."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_verifier] = lambda: token_verifier
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway
    yield
    app.dependency_overrides = {}


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(session_factory):
    """Session for fixture data creation and direct service calls."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth_headers(token_verifier):
    """Build an Authorization header for an email."""

    def _headers(email: str) -> dict:
        return {"Authorization": f"Bearer {token_verifier.issue(email)}"}

    return _headers


@pytest.fixture
async def parcel_id(client):
    """Create an unpaid parcel owned by a@x.com."""
    response = await client.post("/parcels", json={
        "created_by": "a@x.com",
        "title": "Birthday gift",
        "parcel_type": "non-document",
        "weight": 2.5,
        "cost": 150,
    })
    assert response.status_code == 200
    return response.json()["insertedId"]
