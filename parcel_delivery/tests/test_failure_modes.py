"""
Failure Injection Tests.

Validates resilience against payment provider and store failures.
"""

import pytest
import httpx
from sqlalchemy.exc import OperationalError

from parcel_delivery.app.main import app
from parcel_delivery.app.core.reliability import CircuitBreaker, CircuitOpenError
from parcel_delivery.app.services.payment_gateway import PaymentGateway, get_payment_gateway


def failing_provider(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"error": {"message": "sk_live_leaked internal detail"}})


def unreachable_provider(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def broken_gateway():
    gateway = PaymentGateway(
        api_key="sk_test_123",
        base_url="https://payments.test",
        transport=httpx.MockTransport(failing_provider),
        breaker=CircuitBreaker("broken-gateway", failure_threshold=2, reset_timeout=60),
    )
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    return gateway


@pytest.mark.asyncio
async def test_circuit_breaker_activates():
    """Test that circuit breaker opens after threshold failures."""
    cb = CircuitBreaker("test", failure_threshold=2, reset_timeout=60)

    async def failing_func():
        raise ValueError("Boom")

    for _ in range(2):
        with pytest.raises(ValueError):
            await cb.call(failing_func)

    assert cb.state == "OPEN"
    with pytest.raises(CircuitOpenError):
        await cb.call(failing_func)


@pytest.mark.asyncio
async def test_circuit_breaker_half_open_recovers():
    cb = CircuitBreaker("test", failure_threshold=1, reset_timeout=30)

    async def failing_func():
        raise ValueError("Boom")

    async def working_func():
        return "ok"

    with pytest.raises(ValueError):
        await cb.call(failing_func)
    assert cb.state == "OPEN"

    # Pretend the reset timeout has passed
    cb.last_failure_time -= 31
    assert await cb.call(working_func) == "ok"
    assert cb.state == "CLOSED"
    assert cb.failures == 0


@pytest.mark.asyncio
async def test_circuit_breaker_half_open_failure_reopens():
    cb = CircuitBreaker("test", failure_threshold=3, reset_timeout=30)

    async def failing_func():
        raise ValueError("Boom")

    for _ in range(3):
        with pytest.raises(ValueError):
            await cb.call(failing_func)

    # Pretend the reset timeout has passed
    cb.last_failure_time -= 31
    with pytest.raises(ValueError):
        await cb.call(failing_func)

    assert cb.state == "OPEN"
    with pytest.raises(CircuitOpenError):
        await cb.call(failing_func)


@pytest.mark.asyncio
async def test_gateway_error_is_generic(client, broken_gateway):
    response = await client.post("/create-payment-intent", json={"amountInCents": 1000})

    assert response.status_code == 500
    assert response.json() == {
        "error_code": "ERR_INTERNAL_001",
        "message": "An internal server error occurred",
        "details": {},
    }
    assert "sk_live_leaked" not in response.text


@pytest.mark.asyncio
async def test_gateway_circuit_opens(client, broken_gateway):
    for _ in range(2):
        response = await client.post("/create-payment-intent", json={"amountInCents": 1000})
        assert response.status_code == 500

    response = await client.post("/create-payment-intent", json={"amountInCents": 1000})

    assert response.status_code == 503
    assert response.json()["message"] == "Payment gateway unavailable"


@pytest.mark.asyncio
async def test_unreachable_gateway(client):
    gateway = PaymentGateway(
        api_key="sk_test_123",
        base_url="https://payments.test",
        transport=httpx.MockTransport(unreachable_provider),
    )
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    response = await client.post("/create-payment-intent", json={"amountInCents": 1000})

    assert response.status_code == 500
    assert "connection refused" not in response.text


@pytest.mark.asyncio
async def test_store_outage_is_generic(client, auth_headers, mocker):
    mocker.patch(
        "parcel_delivery.app.services.parcel_service.list_parcels",
        side_effect=OperationalError("SELECT * FROM parcels", {}, Exception("db01.internal:5432 down")),
    )

    response = await client.get("/parcels", headers=auth_headers("a@x.com"))

    assert response.status_code == 500
    assert response.json()["message"] == "An internal server error occurred"
    assert "db01.internal" not in response.text
    assert "parcels" not in response.text


@pytest.mark.asyncio
async def test_error_body_shape_for_unknown_route(client):
    response = await client.get("/no-such-route")

    assert response.status_code == 404
    assert set(response.json()) == {"error_code", "message", "details"}
