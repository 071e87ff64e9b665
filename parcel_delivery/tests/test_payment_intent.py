"""
Payment intent tests.
"""

import pytest
import httpx
from urllib.parse import parse_qs

from parcel_delivery.app.core.exceptions import PaymentGatewayError
from parcel_delivery.app.services.payment_gateway import PaymentGateway


@pytest.mark.asyncio
async def test_create_payment_intent(client):
    response = await client.post("/create-payment-intent", json={"amountInCents": 15000})

    assert response.status_code == 200
    assert response.json() == {"clientSecret": "pi_123_secret_abc"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"amountInCents": 0}, {"amountInCents": -100}, {"amountInCents": "lots"}])
async def test_create_payment_intent_validation(client, body):
    response = await client.post("/create-payment-intent", json=body)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_gateway_sends_card_intent():
    """The provider receives amount, currency and card as form data with the secret key."""
    seen = {}

    def provider(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"client_secret": "pi_9_secret_x"})

    gateway = PaymentGateway(
        api_key="sk_test_abc",
        base_url="https://payments.test/",
        currency="bdt",
        transport=httpx.MockTransport(provider),
    )

    secret = await gateway.create_intent(2500)

    assert secret == "pi_9_secret_x"
    assert seen["url"] == "https://payments.test/v1/payment_intents"
    assert seen["auth"] == "Bearer sk_test_abc"
    assert seen["form"] == {
        "amount": ["2500"],
        "currency": ["bdt"],
        "payment_method_types[]": ["card"],
    }


@pytest.mark.asyncio
async def test_gateway_response_without_secret():
    gateway = PaymentGateway(
        api_key="sk_test_abc",
        base_url="https://payments.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"id": "pi_1"})),
    )

    with pytest.raises(PaymentGatewayError):
        await gateway.create_intent(2500)
