"""
Payment provider client.

Exchanges an amount for a client secret the checkout page can confirm.
"""

import logging
from typing import Optional
import httpx
from fastapi import Request

from parcel_delivery.app.core.config import settings
from parcel_delivery.app.core.exceptions import PaymentGatewayError, ServiceUnavailableError
from parcel_delivery.app.core.reliability import CircuitBreaker, CircuitOpenError

logger = logging.getLogger(__name__)


class PaymentGateway:
    """
    Client for the provider's payment-intent API.

    Args:
        api_key: Provider secret key
        base_url: Provider API root
        currency: ISO currency of every intent
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
        breaker: Circuit breaker shared by all calls of this gateway
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.stripe.com",
        currency: str = "usd",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.currency = currency
        self.timeout = timeout
        self.transport = transport
        self.breaker = breaker or CircuitBreaker("payment-gateway", failure_threshold=5, reset_timeout=60)

    def _get_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def create_intent(self, amount_in_cents: int) -> str:
        """
        Create a card payment intent.

        Raises:
            PaymentGatewayError: Provider or transport failure
            ServiceUnavailableError: Circuit is open after repeated failures

        Returns:
            The intent's client secret
        """
        try:
            return await self.breaker.call(self._create_intent, amount_in_cents)
        except CircuitOpenError:
            raise ServiceUnavailableError("Payment gateway unavailable")

    async def _create_intent(self, amount_in_cents: int) -> str:
        data = {
            "amount": amount_in_cents,
            "currency": self.currency,
            "payment_method_types[]": "card",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/v1/payment_intents",
                    data=data,
                    headers=self._get_headers(),
                )
        except httpx.HTTPError as e:
            logger.error("Payment gateway request failed: %s", e)
            raise PaymentGatewayError("Payment gateway request failed") from e

        if response.status_code != 200:
            logger.error("Payment gateway error: %s - %s", response.status_code, response.text)
            raise PaymentGatewayError(f"Payment gateway returned {response.status_code}")

        client_secret = response.json().get("client_secret")
        if not client_secret:
            raise PaymentGatewayError("Payment gateway response has no client_secret")

        return client_secret


def build_payment_gateway() -> PaymentGateway:
    """Create the gateway configured in settings."""
    return PaymentGateway(
        api_key=settings.payment_gateway_key,
        base_url=settings.payment_gateway_url,
        currency=settings.payment_currency,
        timeout=settings.payment_gateway_timeout,
    )


def get_payment_gateway(request: Request) -> PaymentGateway:
    """FastAPI dependency returning the gateway created at startup."""
    return request.app.state.payment_gateway
