# ============================================================================
# FILE: visual_learning/core/payment_provider.py
# ============================================================================
"""Stripe payment intents over the REST API"""

from typing import Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """The provider could not be reached or refused the request"""


class PaymentProvider:
    """Creates provider-side payment intents and hands back their client secret"""

    def __init__(
        self,
        secret_key: str,
        api_url: str = "https://api.stripe.com/v1",
        currency: str = "usd",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.api_url = api_url.rstrip("/")
        self.currency = currency
        self.timeout = timeout
        self._transport = transport

    async def create_payment_intent(self, amount: int, currency: Optional[str] = None) -> str:
        """Stage a card payment of ``amount`` minor units.

        Returns the intent's client secret; raises PaymentProviderError on
        any transport failure, non-2xx answer or a reply without a secret.
        """
        if not self.secret_key:
            raise PaymentProviderError("Payment secret key is not configured")

        form = {
            "amount": str(amount),
            "currency": currency or self.currency,
            "payment_method_types[]": "card",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http_client:
                response = await http_client.post(
                    f"{self.api_url}/payment_intents",
                    data=form,
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"❌ Payment provider error: {e}")
            raise PaymentProviderError(str(e)) from e

        intent = response.json()
        client_secret = intent.get("client_secret")
        if not client_secret:
            logger.error(f"❌ Payment intent without client secret: {intent.get('id')}")
            raise PaymentProviderError("Payment intent has no client secret")

        logger.info(f"✓ Payment intent created: {intent.get('id')}")
        return client_secret
