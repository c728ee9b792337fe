"""
Payment provider adapter.

The billing service only needs three side-effecting calls from the payment
provider: create a customer, open a hosted checkout for a subscription,
and open the hosted billing portal. Webhook processing lives elsewhere.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from switchboard.core.exceptions import BillingProviderError
from switchboard.models.enums import BillingCycle
from switchboard.models.orm import SubscriptionPlan

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_PARAM = "session_id={CHECKOUT_SESSION_ID}"


class BillingProvider(ABC):
    """
    Abstract base class for payment providers.

    Implementations return provider-hosted URLs; the caller redirects the
    browser there.
    """

    @abstractmethod
    async def create_customer(self, user_id: str, email: str = "", name: str = "") -> str:
        """
        Create a provider customer for a user.

        Returns:
            Provider customer ID
        """
        ...

    @abstractmethod
    async def create_checkout_session(
        self,
        *,
        customer_id: str,
        user_id: str,
        plan: SubscriptionPlan,
        billing_cycle: BillingCycle,
        amount: int,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """
        Create a subscription checkout session.

        Args:
            customer_id: Provider customer ID
            user_id: Owner of the subscription (stored as metadata)
            plan: Plan being purchased
            billing_cycle: Monthly or yearly billing
            amount: Price in cents for the billing cycle
            success_url: Where the provider sends the browser after payment
            cancel_url: Where the provider sends the browser on cancel

        Returns:
            Checkout URL
        """
        ...

    @abstractmethod
    async def create_portal_session(self, *, customer_id: str, return_url: str) -> str:
        """
        Create a billing-portal session.

        Returns:
            Portal URL
        """
        ...


def encode_form(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested dicts/lists into bracketed form keys (``a[b][0][c]``)."""
    encoded: dict[str, str] = {}
    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            encoded.update(encode_form(value, name))
        elif isinstance(value, list):
            encoded.update(encode_form(dict(enumerate(value)), name))
        elif isinstance(value, bool):
            encoded[name] = "true" if value else "false"
        else:
            encoded[name] = str(value)
    return encoded


def with_session_id(url: str) -> str:
    """Append the checkout-session placeholder the provider fills in on redirect."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{CHECKOUT_SESSION_PARAM}"


class StripeBillingProvider(BillingProvider):
    """Stripe over its REST API (form-encoded requests, bearer secret key)."""

    def __init__(
        self,
        secret_key: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _post(self, path: str, data: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.api_base}{path}"
        headers = {"Authorization": f"Bearer {self.secret_key}"}
        try:
            if self._client is not None:
                response = await self._client.post(url, data=encode_form(data), headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, data=encode_form(data), headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.error(f"Stripe request to {path} failed: {e}")
            raise BillingProviderError(f"Payment provider unavailable: {e}") from e

        if response.is_success:
            return response.json()

        error_msg = response.text
        try:
            error_data = response.json()
            if isinstance(error_data, dict) and "error" in error_data:
                error_msg = error_data["error"].get("message", error_msg)
        except ValueError:
            pass
        logger.warning(f"Stripe rejected {path} ({response.status_code}): {error_msg}")
        raise BillingProviderError(error_msg, status_code=response.status_code)

    async def create_customer(self, user_id: str, email: str = "", name: str = "") -> str:
        data = await self._post("/v1/customers", {
            "email": email or None,
            "name": name or None,
            "metadata": {"userId": user_id},
        })
        return data["id"]

    async def create_checkout_session(
        self,
        *,
        customer_id: str,
        user_id: str,
        plan: SubscriptionPlan,
        billing_cycle: BillingCycle,
        amount: int,
        success_url: str,
        cancel_url: str,
    ) -> str:
        interval = "year" if billing_cycle == BillingCycle.YEARLY else "month"
        data = await self._post("/v1/checkout/sessions", {
            "customer": customer_id,
            "payment_method_types": ["card"],
            "mode": "subscription",
            "line_items": [
                {
                    "price_data": {
                        "currency": (plan.currency or "USD").lower(),
                        "product_data": {
                            "name": f"{plan.name} Plan",
                            "description": f"{plan.name} Plan ({billing_cycle.value})",
                        },
                        "unit_amount": amount,
                        "recurring": {"interval": interval},
                    },
                    "quantity": 1,
                }
            ],
            "success_url": with_session_id(success_url),
            "cancel_url": cancel_url,
            "metadata": {
                "userId": user_id,
                "planId": str(plan.id),
                "planSlug": plan.slug,
                "billingCycle": billing_cycle.value,
            },
        })
        return data.get("url") or ""

    async def create_portal_session(self, *, customer_id: str, return_url: str) -> str:
        data = await self._post("/v1/billing_portal/sessions", {
            "customer": customer_id,
            "return_url": return_url,
        })
        return data["url"]
