"""
Billing page behavior.

Fetches subscription status, plans and invoices, and starts the two
provider redirects (checkout and billing portal).
"""

from dataclasses import dataclass, field
from typing import Any

from switchboard.client.client import DashboardClient

SUBSCRIPTION_PATH = "/api/billing/subscription"
PLANS_PATH = "/api/billing/plans"
INVOICES_PATH = "/api/billing/invoices"
CHECKOUT_PATH = "/api/billing/checkout"
PORTAL_PATH = "/api/billing/portal"


@dataclass
class BillingOverview:
    subscription: dict[str, Any]
    plans: list[dict[str, Any]] = field(default_factory=list)
    invoices: list[dict[str, Any]] = field(default_factory=list)


class BillingPage:
    """The dashboard billing page."""

    def __init__(self, client: DashboardClient):
        self.client = client

    async def load(self) -> BillingOverview:
        subscription = await self.client.query((SUBSCRIPTION_PATH,))
        plans = await self.client.query((PLANS_PATH,))
        invoices = await self.client.query((INVOICES_PATH,))
        return BillingOverview(
            subscription=subscription,
            plans=plans.get("plans", []) if isinstance(plans, dict) else plans,
            invoices=invoices or [],
        )

    async def checkout(self, plan_slug: str, billing_cycle: str = "monthly") -> str | None:
        """
        Start checkout for a plan.

        Returns:
            The URL to send the browser to, or None if the response had none

        Raises:
            ApiError: Carrying the server's message
        """
        data = await self.client.request(
            "POST",
            CHECKOUT_PATH,
            json={"planSlug": plan_slug, "billingCycle": billing_cycle},
            error_message="Failed to create checkout session",
        )
        return (data or {}).get("url") or None

    async def open_portal(self) -> str | None:
        """Open the billing portal; returns the URL to send the browser to."""
        data = await self.client.request(
            "POST",
            PORTAL_PATH,
            error_message="Failed to create portal session",
        )
        return (data or {}).get("url") or None
