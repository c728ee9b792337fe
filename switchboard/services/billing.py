"""
Billing Service

Subscription status, plan and invoice listings, and the checkout/portal
redirects for the dashboard billing page. Provider webhooks, which keep
subscriptions in sync, are handled outside this service.
"""

import logging

from switchboard.core.auth import UserPrincipal
from switchboard.core.exceptions import (
    BillingProviderError,
    FreePlanError,
    NoBillingAccountError,
    PlanNotFoundError,
)
from switchboard.models.contracts.billing import (
    FREE_MESSAGE_LIMIT,
    FREE_PLAN_SLUG,
    InvoicePublic,
    PlanPublic,
    SubscriptionStatusResponse,
)
from switchboard.models.enums import BillingCycle, SubscriptionStatus
from switchboard.repositories.billing import InvoiceRepository, PlanRepository, SubscriptionRepository
from switchboard.services.billing_provider import BillingProvider

logger = logging.getLogger(__name__)

BILLING_PAGE_PATH = "/dashboard/billing"


def is_unlimited(limit: int | None) -> bool:
    """Plans store None (or -1) for unlimited."""
    return limit is None or limit < 0


class BillingService:
    """
    Billing operations for one user.

    ``subscriptions`` and ``invoices`` are scoped to the calling user; the
    plan catalog is shared. Public endpoints build the service with only
    the plan repository.
    """

    def __init__(
        self,
        plans: PlanRepository,
        subscriptions: SubscriptionRepository | None = None,
        invoices: InvoiceRepository | None = None,
        provider: BillingProvider | None = None,
        public_url: str = "http://localhost:3000",
    ):
        self.plans = plans
        self.subscriptions = subscriptions
        self.invoices = invoices
        self.provider = provider
        self.public_url = public_url.rstrip("/")

    def _require_user_scope(self) -> tuple[SubscriptionRepository, InvoiceRepository]:
        if self.subscriptions is None or self.invoices is None:
            raise RuntimeError("BillingService was created without a user scope")
        return self.subscriptions, self.invoices

    def _require_provider(self) -> BillingProvider:
        if self.provider is None:
            raise BillingProviderError("Billing is not configured")
        return self.provider

    @property
    def billing_page_url(self) -> str:
        return f"{self.public_url}{BILLING_PAGE_PATH}"

    # ==================== READS ====================

    async def list_plans(self) -> list[PlanPublic]:
        """Active plans ordered for the pricing table."""
        plans = await self.plans.list_active()
        return [PlanPublic.model_validate(plan) for plan in plans]

    async def list_invoices(self) -> list[InvoicePublic]:
        _, invoices = self._require_user_scope()
        return [InvoicePublic.model_validate(invoice) for invoice in await invoices.list_invoices()]

    async def get_subscription_status(self) -> SubscriptionStatusResponse:
        """
        Current subscription summary.

        Users without an active subscription get the free-tier defaults.
        """
        subscriptions, _ = self._require_user_scope()
        subscription = await subscriptions.get_current()

        if subscription is None or subscription.status != SubscriptionStatus.ACTIVE:
            return SubscriptionStatusResponse(
                has_active_subscription=False,
                plan=FREE_PLAN_SLUG,
                messages_used=0,
                message_limit=FREE_MESSAGE_LIMIT,
            )

        plan = subscription.plan
        message_limit = plan.message_limit if plan is not None else None
        return SubscriptionStatusResponse(
            has_active_subscription=True,
            plan=plan.slug if plan is not None else "unknown",
            messages_used=subscription.messages_used or 0,
            message_limit=None if is_unlimited(message_limit) else message_limit,
            current_period_end=subscription.current_period_end,
            cancel_at_period_end=bool(subscription.cancel_at_period_end),
        )

    async def can_send_message(self) -> tuple[bool, int | None]:
        """
        Check the monthly message allowance.

        Returns:
            (allowed, remaining); remaining is None when unlimited
        """
        status = await self.get_subscription_status()
        if status.message_limit is None:
            return True, None

        remaining = status.message_limit - status.messages_used
        return remaining > 0, max(0, remaining)

    async def record_message_usage(self, count: int = 1) -> None:
        """Add to the current period's message count, if the user has a subscription."""
        subscriptions, _ = self._require_user_scope()
        subscription = await subscriptions.get_current()
        if subscription is None:
            return
        await subscriptions.update(subscription, messages_used=(subscription.messages_used or 0) + count)

    # ==================== PROVIDER REDIRECTS ====================

    async def _get_or_create_customer(self, user: UserPrincipal) -> str:
        subscriptions, _ = self._require_user_scope()
        subscription = await subscriptions.get_current()
        if subscription is not None and subscription.provider_customer_id:
            return subscription.provider_customer_id

        customer_id = await self._require_provider().create_customer(
            user.user_id, email=user.email, name=user.name
        )
        logger.info(f"Created billing customer {customer_id} for user {user.user_id}")
        return customer_id

    async def create_checkout(self, user: UserPrincipal, plan_slug: str, billing_cycle: BillingCycle) -> str:
        """
        Start a hosted checkout for a paid plan.

        Raises:
            PlanNotFoundError: Unknown or inactive plan
            FreePlanError: The plan costs nothing for this billing cycle
            BillingProviderError: Provider not configured or request failed

        Returns:
            Checkout URL to redirect the browser to
        """
        plan = await self.plans.get_by_slug(plan_slug)
        if plan is None or not plan.is_active:
            raise PlanNotFoundError(plan_slug)

        amount = plan.price_for(billing_cycle)
        if amount <= 0:
            raise FreePlanError()

        customer_id = await self._get_or_create_customer(user)
        url = await self._require_provider().create_checkout_session(
            customer_id=customer_id,
            user_id=user.user_id,
            plan=plan,
            billing_cycle=billing_cycle,
            amount=amount,
            success_url=f"{self.billing_page_url}?success=true",
            cancel_url=f"{self.billing_page_url}?cancelled=true",
        )
        logger.info(f"Checkout session created for user {user.user_id} on plan {plan.slug} ({billing_cycle.value})")
        return url

    async def create_portal(self) -> str:
        """
        Open the hosted billing portal.

        Raises:
            NoBillingAccountError: The user has no provider customer yet

        Returns:
            Portal URL to redirect the browser to
        """
        subscriptions, _ = self._require_user_scope()
        subscription = await subscriptions.get_current()
        if subscription is None or not subscription.provider_customer_id:
            raise NoBillingAccountError()

        return await self._require_provider().create_portal_session(
            customer_id=subscription.provider_customer_id,
            return_url=self.billing_page_url,
        )
