"""
Billing Router

Subscription status, plan catalog, invoices, and the checkout and
billing-portal redirects. The plan catalog is public; everything else
requires an authenticated user.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from switchboard.config import get_settings
from switchboard.core.auth import CurrentActiveUser
from switchboard.core.database import DbSession
from switchboard.core.exceptions import (
    BillingProviderError,
    FreePlanError,
    NoBillingAccountError,
    PlanNotFoundError,
)
from switchboard.models.contracts.billing import (
    CheckoutRequest,
    InvoicePublic,
    PlansResponse,
    RedirectResponse,
    SubscriptionStatusResponse,
)
from switchboard.repositories.billing import InvoiceRepository, PlanRepository, SubscriptionRepository
from switchboard.services.billing import BillingService
from switchboard.services.billing_provider import BillingProvider, StripeBillingProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/billing", tags=["Billing"])


# =============================================================================
# Dependencies
# =============================================================================


def get_billing_provider() -> BillingProvider | None:
    """Payment provider from settings, or None when billing is not configured."""
    settings = get_settings()
    if not settings.billing_configured or settings.stripe_secret_key is None:
        return None
    return StripeBillingProvider(
        secret_key=settings.stripe_secret_key,
        api_base=settings.stripe_api_base,
        timeout=settings.billing_timeout_seconds,
    )


def get_billing_service(
    db: DbSession,
    user: CurrentActiveUser,
    provider: Annotated[BillingProvider | None, Depends(get_billing_provider)],
) -> BillingService:
    return BillingService(
        plans=PlanRepository(db),
        subscriptions=SubscriptionRepository(db, user.user_id),
        invoices=InvoiceRepository(db, user.user_id),
        provider=provider,
        public_url=get_settings().public_url,
    )


def get_public_billing_service(db: DbSession) -> BillingService:
    return BillingService(plans=PlanRepository(db))


Billing = Annotated[BillingService, Depends(get_billing_service)]
PublicBilling = Annotated[BillingService, Depends(get_public_billing_service)]


# =============================================================================
# Read Endpoints
# =============================================================================


@router.get("/subscription")
async def get_subscription(service: Billing) -> SubscriptionStatusResponse:
    """Get the current user's subscription status."""
    return await service.get_subscription_status()


@router.get("/plans")
async def list_plans(service: PublicBilling) -> PlansResponse:
    """List active subscription plans (public)."""
    return PlansResponse(plans=await service.list_plans())


@router.get("/invoices")
async def list_invoices(service: Billing) -> list[InvoicePublic]:
    """List the current user's invoices, newest first."""
    return await service.list_invoices()


# =============================================================================
# Redirect Endpoints
# =============================================================================


@router.post("/checkout")
async def create_checkout(
    request: CheckoutRequest,
    service: Billing,
    user: CurrentActiveUser,
) -> RedirectResponse:
    """Start a hosted checkout for a paid plan."""
    try:
        url = await service.create_checkout(user, request.plan_slug, request.billing_cycle)
    except PlanNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except FreePlanError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except BillingProviderError as e:
        logger.error(f"Checkout failed for user {user.user_id}: {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return RedirectResponse(url=url)


@router.post("/portal")
async def create_portal(service: Billing, user: CurrentActiveUser) -> RedirectResponse:
    """Open the hosted billing portal."""
    try:
        url = await service.create_portal()
    except NoBillingAccountError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except BillingProviderError as e:
        logger.error(f"Portal session failed for user {user.user_id}: {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return RedirectResponse(url=url)
