"""
Billing contract models for Switchboard.

Plans, subscription status, invoices and the checkout/portal redirects
shown on the dashboard billing page. Amounts are integer cents.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from switchboard.models.enums import BillingCycle, InvoiceStatus

FREE_PLAN_SLUG = "free"
FREE_MESSAGE_LIMIT = 100


class BillingModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


# ==================== PLANS ====================


class PlanPublic(BillingModel):
    """Subscription plan as listed on the pricing table."""
    id: UUID
    name: str
    slug: str
    description: str | None = None
    monthly_price: int = 0
    yearly_price: int = 0
    currency: str = "USD"
    message_limit: int | None = Field(default=None, description="None means unlimited")
    agent_limit: int = 1
    phone_number_limit: int = 1
    features: dict[str, Any] | None = None
    sort_order: int = 0

    @field_serializer("id")
    def serialize_uuid(self, v: UUID) -> str:
        return str(v)


class PlansResponse(BillingModel):
    plans: list[PlanPublic]


# ==================== SUBSCRIPTION ====================


class SubscriptionStatusResponse(BillingModel):
    """Current subscription summary; free-tier defaults when none is active."""
    has_active_subscription: bool = False
    plan: str = FREE_PLAN_SLUG
    messages_used: int = 0
    message_limit: int | None = FREE_MESSAGE_LIMIT
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False

    @field_serializer("current_period_end")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None


# ==================== INVOICES ====================


class InvoiceLineItem(BillingModel):
    description: str
    quantity: int = 1
    unit_price: int = 0
    total: int = 0


class InvoicePublic(BillingModel):
    """Invoice output for API responses."""
    id: UUID
    invoice_number: str
    period_start: datetime
    period_end: datetime
    subtotal: int = 0
    tax: int = 0
    total: int = 0
    amount_paid: int = 0
    amount_due: int = 0
    currency: str = "USD"
    status: InvoiceStatus
    paid_at: datetime | None = None
    due_date: datetime | None = None
    invoice_pdf_url: str | None = None
    line_items: list[InvoiceLineItem] = Field(default_factory=list)
    created_at: datetime

    @field_serializer("id")
    def serialize_uuid(self, v: UUID) -> str:
        return str(v)

    @field_serializer("period_start", "period_end", "paid_at", "due_date", "created_at")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None


# ==================== CHECKOUT / PORTAL ====================


class CheckoutRequest(BillingModel):
    """Request body for starting a paid subscription checkout."""
    plan_slug: str = Field(..., min_length=1, max_length=50)
    billing_cycle: BillingCycle


class RedirectResponse(BillingModel):
    """Provider-hosted page the browser should navigate to."""
    url: str
