"""
SubscriptionPlan, UserSubscription, and Invoice ORM models.

Amounts are stored in cents. A null message limit means unlimited.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum as SQLAlchemyEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from switchboard.models.enums import BillingCycle, InvoiceStatus, SubscriptionStatus
from switchboard.models.orm.base import Base


class SubscriptionPlan(Base):
    """Subscription plan database table."""

    __tablename__ = "subscription_plans"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(255), default=None)
    monthly_price: Mapped[int] = mapped_column(Integer, default=0)
    yearly_price: Mapped[int] = mapped_column(Integer, default=0)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    message_limit: Mapped[int | None] = mapped_column(Integer, default=None)
    agent_limit: Mapped[int] = mapped_column(Integer, default=1)
    phone_number_limit: Mapped[int] = mapped_column(Integer, default=1)
    features: Mapped[dict[str, Any] | None] = mapped_column(JSON, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=datetime.utcnow,
    )

    def price_for(self, cycle: BillingCycle) -> int:
        """Price in cents for a billing cycle."""
        if cycle == BillingCycle.YEARLY:
            return self.yearly_price or 0
        return self.monthly_price or 0


class UserSubscription(Base):
    """User subscription database table. One row per user."""

    __tablename__ = "user_subscriptions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    plan_id: Mapped[UUID] = mapped_column(ForeignKey("subscription_plans.id"), nullable=False)
    billing_cycle: Mapped[BillingCycle] = mapped_column(
        SQLAlchemyEnum(
            BillingCycle,
            name="billing_cycle",
            native_enum=False,
            length=20,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=BillingCycle.MONTHLY,
    )
    status: Mapped[SubscriptionStatus] = mapped_column(
        SQLAlchemyEnum(
            SubscriptionStatus,
            name="subscription_status",
            native_enum=False,
            length=50,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=SubscriptionStatus.ACTIVE,
    )
    provider_customer_id: Mapped[str | None] = mapped_column(String(100), default=None)
    provider_subscription_id: Mapped[str | None] = mapped_column(String(100), default=None)
    current_period_start: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    current_period_end: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    cancel_at_period_end: Mapped[bool] = mapped_column(Boolean, default=False)
    messages_used: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=datetime.utcnow,
    )

    plan: Mapped["SubscriptionPlan"] = relationship(lazy="joined")

    __table_args__ = (
        Index("ix_user_subscriptions_user_id", "user_id", unique=True),
        Index("ix_user_subscriptions_provider_subscription_id", "provider_subscription_id"),
    )


class Invoice(Base):
    """Invoice database table."""

    __tablename__ = "invoices"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    subscription_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("user_subscriptions.id", ondelete="SET NULL"), default=None
    )
    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    period_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    period_end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    subtotal: Mapped[int] = mapped_column(Integer, default=0)
    tax: Mapped[int] = mapped_column(Integer, default=0)
    total: Mapped[int] = mapped_column(Integer, default=0)
    amount_paid: Mapped[int] = mapped_column(Integer, default=0)
    amount_due: Mapped[int] = mapped_column(Integer, default=0)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    status: Mapped[InvoiceStatus] = mapped_column(
        SQLAlchemyEnum(
            InvoiceStatus,
            name="invoice_status",
            native_enum=False,
            length=50,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=InvoiceStatus.DRAFT,
    )
    paid_at: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    due_date: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    invoice_pdf_url: Mapped[str | None] = mapped_column(String(500), default=None)
    line_items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP")
    )

    __table_args__ = (
        Index("ix_invoices_user_id", "user_id"),
    )
