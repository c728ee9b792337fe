"""
Billing Repositories

Plans are global; subscriptions and invoices are scoped to their user.
"""

from sqlalchemy import select

from switchboard.models.orm import Invoice, SubscriptionPlan, UserSubscription
from switchboard.repositories.base import BaseRepository
from switchboard.repositories.user_scoped import UserScopedRepository


class PlanRepository(BaseRepository[SubscriptionPlan]):
    """Subscription plan catalog."""

    model = SubscriptionPlan

    async def list_active(self) -> list[SubscriptionPlan]:
        """Active plans in display order."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.is_active.is_(True))
            .order_by(self.model.sort_order)
        )
        return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> SubscriptionPlan | None:
        result = await self.session.execute(
            select(self.model).where(self.model.slug == slug)
        )
        return result.scalar_one_or_none()


class SubscriptionRepository(UserScopedRepository[UserSubscription]):
    """The user's subscription row (at most one per user)."""

    model = UserSubscription

    async def get_current(self) -> UserSubscription | None:
        result = await self.session.execute(self.filter_owned(select(self.model)))
        return result.unique().scalar_one_or_none()


class InvoiceRepository(UserScopedRepository[Invoice]):
    """The user's invoices."""

    model = Invoice

    async def list_invoices(self) -> list[Invoice]:
        """List invoices, newest first."""
        result = await self.session.execute(
            self.filter_owned(select(self.model)).order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())
