# Data access layer - SQLAlchemy repositories
from switchboard.repositories.agents import AgentRepository
from switchboard.repositories.base import BaseRepository
from switchboard.repositories.billing import InvoiceRepository, PlanRepository, SubscriptionRepository
from switchboard.repositories.user_scoped import UserScopedRepository

__all__ = [
    "AgentRepository",
    "BaseRepository",
    "InvoiceRepository",
    "PlanRepository",
    "SubscriptionRepository",
    "UserScopedRepository",
]
