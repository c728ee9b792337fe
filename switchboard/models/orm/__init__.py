"""
SQLAlchemy ORM Models for Switchboard

Pure database models using SQLAlchemy 2.0 declarative style.
For API schemas (Create/Update/Public), see models.contracts.
"""

from switchboard.models.orm.agents import Agent
from switchboard.models.orm.base import Base
from switchboard.models.orm.billing import Invoice, SubscriptionPlan, UserSubscription

__all__ = [
    # Base
    "Base",
    # Agents
    "Agent",
    # Billing
    "SubscriptionPlan",
    "UserSubscription",
    "Invoice",
]
