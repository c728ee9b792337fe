"""
Switchboard dashboard client.

Python counterparts of the dashboard pages, built on an httpx client.
"""

from switchboard.client.agents import AgentEditor, AgentFormValues, SaveResult, Toast
from switchboard.client.billing import BillingOverview, BillingPage
from switchboard.client.client import ApiError, DashboardClient, UnauthorizedError

__all__ = [
    "AgentEditor",
    "AgentFormValues",
    "ApiError",
    "BillingOverview",
    "BillingPage",
    "DashboardClient",
    "SaveResult",
    "Toast",
    "UnauthorizedError",
]
