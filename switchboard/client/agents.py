"""
Agent edit page behavior.

Loads an agent into form values, saves edits with PATCH, refreshes the
cached agent queries, and decides where the browser goes next.
"""

from dataclasses import dataclass
from typing import Any

from switchboard.client.client import ApiError, DashboardClient, UnauthorizedError

AGENTS_PATH = "/api/agents"
LOGIN_PATH = "/login"

DEFAULT_TONE = "friendly"
DEFAULT_PURPOSE = "support"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: str = "default"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save: where to navigate (if anywhere) and what to show."""
    redirect_to: str | None
    toast: Toast

    @property
    def ok(self) -> bool:
        return self.toast.variant != "destructive"


@dataclass
class AgentFormValues:
    """Edit form state. Empty strings mean "not set"."""
    name: str = ""
    website_url: str = ""
    description: str = ""
    tone_of_voice: str = DEFAULT_TONE
    purpose: str = DEFAULT_PURPOSE
    is_active: bool = True

    @classmethod
    def from_agent(cls, agent: dict[str, Any]) -> "AgentFormValues":
        return cls(
            name=agent.get("name") or "",
            website_url=agent.get("websiteUrl") or "",
            description=agent.get("description") or "",
            tone_of_voice=agent.get("toneOfVoice") or DEFAULT_TONE,
            purpose=agent.get("purpose") or DEFAULT_PURPOSE,
            is_active=agent.get("isActive") is not False,
        )

    def to_payload(self) -> dict[str, Any]:
        """PATCH body with empty strings sent as null."""
        return {
            "name": self.name,
            "websiteUrl": self.website_url or None,
            "description": self.description or None,
            "toneOfVoice": self.tone_of_voice or None,
            "purpose": self.purpose or None,
            "isActive": self.is_active,
        }


class AgentEditor:
    """The edit-agent page."""

    def __init__(self, client: DashboardClient):
        self.client = client

    async def load(self, agent_id: str) -> AgentFormValues:
        agent = await self.client.query((AGENTS_PATH, agent_id))
        return AgentFormValues.from_agent(agent)

    async def save(self, agent_id: str, values: AgentFormValues) -> SaveResult:
        """
        Submit the form.

        On success the agent list and the agent's own query are invalidated
        and the result redirects to the agent's page. A 401 redirects to the
        login page; any other failure stays on the page with an error toast.
        """
        try:
            await self.client.request("PATCH", f"{AGENTS_PATH}/{agent_id}", json=values.to_payload())
        except UnauthorizedError:
            return SaveResult(
                redirect_to=LOGIN_PATH,
                toast=Toast("Unauthorized", "You are logged out. Logging in again...", "destructive"),
            )
        except ApiError:
            return SaveResult(
                redirect_to=None,
                toast=Toast("Error", "Failed to update agent. Please try again.", "destructive"),
            )

        self.client.invalidate((AGENTS_PATH,))
        self.client.invalidate((AGENTS_PATH, agent_id))
        return SaveResult(
            redirect_to=f"/dashboard/agents/{agent_id}",
            toast=Toast("Agent updated!", "Your changes have been saved."),
        )
