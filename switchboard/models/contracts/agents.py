"""
Agent contract models for Switchboard.

Dashboard JSON uses camelCase keys; both spellings are accepted on input.
"""

from datetime import datetime
from typing import Any
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from switchboard.models.enums import AgentPurpose, AgentType, ToneOfVoice


def _validate_website_url(v: str | None) -> str | None:
    """Empty strings mean "no website"; anything else must be an http(s) URL."""
    if v is None or v == "":
        return None
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Please enter a valid URL")
    return v


# ==================== AGENT MODELS ====================


class AgentCreate(BaseModel):
    """Request model for creating an agent."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    website_url: str | None = Field(default=None, max_length=2048)
    description: str | None = Field(default=None, max_length=1000)
    system_prompt: str | None = None
    tone_of_voice: ToneOfVoice = ToneOfVoice.FRIENDLY
    purpose: AgentPurpose = AgentPurpose.SUPPORT
    welcome_message: str | None = None
    suggested_questions: list[str] = Field(default_factory=list)
    agent_type: AgentType = AgentType.WEBSITE
    language: str = Field(default="en", max_length=16)
    widget_config: dict[str, Any] | None = None

    _check_website_url = field_validator("website_url")(_validate_website_url)


class AgentUpdate(BaseModel):
    """
    Request model for updating an agent.

    Only the fields the edit form exposes are accepted; ownership and
    timestamps cannot be changed through this model.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    website_url: str | None = Field(default=None, max_length=2048)
    description: str | None = Field(default=None, max_length=1000)
    system_prompt: str | None = None
    tone_of_voice: ToneOfVoice | None = None
    purpose: AgentPurpose | None = None
    welcome_message: str | None = None
    suggested_questions: list[str] | None = None
    is_active: bool | None = None
    language: str | None = Field(default=None, max_length=16)
    widget_config: dict[str, Any] | None = None

    _check_website_url = field_validator("website_url")(_validate_website_url)


class AgentPublic(BaseModel):
    """Agent output for API responses."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID
    user_id: str
    name: str
    website_url: str | None = None
    description: str | None = None
    system_prompt: str | None = None
    tone_of_voice: ToneOfVoice | None = None
    purpose: AgentPurpose | None = None
    welcome_message: str | None = None
    suggested_questions: list[str] = Field(default_factory=list)
    is_active: bool
    agent_type: AgentType
    language: str
    widget_config: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("id")
    def serialize_uuid(self, v: UUID) -> str:
        return str(v)

    @field_serializer("created_at", "updated_at")
    def serialize_dt(self, dt: datetime) -> str:
        return dt.isoformat()
