"""
Agent ORM model.

Represents a website or WhatsApp AI agent owned by a dashboard user.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Enum as SQLAlchemyEnum, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from switchboard.models.enums import AgentPurpose, AgentType, ToneOfVoice
from switchboard.models.orm.base import Base


def _enum_column(enum_cls: type, name: str) -> SQLAlchemyEnum:
    return SQLAlchemyEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=50,
        values_callable=lambda x: [e.value for e in x],
    )


class Agent(Base):
    """Agent database table."""

    __tablename__ = "agents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    # Subject claim of the owning user
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    website_url: Mapped[str | None] = mapped_column(String(2048), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    system_prompt: Mapped[str | None] = mapped_column(Text, default=None)
    tone_of_voice: Mapped[ToneOfVoice | None] = mapped_column(
        _enum_column(ToneOfVoice, "tone_of_voice"), default=ToneOfVoice.FRIENDLY
    )
    purpose: Mapped[AgentPurpose | None] = mapped_column(
        _enum_column(AgentPurpose, "agent_purpose"), default=AgentPurpose.SUPPORT
    )
    welcome_message: Mapped[str | None] = mapped_column(Text, default=None)
    suggested_questions: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    agent_type: Mapped[AgentType] = mapped_column(
        _enum_column(AgentType, "agent_type"), default=AgentType.WEBSITE
    )
    language: Mapped[str] = mapped_column(String(16), default="en")
    widget_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=datetime.utcnow,
    )

    __table_args__ = (
        Index("ix_agents_user_id", "user_id"),
        Index("ix_agents_is_active", "is_active"),
    )
