"""
Agents Router

CRUD operations for the dashboard's AI agents. Every agent belongs to the
user that created it; other users get 403 on direct access.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from switchboard.core.auth import CurrentActiveUser
from switchboard.core.database import DbSession
from switchboard.core.exceptions import AccessDeniedError
from switchboard.models.contracts.agents import AgentCreate, AgentPublic, AgentUpdate
from switchboard.models.orm import Agent
from switchboard.repositories.agents import AgentRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agents", tags=["Agents"])


def get_agent_repository(db: DbSession, user: CurrentActiveUser) -> AgentRepository:
    return AgentRepository(db, user.user_id)


AgentRepo = Annotated[AgentRepository, Depends(get_agent_repository)]


async def _get_agent_or_404(repo: AgentRepository, agent_id: UUID) -> Agent:
    try:
        agent = await repo.get_agent(agent_id)
    except AccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Agent not found",
        )
    return agent


# =============================================================================
# Agent CRUD Endpoints
# =============================================================================


@router.get("")
async def list_agents(repo: AgentRepo, active_only: bool = False) -> list[AgentPublic]:
    """List the current user's agents, newest first."""
    agents = await repo.list_agents(active_only=active_only)
    return [AgentPublic.model_validate(agent) for agent in agents]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_agent(request: AgentCreate, repo: AgentRepo) -> AgentPublic:
    """Create a new agent owned by the current user."""
    agent = await repo.create_agent(request)
    logger.info(f"Created agent {agent.id} for user {repo.user_id}")
    return AgentPublic.model_validate(agent)


@router.get("/{agent_id}")
async def get_agent(agent_id: UUID, repo: AgentRepo) -> AgentPublic:
    """Get an agent by ID."""
    agent = await _get_agent_or_404(repo, agent_id)
    return AgentPublic.model_validate(agent)


@router.patch("/{agent_id}")
async def update_agent(agent_id: UUID, request: AgentUpdate, repo: AgentRepo) -> AgentPublic:
    """
    Update an agent's editable settings.

    Only fields present in the body are changed. Unknown keys are
    rejected with 422.
    """
    agent = await _get_agent_or_404(repo, agent_id)
    agent = await repo.update_agent(agent, request)
    logger.info(f"Updated agent {agent_id}")
    return AgentPublic.model_validate(agent)


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agent(agent_id: UUID, repo: AgentRepo) -> None:
    """Delete an agent."""
    agent = await _get_agent_or_404(repo, agent_id)
    await repo.delete_agent(agent)
    logger.info(f"Deleted agent {agent_id}")
