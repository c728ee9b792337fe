"""
Agent Repository

Repository for Agent CRUD operations scoped to the owning user.
"""

from uuid import UUID

from sqlalchemy import select

from switchboard.models.contracts.agents import AgentCreate, AgentUpdate
from switchboard.models.orm import Agent
from switchboard.repositories.user_scoped import UserScopedRepository

NON_NULLABLE_FIELDS = {"name", "is_active", "language", "suggested_questions"}


class AgentRepository(UserScopedRepository[Agent]):
    """Agents belong to exactly one user; there is no shared scope."""

    model = Agent

    async def list_agents(self, active_only: bool = False) -> list[Agent]:
        """
        List the user's agents, newest first.

        Args:
            active_only: If True, only return active agents

        Returns:
            List of Agent ORM objects
        """
        query = self.filter_owned(select(self.model))

        if active_only:
            query = query.where(self.model.is_active.is_(True))

        query = query.order_by(self.model.created_at.desc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_agent(self, agent_id: UUID) -> Agent | None:
        """
        Get an agent by ID.

        Returns:
            Agent ORM object or None if not found

        Raises:
            AccessDeniedError: If the agent belongs to another user
        """
        return await self.get_owned(agent_id)

    async def create_agent(self, data: AgentCreate) -> Agent:
        agent = Agent(user_id=self.user_id, **data.model_dump())
        return await self.create(agent)

    async def update_agent(self, agent: Agent, data: AgentUpdate) -> Agent:
        """Apply the fields present in the request body. Explicit nulls on required columns are ignored."""
        values = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in NON_NULLABLE_FIELDS
        }
        return await self.update(agent, **values)

    async def delete_agent(self, agent: Agent) -> None:
        await self.delete(agent)
