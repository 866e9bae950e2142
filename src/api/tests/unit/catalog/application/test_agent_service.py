"""Unit tests for AgentService."""

from unittest.mock import AsyncMock, Mock

import pytest

from catalog.application.observability import AgentServiceProbe
from catalog.application.services import AgentService, TenantResolver
from catalog.domain.aggregates import Agent
from catalog.domain.exceptions import ValidationError
from catalog.domain.value_objects import (
    AgentId,
    ExistingTenant,
    NewTenantName,
    NoTenant,
    TenantFilter,
    TenantId,
)
from catalog.ports.exceptions import AgentNotFoundError, TenantNotFoundError
from catalog.ports.repositories import IAgentRepository


@pytest.fixture
def mock_agent_repo():
    repo = Mock(spec=IAgentRepository)
    repo.save = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=True)
    repo.list = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_resolver():
    """TenantResolver that passes choices through and maps them to IDs."""
    resolver = Mock(spec=TenantResolver)
    resolver.create_if_new = AsyncMock(side_effect=lambda choice: choice)

    async def tenant_id_for(choice):
        if isinstance(choice, ExistingTenant):
            return choice.tenant_id
        return None

    resolver.tenant_id_for = AsyncMock(side_effect=tenant_id_for)
    return resolver


@pytest.fixture
def mock_probe():
    return Mock(spec=AgentServiceProbe)


@pytest.fixture
def agent_service(mock_agent_repo, mock_resolver, mock_session, mock_probe):
    return AgentService(
        agent_repository=mock_agent_repo,
        tenant_resolver=mock_resolver,
        session=mock_session,
        probe=mock_probe,
    )


class TestCreateAgent:
    @pytest.mark.asyncio
    async def test_creates_general_purpose_agent(
        self, agent_service, mock_agent_repo, mock_probe
    ):
        agent = await agent_service.create_agent(name="Bot", workflow_id="wf_123")

        assert agent.tenant_id is None
        assert len(agent.slug.value) == 12
        mock_agent_repo.save.assert_awaited_once_with(agent)
        mock_probe.agent_created.assert_called_once_with(
            agent_id=agent.id.value, slug=agent.slug.value, tenant_id=None
        )

    @pytest.mark.asyncio
    async def test_creates_agent_under_existing_tenant(self, agent_service):
        tenant_id = TenantId.generate()

        agent = await agent_service.create_agent(
            name="Bot", workflow_id="wf_123", tenant=ExistingTenant(tenant_id)
        )

        assert agent.tenant_id == tenant_id

    @pytest.mark.asyncio
    async def test_new_tenant_name_is_created_first(
        self, agent_service, mock_resolver
    ):
        tenant_id = TenantId.generate()
        mock_resolver.create_if_new = AsyncMock(
            return_value=ExistingTenant(tenant_id)
        )

        agent = await agent_service.create_agent(
            name="Bot", workflow_id="wf_123", tenant=NewTenantName("Acme")
        )

        mock_resolver.create_if_new.assert_awaited_once_with(NewTenantName("Acme"))
        assert agent.tenant_id == tenant_id

    @pytest.mark.asyncio
    async def test_invalid_agent_creates_no_tenant(
        self, agent_service, mock_resolver, mock_agent_repo
    ):
        with pytest.raises(ValidationError):
            await agent_service.create_agent(
                name="", workflow_id="wf_123", tenant=NewTenantName("Acme")
            )

        mock_resolver.create_if_new.assert_not_called()
        mock_agent_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_tenant_saves_nothing(
        self, agent_service, mock_resolver, mock_agent_repo
    ):
        mock_resolver.tenant_id_for = AsyncMock(side_effect=TenantNotFoundError("x"))

        with pytest.raises(TenantNotFoundError):
            await agent_service.create_agent(
                name="Bot",
                workflow_id="wf_123",
                tenant=ExistingTenant(TenantId.generate()),
            )

        mock_agent_repo.save.assert_not_called()


class TestGetAndListAgents:
    @pytest.mark.asyncio
    async def test_get_missing_agent_raises(self, agent_service, mock_probe):
        agent_id = AgentId.generate()

        with pytest.raises(AgentNotFoundError):
            await agent_service.get_agent(agent_id)

        mock_probe.agent_not_found.assert_called_once_with(agent_id=agent_id.value)

    @pytest.mark.asyncio
    async def test_list_passes_filter(self, agent_service, mock_agent_repo, mock_probe):
        agents = [Agent.create(name="Bot", workflow_id="wf_123")]
        mock_agent_repo.list = AsyncMock(return_value=agents)

        result = await agent_service.list_agents(TenantFilter.general())

        assert result == agents
        mock_agent_repo.list.assert_awaited_once_with(TenantFilter.general())
        mock_probe.agents_listed.assert_called_once_with(count=1, scope="general")

    @pytest.mark.asyncio
    async def test_list_defaults_to_all(self, agent_service, mock_agent_repo):
        await agent_service.list_agents()

        mock_agent_repo.list.assert_awaited_once_with(TenantFilter.all())


class TestUpdateAgent:
    @pytest.fixture
    def agent(self, mock_agent_repo):
        agent = Agent.create(
            name="Bot", workflow_id="wf_123", tenant_id=TenantId.generate()
        )
        mock_agent_repo.get_by_id = AsyncMock(return_value=agent)
        return agent

    @pytest.mark.asyncio
    async def test_requires_at_least_one_field(self, agent_service, mock_session):
        with pytest.raises(ValidationError, match="At least one field"):
            await agent_service.update_agent(AgentId.generate())

        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_updates_only_given_fields(
        self, agent_service, agent, mock_agent_repo, mock_probe
    ):
        tenant_id = agent.tenant_id
        slug = agent.slug

        result = await agent_service.update_agent(agent.id, name="Support Bot")

        assert result.name == "Support Bot"
        assert result.workflow_id == "wf_123"
        assert result.tenant_id == tenant_id
        assert result.slug == slug
        mock_agent_repo.save.assert_awaited_once_with(agent)
        mock_probe.agent_updated.assert_called_once_with(
            agent_id=agent.id.value, fields=["name"]
        )

    @pytest.mark.asyncio
    async def test_no_tenant_moves_agent_to_general(self, agent_service, agent):
        result = await agent_service.update_agent(agent.id, tenant=NoTenant())

        assert result.tenant_id is None

    @pytest.mark.asyncio
    async def test_missing_agent_raises(self, agent_service, mock_agent_repo):
        with pytest.raises(AgentNotFoundError):
            await agent_service.update_agent(AgentId.generate(), name="Bot")

        mock_agent_repo.save.assert_not_called()


class TestDeleteAgent:
    @pytest.mark.asyncio
    async def test_deletes_agent(self, agent_service, mock_agent_repo, mock_probe):
        agent = Agent.create(name="Bot", workflow_id="wf_123")
        mock_agent_repo.get_by_id = AsyncMock(return_value=agent)

        await agent_service.delete_agent(agent.id)

        mock_agent_repo.delete.assert_awaited_once_with(agent)
        mock_probe.agent_deleted.assert_called_once_with(agent_id=agent.id.value)

    @pytest.mark.asyncio
    async def test_missing_agent_raises(self, agent_service, mock_agent_repo):
        with pytest.raises(AgentNotFoundError):
            await agent_service.delete_agent(AgentId.generate())

        mock_agent_repo.delete.assert_not_called()
