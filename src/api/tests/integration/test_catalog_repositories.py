"""Integration tests for the catalog repositories.

These tests require PostgreSQL to be running.
They verify persistence details that SQLite cannot: constraint names,
RESTRICT foreign keys and timezone-aware timestamps.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from catalog.domain.aggregates import Agent, Dashboard, Tenant
from catalog.domain.value_objects import TenantFilter
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.dashboard_repository import DashboardRepository
from catalog.infrastructure.tenant_repository import TenantRepository
from catalog.ports.exceptions import DuplicateSlugError, DuplicateTenantNameError

pytestmark = pytest.mark.integration


@pytest.fixture
def tenant_repository(async_session) -> TenantRepository:
    return TenantRepository(session=async_session)


@pytest.fixture
def agent_repository(async_session) -> AgentRepository:
    return AgentRepository(session=async_session)


@pytest.fixture
def dashboard_repository(async_session) -> DashboardRepository:
    return DashboardRepository(session=async_session)


class TestTenantPersistence:
    @pytest.mark.asyncio
    async def test_saves_and_retrieves_tenant(self, tenant_repository, async_session):
        """Should save tenant to PostgreSQL and retrieve it."""
        tenant = Tenant.create(name="Acme Corp")

        async with async_session.begin():
            await tenant_repository.save(tenant)

        async with async_session.begin():
            retrieved = await tenant_repository.get_by_id(tenant.id)

        assert retrieved is not None
        assert retrieved.name == "Acme Corp"
        assert retrieved.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_duplicate_name_maps_unique_violation(
        self, tenant_repository, async_session
    ):
        async with async_session.begin():
            await tenant_repository.save(Tenant.create(name="Acme"))

        with pytest.raises(DuplicateTenantNameError):
            async with async_session.begin():
                await tenant_repository.save(Tenant.create(name="Acme"))

    @pytest.mark.asyncio
    async def test_tenant_with_agents_cannot_be_deleted_directly(
        self, tenant_repository, agent_repository, async_session
    ):
        """Agents must be resolved before their tenant row goes away."""
        tenant = Tenant.create(name="Acme")
        async with async_session.begin():
            await tenant_repository.save(tenant)
            await agent_repository.save(
                Agent.create(name="Bot", workflow_id="wf_1", tenant_id=tenant.id)
            )

        with pytest.raises(IntegrityError):
            async with async_session.begin():
                await tenant_repository.delete(tenant)

        async with async_session.begin():
            assert await tenant_repository.get_by_id(tenant.id) is not None


class TestAgentPersistence:
    @pytest.mark.asyncio
    async def test_duplicate_slug_maps_unique_violation(
        self, agent_repository, async_session
    ):
        first = Agent.create(name="One", workflow_id="wf_1")
        second = Agent.create(name="Two", workflow_id="wf_2")
        second.slug = first.slug

        async with async_session.begin():
            await agent_repository.save(first)

        with pytest.raises(DuplicateSlugError):
            async with async_session.begin():
                await agent_repository.save(second)

    @pytest.mark.asyncio
    async def test_general_filter(self, tenant_repository, agent_repository, async_session):
        tenant = Tenant.create(name="Acme")
        general = Agent.create(name="General", workflow_id="wf_1")
        owned = Agent.create(name="Owned", workflow_id="wf_2", tenant_id=tenant.id)

        async with async_session.begin():
            await tenant_repository.save(tenant)
            await agent_repository.save(general)
            await agent_repository.save(owned)

        async with async_session.begin():
            agents = await agent_repository.list(TenantFilter.general())

        assert [agent.id for agent in agents] == [general.id]


class TestDashboardPersistence:
    @pytest.mark.asyncio
    async def test_memberships_persist_in_order(
        self, agent_repository, dashboard_repository, async_session
    ):
        first = Agent.create(name="First", workflow_id="wf_1")
        second = Agent.create(name="Second", workflow_id="wf_2")
        dashboard = Dashboard.create(title="Support")
        dashboard.add_agents([second.id, first.id])

        async with async_session.begin():
            await agent_repository.save(first)
            await agent_repository.save(second)
            await dashboard_repository.save(dashboard)

        async with async_session.begin():
            retrieved = await dashboard_repository.get_by_slug(dashboard.slug.value)

        assert retrieved is not None
        assert retrieved.agent_ids == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_deleting_agent_removes_membership(
        self, agent_repository, dashboard_repository, async_session
    ):
        agent = Agent.create(name="Bot", workflow_id="wf_1")
        dashboard = Dashboard.create(title="Support")
        dashboard.add_agents([agent.id])

        async with async_session.begin():
            await agent_repository.save(agent)
            await dashboard_repository.save(dashboard)

        async with async_session.begin():
            await agent_repository.delete(agent)

        async_session.expunge_all()
        async with async_session.begin():
            retrieved = await dashboard_repository.get_by_id(dashboard.id)

        assert retrieved is not None
        assert retrieved.agent_ids == []
