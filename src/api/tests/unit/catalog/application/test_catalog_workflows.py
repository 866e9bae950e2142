"""End-to-end catalog workflows over real repositories and SQLite.

These exercise the services together with the store so that transaction
boundaries, cascades and restrict rules behave as they do in production.
"""

import pytest

from catalog.application.services import (
    AgentService,
    DashboardService,
    TenantResolver,
    TenantService,
)
from catalog.domain.value_objects import (
    ExistingTenant,
    NewTenantName,
    NoTenant,
    TenantDisposition,
    TenantFilter,
)
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.dashboard_repository import DashboardRepository
from catalog.infrastructure.tenant_repository import TenantRepository
from catalog.ports.exceptions import (
    DuplicateTenantNameError,
    TenantDeletionError,
    TenantNotFoundError,
)


class Catalog:
    """The three catalog services wired to one session."""

    def __init__(self, session):
        tenant_repo = TenantRepository(session=session)
        agent_repo = AgentRepository(session=session)
        dashboard_repo = DashboardRepository(session=session)
        resolver = TenantResolver(tenant_repository=tenant_repo, session=session)

        self.tenants = TenantService(
            tenant_repository=tenant_repo,
            agent_repository=agent_repo,
            dashboard_repository=dashboard_repo,
            session=session,
        )
        self.agents = AgentService(
            agent_repository=agent_repo, tenant_resolver=resolver, session=session
        )
        self.dashboards = DashboardService(
            dashboard_repository=dashboard_repo,
            agent_repository=agent_repo,
            tenant_repository=tenant_repo,
            tenant_resolver=resolver,
            session=session,
        )


@pytest.fixture
def catalog(db_session):
    return Catalog(db_session)


class TestInlineTenantCreation:
    @pytest.mark.asyncio
    async def test_agent_with_new_tenant_name(self, catalog):
        agent = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_123", tenant=NewTenantName("Acme")
        )

        summaries = await catalog.tenants.list_tenants()
        assert [s.tenant.name for s in summaries] == ["Acme"]
        assert summaries[0].agent_count == 1
        assert agent.tenant_id == summaries[0].tenant.id

    @pytest.mark.asyncio
    async def test_existing_name_is_a_conflict(self, catalog):
        await catalog.tenants.create_tenant("Acme")

        with pytest.raises(DuplicateTenantNameError):
            await catalog.agents.create_agent(
                name="Bot", workflow_id="wf_123", tenant=NewTenantName("Acme")
            )

        assert await catalog.agents.list_agents() == []

    @pytest.mark.asyncio
    async def test_unknown_existing_tenant(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")
        await catalog.tenants.delete_tenant(acme.id, TenantDisposition.MAKE_GENERAL)

        with pytest.raises(TenantNotFoundError):
            await catalog.agents.create_agent(
                name="Bot", workflow_id="wf_123", tenant=ExistingTenant(acme.id)
            )


class TestTenantDeletion:
    @pytest.mark.asyncio
    async def test_make_general_keeps_agents_and_dashboards(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")
        bot = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_1", tenant=ExistingTenant(acme.id)
        )
        board = await catalog.dashboards.create_dashboard(
            title="Support", tenant=ExistingTenant(acme.id), agent_ids=[bot.id]
        )

        result = await catalog.tenants.delete_tenant(
            acme.id, TenantDisposition.MAKE_GENERAL
        )

        assert result.agents_affected == 1
        assert result.dashboards_cleared == 1
        assert (await catalog.agents.get_agent(bot.id)).tenant_id is None
        cleared = await catalog.dashboards.get_dashboard(board.id)
        assert cleared.tenant_id is None
        assert cleared.agent_ids == [bot.id]
        assert await catalog.tenants.list_tenants() == []

    @pytest.mark.asyncio
    async def test_reassign_moves_agents(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")
        globex = await catalog.tenants.create_tenant("Globex")
        bot = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_1", tenant=ExistingTenant(acme.id)
        )

        await catalog.tenants.delete_tenant(
            acme.id, TenantDisposition.REASSIGN, target_tenant_id=globex.id
        )

        assert (await catalog.agents.get_agent(bot.id)).tenant_id == globex.id
        globex_agents = await catalog.agents.list_agents(
            TenantFilter.for_tenant(globex.id)
        )
        assert [a.id for a in globex_agents] == [bot.id]

    @pytest.mark.asyncio
    async def test_delete_agents_removes_memberships(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")
        bot = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_1", tenant=ExistingTenant(acme.id)
        )
        helper = await catalog.agents.create_agent(name="Helper", workflow_id="wf_2")
        board = await catalog.dashboards.create_dashboard(
            title="Support",
            tenant=ExistingTenant(acme.id),
            agent_ids=[bot.id, helper.id],
        )

        result = await catalog.tenants.delete_tenant(
            acme.id, TenantDisposition.DELETE_AGENTS
        )

        assert result.agents_affected == 1
        assert [a.id for a in await catalog.agents.list_agents()] == [helper.id]
        details = await catalog.dashboards.get_dashboard_with_agents(board.id)
        assert details.tenant_name is None
        assert [e.agent.id for e in details.agents] == [helper.id]

    @pytest.mark.asyncio
    async def test_tenant_without_dependents(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")

        result = await catalog.tenants.delete_tenant(
            acme.id, TenantDisposition.DELETE_AGENTS
        )

        assert result.agents_affected == 0
        assert result.dashboards_cleared == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "disposition",
        [TenantDisposition.MAKE_GENERAL, TenantDisposition.DELETE_AGENTS],
    )
    async def test_failed_deletion_leaves_store_untouched(
        self, catalog, session_factory, monkeypatch, disposition
    ):
        acme = await catalog.tenants.create_tenant("Acme")
        bot = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_1", tenant=ExistingTenant(acme.id)
        )
        board = await catalog.dashboards.create_dashboard(
            title="Support", tenant=ExistingTenant(acme.id), agent_ids=[bot.id]
        )

        async def failing_delete(self, tenant):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(TenantRepository, "delete", failing_delete)

        with pytest.raises(TenantDeletionError):
            await catalog.tenants.delete_tenant(acme.id, disposition)

        async with session_factory() as session:
            async with session.begin():
                tenant = await TenantRepository(session=session).get_by_id(acme.id)
                agent = await AgentRepository(session=session).get_by_id(bot.id)
                dashboard = await DashboardRepository(session=session).get_by_id(
                    board.id
                )

        assert tenant is not None
        assert agent is not None
        assert agent.tenant_id == acme.id
        assert dashboard is not None
        assert dashboard.tenant_id == acme.id
        assert dashboard.agent_ids == [bot.id]

    @pytest.mark.asyncio
    async def test_dashboard_details_name_tenant_and_members(self, catalog):
        acme = await catalog.tenants.create_tenant("Acme")
        bot = await catalog.agents.create_agent(
            name="Bot", workflow_id="wf_1", tenant=ExistingTenant(acme.id)
        )
        board = await catalog.dashboards.create_dashboard(
            title="Support", tenant=ExistingTenant(acme.id), agent_ids=[bot.id]
        )

        details = await catalog.dashboards.get_dashboard_with_agents(board.id)

        assert details.tenant_name == "Acme"
        assert [(e.agent.name, e.agent.workflow_id) for e in details.agents] == [
            ("Bot", "wf_1")
        ]


class TestDashboardMembershipFlow:
    @pytest.mark.asyncio
    async def test_add_is_idempotent_and_set_keeps_order(self, catalog):
        first = await catalog.agents.create_agent(name="First", workflow_id="wf_1")
        second = await catalog.agents.create_agent(name="Second", workflow_id="wf_2")
        third = await catalog.agents.create_agent(name="Third", workflow_id="wf_3")
        board = await catalog.dashboards.create_dashboard(title="Support")

        await catalog.dashboards.add_agents(board.id, [second.id, first.id])
        await catalog.dashboards.add_agents(board.id, [first.id])
        await catalog.dashboards.set_membership(board.id, [third.id, first.id])

        details = await catalog.dashboards.get_dashboard_with_agents(board.id)
        assert [e.agent.id for e in details.agents] == [first.id, third.id]

    @pytest.mark.asyncio
    async def test_reorder_then_list(self, catalog):
        first = await catalog.agents.create_agent(name="First", workflow_id="wf_1")
        second = await catalog.agents.create_agent(name="Second", workflow_id="wf_2")
        board = await catalog.dashboards.create_dashboard(
            title="Support", tenant=NoTenant(), agent_ids=[first.id, second.id]
        )

        await catalog.dashboards.reorder_agents(board.id, [second.id, first.id])

        summaries = await catalog.dashboards.list_dashboards(TenantFilter.general())
        assert summaries[0].dashboard.agent_ids == [second.id, first.id]
        assert summaries[0].agent_count == 2
