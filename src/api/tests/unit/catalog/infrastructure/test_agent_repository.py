"""Tests for AgentRepository against an in-process SQLite database."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from catalog.domain.aggregates import Agent, Tenant
from catalog.domain.value_objects import AgentId, Slug, TenantFilter
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.tenant_repository import TenantRepository
from catalog.ports.exceptions import DuplicateSlugError


@pytest.fixture
def agent_repo(db_session):
    return AgentRepository(session=db_session)


@pytest_asyncio.fixture
async def acme(db_session):
    tenant = Tenant.create(name="Acme")
    async with db_session.begin():
        await TenantRepository(session=db_session).save(tenant)
    return tenant


class TestSaveAndGet:
    @pytest.mark.asyncio
    async def test_round_trips_agent(self, db_session, agent_repo, acme):
        agent = Agent.create(name="Bot", workflow_id="wf_123", tenant_id=acme.id)

        async with db_session.begin():
            await agent_repo.save(agent)

        async with db_session.begin():
            by_id = await agent_repo.get_by_id(agent.id)
            by_slug = await agent_repo.get_by_slug(agent.slug.value)

        assert by_id.name == "Bot"
        assert by_id.workflow_id == "wf_123"
        assert by_id.tenant_id == acme.id
        assert by_slug.id == agent.id

    @pytest.mark.asyncio
    async def test_unknown_slug_is_none(self, db_session, agent_repo):
        async with db_session.begin():
            assert await agent_repo.get_by_slug("nope") is None

    @pytest.mark.asyncio
    async def test_duplicate_slug_raises(self, db_session, agent_repo):
        first = Agent.create(name="Bot", workflow_id="wf_1")
        second = Agent.create(name="Other", workflow_id="wf_2")
        second.slug = Slug(value=first.slug.value)

        async with db_session.begin():
            await agent_repo.save(first)

        with pytest.raises(DuplicateSlugError):
            async with db_session.begin():
                await agent_repo.save(second)

    @pytest.mark.asyncio
    async def test_update_moves_agent_to_general(self, db_session, agent_repo, acme):
        agent = Agent.create(name="Bot", workflow_id="wf_1", tenant_id=acme.id)
        async with db_session.begin():
            await agent_repo.save(agent)

        agent.assign_tenant(None)
        async with db_session.begin():
            await agent_repo.save(agent)

        async with db_session.begin():
            assert (await agent_repo.get_by_id(agent.id)).tenant_id is None

    @pytest.mark.asyncio
    async def test_get_many_returns_only_existing(self, db_session, agent_repo):
        agent = Agent.create(name="Bot", workflow_id="wf_1")
        async with db_session.begin():
            await agent_repo.save(agent)

        async with db_session.begin():
            found = await agent_repo.get_many([agent.id, AgentId.generate()])

        assert [a.id for a in found] == [agent.id]


class TestList:
    @pytest_asyncio.fixture
    async def agents(self, db_session, agent_repo, acme):
        now = datetime.now(UTC)
        general = Agent.create(name="General", workflow_id="wf_g")
        general.created_at = now - timedelta(minutes=2)
        first = Agent.create(name="First", workflow_id="wf_1", tenant_id=acme.id)
        first.created_at = now - timedelta(minutes=1)
        second = Agent.create(name="Second", workflow_id="wf_2", tenant_id=acme.id)
        second.created_at = now

        async with db_session.begin():
            for agent in (general, first, second):
                await agent_repo.save(agent)
        return general, first, second

    @pytest.mark.asyncio
    async def test_all_newest_first(self, db_session, agent_repo, agents):
        async with db_session.begin():
            listed = await agent_repo.list(TenantFilter.all())

        assert [a.name for a in listed] == ["Second", "First", "General"]

    @pytest.mark.asyncio
    async def test_general_only(self, db_session, agent_repo, agents):
        async with db_session.begin():
            listed = await agent_repo.list(TenantFilter.general())

        assert [a.name for a in listed] == ["General"]

    @pytest.mark.asyncio
    async def test_single_tenant(self, db_session, agent_repo, agents, acme):
        async with db_session.begin():
            listed = await agent_repo.list(TenantFilter.for_tenant(acme.id))

        assert [a.name for a in listed] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_by_workflow_ids(self, db_session, agent_repo, agents):
        async with db_session.begin():
            listed = await agent_repo.list_by_workflow_ids(["wf_2", "wf_g", "wf_x"])

        assert {a.name for a in listed} == {"Second", "General"}

    @pytest.mark.asyncio
    async def test_delete(self, db_session, agent_repo, agents):
        general = agents[0]

        async with db_session.begin():
            assert await agent_repo.delete(general) is True

        async with db_session.begin():
            assert await agent_repo.get_by_id(general.id) is None
            assert await agent_repo.delete(general) is False
