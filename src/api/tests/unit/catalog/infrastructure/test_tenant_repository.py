"""Tests for TenantRepository against an in-process SQLite database."""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from catalog.domain.aggregates import Agent, Tenant
from catalog.infrastructure.agent_repository import AgentRepository
from catalog.infrastructure.observability import TenantRepositoryProbe
from catalog.infrastructure.tenant_repository import TenantRepository
from catalog.ports.exceptions import DuplicateTenantNameError


@pytest.fixture
def mock_probe():
    return Mock(spec=TenantRepositoryProbe)


@pytest.fixture
def tenant_repo(db_session, mock_probe):
    return TenantRepository(session=db_session, probe=mock_probe)


class TestSaveAndGet:
    @pytest.mark.asyncio
    async def test_round_trips_tenant(self, db_session, tenant_repo, mock_probe):
        tenant = Tenant.create(name="Acme")

        async with db_session.begin():
            await tenant_repo.save(tenant)

        async with db_session.begin():
            loaded = await tenant_repo.get_by_id(tenant.id)
            by_name = await tenant_repo.get_by_name("Acme")

        assert loaded.id == tenant.id
        assert loaded.name == "Acme"
        assert by_name.id == tenant.id
        mock_probe.tenant_saved.assert_called_once_with(tenant.id.value)

    @pytest.mark.asyncio
    async def test_name_lookup_is_case_sensitive(self, db_session, tenant_repo):
        async with db_session.begin():
            await tenant_repo.save(Tenant.create(name="Acme"))

        async with db_session.begin():
            assert await tenant_repo.get_by_name("acme") is None

    @pytest.mark.asyncio
    async def test_duplicate_name_raises(self, db_session, tenant_repo, mock_probe):
        async with db_session.begin():
            await tenant_repo.save(Tenant.create(name="Acme"))

        with pytest.raises(DuplicateTenantNameError):
            async with db_session.begin():
                await tenant_repo.save(Tenant.create(name="Acme"))

        mock_probe.duplicate_tenant_name.assert_called_once_with("Acme")

    @pytest.mark.asyncio
    async def test_save_updates_existing(self, db_session, tenant_repo):
        tenant = Tenant.create(name="Acme")
        async with db_session.begin():
            await tenant_repo.save(tenant)

        tenant.rename("Acme Corp")
        async with db_session.begin():
            await tenant_repo.save(tenant)

        async with db_session.begin():
            loaded = await tenant_repo.get_by_id(tenant.id)
        assert loaded.name == "Acme Corp"

    @pytest.mark.asyncio
    async def test_saving_own_name_is_not_a_conflict(self, db_session, tenant_repo):
        tenant = Tenant.create(name="Acme")
        async with db_session.begin():
            await tenant_repo.save(tenant)

        tenant.rename("Acme")
        async with db_session.begin():
            await tenant_repo.save(tenant)


class TestListWithAgentCounts:
    @pytest.mark.asyncio
    async def test_newest_first_with_counts(self, db_session, tenant_repo):
        now = datetime.now(UTC)
        acme = Tenant.create(name="Acme")
        acme.created_at = now - timedelta(minutes=5)
        globex = Tenant.create(name="Globex")
        globex.created_at = now
        agent_repo = AgentRepository(session=db_session)

        async with db_session.begin():
            await tenant_repo.save(acme)
            await tenant_repo.save(globex)
            await agent_repo.save(
                Agent.create(name="Bot", workflow_id="wf_1", tenant_id=acme.id)
            )
            await agent_repo.save(
                Agent.create(name="Helper", workflow_id="wf_2", tenant_id=acme.id)
            )
            await agent_repo.save(Agent.create(name="Loose", workflow_id="wf_3"))

        async with db_session.begin():
            summaries = await tenant_repo.list_with_agent_counts()

        assert [s.tenant.name for s in summaries] == ["Globex", "Acme"]
        assert [s.agent_count for s in summaries] == [0, 2]


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_unreferenced_tenant(self, db_session, tenant_repo):
        tenant = Tenant.create(name="Acme")
        async with db_session.begin():
            await tenant_repo.save(tenant)

        async with db_session.begin():
            assert await tenant_repo.delete(tenant) is True

        async with db_session.begin():
            assert await tenant_repo.get_by_id(tenant.id) is None

    @pytest.mark.asyncio
    async def test_missing_tenant_returns_false(self, db_session, tenant_repo):
        async with db_session.begin():
            assert await tenant_repo.delete(Tenant.create(name="Ghost")) is False
