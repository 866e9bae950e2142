"""Unit tests for agent HTTP routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from catalog.application.services import AgentService
from catalog.dependencies.agent import get_agent_service
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
from catalog.ports.exceptions import (
    AgentNotFoundError,
    DuplicateSlugError,
    DuplicateTenantNameError,
    TenantNotFoundError,
)


@pytest.fixture
def mock_agent_service():
    return AsyncMock(spec=AgentService)


@pytest.fixture
def client(mock_agent_service):
    from catalog.presentation import agents

    app = FastAPI()
    app.dependency_overrides[get_agent_service] = lambda: mock_agent_service
    app.include_router(agents.router)
    return TestClient(app)


@pytest.fixture
def agent():
    return Agent.create(name="Bot", workflow_id="wf_123")


class TestListAgents:
    def test_defaults_to_all(self, client, mock_agent_service, agent):
        mock_agent_service.list_agents.return_value = [agent]

        response = client.get("/agents")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()[0]["slug"] == agent.slug.value
        mock_agent_service.list_agents.assert_called_once_with(TenantFilter.all())

    def test_general_filter(self, client, mock_agent_service):
        mock_agent_service.list_agents.return_value = []

        client.get("/agents", params={"tenant_id": "general"})

        mock_agent_service.list_agents.assert_called_once_with(TenantFilter.general())

    def test_tenant_filter(self, client, mock_agent_service):
        tenant_id = TenantId.generate()
        mock_agent_service.list_agents.return_value = []

        client.get("/agents", params={"tenant_id": tenant_id.value})

        mock_agent_service.list_agents.assert_called_once_with(
            TenantFilter.for_tenant(tenant_id)
        )

    def test_bad_filter_returns_400(self, client, mock_agent_service):
        response = client.get("/agents", params={"tenant_id": "someone"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_agent_service.list_agents.assert_not_called()


class TestCreateAgent:
    def test_without_tenant_fields_is_general_purpose(
        self, client, mock_agent_service, agent
    ):
        mock_agent_service.create_agent.return_value = agent

        response = client.post("/agents", json={"name": "Bot", "workflow_id": "wf_123"})

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["tenant_id"] is None
        assert body["workflow_id"] == "wf_123"
        mock_agent_service.create_agent.assert_called_once_with(
            name="Bot", workflow_id="wf_123", tenant=NoTenant()
        )

    def test_existing_tenant(self, client, mock_agent_service, agent):
        tenant_id = TenantId.generate()
        mock_agent_service.create_agent.return_value = agent

        client.post(
            "/agents",
            json={"name": "Bot", "workflow_id": "wf_123", "tenant_id": tenant_id.value},
        )

        assert mock_agent_service.create_agent.call_args.kwargs["tenant"] == (
            ExistingTenant(tenant_id)
        )

    def test_new_tenant_name(self, client, mock_agent_service, agent):
        mock_agent_service.create_agent.return_value = agent

        client.post(
            "/agents",
            json={"name": "Bot", "workflow_id": "wf_123", "new_tenant_name": "Acme"},
        )

        assert mock_agent_service.create_agent.call_args.kwargs["tenant"] == (
            NewTenantName("Acme")
        )

    def test_both_tenant_fields_returns_400(self, client, mock_agent_service):
        response = client.post(
            "/agents",
            json={
                "name": "Bot",
                "workflow_id": "wf_123",
                "tenant_id": TenantId.generate().value,
                "new_tenant_name": "Acme",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_agent_service.create_agent.assert_not_called()

    def test_slug_cannot_be_supplied(self, client):
        response = client.post(
            "/agents", json={"name": "Bot", "workflow_id": "wf_123", "slug": "bot"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("Agent name is required"), status.HTTP_400_BAD_REQUEST),
            (TenantNotFoundError("Tenant not found"), status.HTTP_404_NOT_FOUND),
            (DuplicateTenantNameError("taken"), status.HTTP_409_CONFLICT),
            (DuplicateSlugError("taken"), status.HTTP_409_CONFLICT),
            (RuntimeError("boom"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_error_mapping(self, client, mock_agent_service, error, expected):
        mock_agent_service.create_agent.side_effect = error

        response = client.post("/agents", json={"name": "Bot", "workflow_id": "wf"})

        assert response.status_code == expected


class TestUpdateAgent:
    def test_omitted_tenant_means_unchanged(self, client, mock_agent_service, agent):
        mock_agent_service.update_agent.return_value = agent

        response = client.patch(f"/agents/{agent.id.value}", json={"name": "Bot 2"})

        assert response.status_code == status.HTTP_200_OK
        mock_agent_service.update_agent.assert_called_once_with(
            agent.id, name="Bot 2", workflow_id=None, tenant=None
        )

    def test_null_tenant_means_general(self, client, mock_agent_service, agent):
        mock_agent_service.update_agent.return_value = agent

        client.patch(f"/agents/{agent.id.value}", json={"tenant_id": None})

        assert mock_agent_service.update_agent.call_args.kwargs["tenant"] == NoTenant()

    def test_missing_agent_returns_404(self, client, mock_agent_service):
        mock_agent_service.update_agent.side_effect = AgentNotFoundError("x")

        response = client.patch(
            f"/agents/{AgentId.generate().value}", json={"name": "Bot"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_empty_update_returns_400(self, client, mock_agent_service):
        mock_agent_service.update_agent.side_effect = ValidationError(
            "At least one field must be provided for update"
        )

        response = client.patch(f"/agents/{AgentId.generate().value}", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetAndDeleteAgent:
    def test_get(self, client, mock_agent_service, agent):
        mock_agent_service.get_agent.return_value = agent

        response = client.get(f"/agents/{agent.id.value}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == agent.id.value

    def test_get_invalid_id_returns_400(self, client):
        response = client.get("/agents/nope")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_returns_204(self, client, mock_agent_service):
        agent_id = AgentId.generate()

        response = client.delete(f"/agents/{agent_id.value}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_agent_service.delete_agent.assert_called_once_with(agent_id)

    def test_delete_missing_returns_404(self, client, mock_agent_service):
        mock_agent_service.delete_agent.side_effect = AgentNotFoundError("x")

        response = client.delete(f"/agents/{AgentId.generate().value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
