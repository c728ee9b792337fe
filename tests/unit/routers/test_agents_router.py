"""Tests for the /api/agents endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from switchboard.core.exceptions import AccessDeniedError
from switchboard.routers.agents import get_agent_repository
from tests.fixtures.auth import DEFAULT_USER_ID, auth_headers, create_test_jwt


@pytest.fixture
def repo():
    fake = AsyncMock()
    fake.user_id = DEFAULT_USER_ID
    return fake


@pytest.fixture
def api(app, client, repo):
    app.dependency_overrides[get_agent_repository] = lambda: repo
    return client


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get("/api/agents")

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    def test_expired_token(self, client):
        token = create_test_jwt(expires_in=timedelta(minutes=-5))

        assert client.get("/api/agents", headers=auth_headers(token)).status_code == 401

    def test_refresh_token_rejected(self, client):
        token = create_test_jwt(token_type="refresh")

        assert client.get("/api/agents", headers=auth_headers(token)).status_code == 401

    def test_valid_token_scopes_query_to_subject(self, client, mock_session, user_token):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = result

        response = client.get("/api/agents", headers=auth_headers(user_token))

        assert response.status_code == 200
        assert response.json() == []
        statement = mock_session.execute.call_args.args[0]
        assert DEFAULT_USER_ID in str(statement.compile(compile_kwargs={"literal_binds": True}))

    def test_cookie_token_accepted(self, client, mock_session, user_token):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = result
        client.cookies.set("access_token", user_token)

        assert client.get("/api/agents").status_code == 200


class TestListAndGet:
    def test_list_serializes_camel_case(self, api, repo, make_agent):
        agent = make_agent(user_id=DEFAULT_USER_ID)
        repo.list_agents.return_value = [agent]

        response = api.get("/api/agents")

        assert response.status_code == 200
        body = response.json()
        assert body[0]["id"] == str(agent.id)
        assert body[0]["websiteUrl"] == "https://example.com"
        assert body[0]["toneOfVoice"] == "friendly"
        repo.list_agents.assert_awaited_once_with(active_only=False)

    def test_get_found(self, api, repo, make_agent):
        agent = make_agent()
        repo.get_agent.return_value = agent

        response = api.get(f"/api/agents/{agent.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Support Bot"

    def test_get_not_found(self, api, repo):
        repo.get_agent.return_value = None

        response = api.get(f"/api/agents/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Agent not found"

    def test_get_other_users_agent(self, api, repo):
        repo.get_agent.side_effect = AccessDeniedError()

        assert api.get(f"/api/agents/{uuid4()}").status_code == 403

    def test_invalid_uuid(self, api):
        assert api.get("/api/agents/not-a-uuid").status_code == 422


class TestCreate:
    def test_create(self, api, repo, make_agent):
        repo.create_agent.return_value = make_agent(name="New Bot")

        response = api.post("/api/agents", json={"name": "New Bot", "purpose": "sales"})

        assert response.status_code == 201
        assert response.json()["name"] == "New Bot"
        sent = repo.create_agent.await_args.args[0]
        assert sent.purpose.value == "sales"

    def test_create_validation(self, api, repo):
        response = api.post("/api/agents", json={"name": "", "websiteUrl": "nope"})

        assert response.status_code == 422
        repo.create_agent.assert_not_awaited()


class TestUpdate:
    def test_patch_passes_only_sent_fields(self, api, repo, make_agent):
        agent = make_agent()
        repo.get_agent.return_value = agent
        repo.update_agent.return_value = agent

        response = api.patch(f"/api/agents/{agent.id}", json={"name": "Renamed", "description": None})

        assert response.status_code == 200
        update = repo.update_agent.await_args.args[1]
        assert update.model_dump(exclude_unset=True) == {"name": "Renamed", "description": None}

    def test_patch_rejects_unknown_keys(self, api, repo, make_agent):
        repo.get_agent.return_value = make_agent()

        response = api.patch(f"/api/agents/{uuid4()}", json={"userId": "someone-else"})

        assert response.status_code == 422
        repo.update_agent.assert_not_awaited()

    def test_patch_missing(self, api, repo):
        repo.get_agent.return_value = None

        assert api.patch(f"/api/agents/{uuid4()}", json={"name": "x"}).status_code == 404

    def test_patch_forbidden(self, api, repo):
        repo.get_agent.side_effect = AccessDeniedError()

        response = api.patch(f"/api/agents/{uuid4()}", json={"name": "x"})

        assert response.status_code == 403
        repo.update_agent.assert_not_awaited()


class TestDelete:
    def test_delete(self, api, repo, make_agent):
        agent = make_agent()
        repo.get_agent.return_value = agent

        response = api.delete(f"/api/agents/{agent.id}")

        assert response.status_code == 204
        repo.delete_agent.assert_awaited_once_with(agent)
