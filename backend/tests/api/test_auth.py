"""
Tests for JWT authentication middleware.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from api.app import create_app
from api.dependencies import get_user_search_service
from api.middleware.auth import get_current_user, get_permission_evaluator
from modules.auth.permissions import RolePermissionEvaluator
from modules.users.models import BruteUser
from shared.config import get_settings
from shared.models import AuthenticatedUser


URL = "/admin/realms/acme/ui-ext/brute-force-user"


@pytest.fixture
def search_service():
    service = MagicMock()
    service.search_users.return_value = iter([BruteUser(id="u-1", username="alice")])
    return service


@pytest.fixture
def client(search_service):
    app = create_app()
    app.dependency_overrides[get_user_search_service] = lambda: search_service
    return TestClient(app)


class TestAuthentication:
    def test_missing_auth_header(self, client, search_service):
        """Request without auth header should return 401."""
        response = client.get(URL)

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing authorization header"
        search_service.search_users.assert_not_called()

    def test_valid_token(self, client, make_token):
        response = client.get(URL, headers={"Authorization": f"Bearer {make_token()}"})

        assert response.status_code == 200
        assert response.json()[0]["username"] == "alice"

    def test_evaluator_built_from_token(self, client, make_token, search_service):
        """The route hands the service an evaluator for the caller's roles."""
        token = make_token(user_id="admin-9", roles=["query-users"], view_groups=["g-1"])

        client.get(URL, headers={"Authorization": f"Bearer {token}"})

        realm, params, evaluator = search_service.search_users.call_args.args
        assert realm == "acme"
        assert isinstance(evaluator, RolePermissionEvaluator)
        assert evaluator.groups_with_view_permission() == {"g-1"}
        assert not evaluator.can_view()

    def test_expired_token(self, client, make_token):
        response = client.get(URL, headers={"Authorization": f"Bearer {make_token(expired=True)}"})

        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_wrong_audience(self, client, make_token):
        response = client.get(URL, headers={"Authorization": f"Bearer {make_token(audience='other')}"})
        assert response.status_code == 401

    def test_missing_jwt_secret(self, client, make_token, monkeypatch):
        """Missing JWT secret should return 401."""
        monkeypatch.setenv("SUPABASE_JWT_SECRET", "")
        get_settings.cache_clear()

        response = client.get(URL, headers={"Authorization": f"Bearer {make_token()}"})

        assert response.status_code == 401
        assert "not configured" in response.json()["detail"].lower()


class TestDependencies:
    @pytest.mark.asyncio
    async def test_get_permission_evaluator(self):
        user = AuthenticatedUser(id="admin-1", roles=frozenset({"manage-users"}))

        evaluator = await get_permission_evaluator(user)

        assert isinstance(evaluator, RolePermissionEvaluator)
        assert evaluator.can_view()

    @pytest.mark.asyncio
    async def test_get_current_user_without_credentials(self):
        with pytest.raises(Exception) as exc_info:
            await get_current_user(None, MagicMock())
        assert exc_info.value.status_code == 401
