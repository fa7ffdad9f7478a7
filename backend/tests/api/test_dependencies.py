"""Tests for the service container."""

from unittest.mock import MagicMock, patch

import pytest

from api.dependencies import (
    ServiceContainer,
    get_container,
    get_user_search_service,
    reset_container,
)
from modules.users.repository import (
    LoginFailureRepository,
    RealmRepository,
    SupabaseUserDirectory,
)
from modules.users.service import UserSearchService


@pytest.fixture
def mock_client():
    with patch("shared.database.get_supabase_client") as mock_get:
        mock_get.return_value = MagicMock()
        yield mock_get.return_value


class TestServiceContainer:
    def test_repositories_share_client(self, mock_client):
        container = ServiceContainer()

        assert isinstance(container.realm_repository, RealmRepository)
        assert isinstance(container.user_directory, SupabaseUserDirectory)
        assert isinstance(container.login_failure_store, LoginFailureRepository)
        assert container.user_directory._db is mock_client
        assert container.login_failure_store._db is mock_client

    def test_user_search_is_cached(self, mock_client):
        container = ServiceContainer()

        service = container.user_search

        assert isinstance(service, UserSearchService)
        assert container.user_search is service

    def test_nothing_built_until_accessed(self):
        with patch("shared.database.get_supabase_client") as mock_get:
            ServiceContainer()
            mock_get.assert_not_called()

    def test_reset(self, mock_client):
        container = ServiceContainer()
        first = container.user_search

        container.reset()

        assert container.user_search is not first


class TestContainerSingleton:
    def test_get_container(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first

    def test_get_user_search_service(self, mock_client):
        assert get_user_search_service() is get_container().user_search
