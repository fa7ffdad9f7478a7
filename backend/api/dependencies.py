"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Swapping a store (for example the login failure store for a cache-backed
one) only requires changing the implementation here.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.users.interfaces import (
        ILoginFailureStore,
        IRealmRepository,
        IUserDirectory,
        IUserSearchService,
    )


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._realm_repository: "IRealmRepository | None" = None
        self._user_directory: "IUserDirectory | None" = None
        self._login_failure_store: "ILoginFailureStore | None" = None
        self._user_search_service: "IUserSearchService | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import get_auth_service
            self._auth_service = get_auth_service()
        return self._auth_service

    @property
    def realm_repository(self) -> "IRealmRepository":
        """Get the realm repository instance."""
        if self._realm_repository is None:
            from modules.users.repository import RealmRepository
            from shared.database import get_supabase_client
            self._realm_repository = RealmRepository(get_supabase_client())
        return self._realm_repository

    @property
    def user_directory(self) -> "IUserDirectory":
        """Get the user directory instance."""
        if self._user_directory is None:
            from modules.users.repository import SupabaseUserDirectory
            from shared.database import get_supabase_client
            self._user_directory = SupabaseUserDirectory(get_supabase_client())
        return self._user_directory

    @property
    def login_failure_store(self) -> "ILoginFailureStore":
        """Get the login failure store instance."""
        if self._login_failure_store is None:
            from modules.users.repository import LoginFailureRepository
            from shared.database import get_supabase_client
            self._login_failure_store = LoginFailureRepository(get_supabase_client())
        return self._login_failure_store

    @property
    def user_search(self) -> "IUserSearchService":
        """Get the user search service instance."""
        if self._user_search_service is None:
            from modules.users.service import UserSearchService
            from shared.config import get_settings
            self._user_search_service = UserSearchService(
                realms=self.realm_repository,
                directory=self.user_directory,
                failures=self.login_failure_store,
                default_max_results=get_settings().default_max_results,
            )
        return self._user_search_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._realm_repository = None
        self._user_directory = None
        self._login_failure_store = None
        self._user_search_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_search_service() -> "IUserSearchService":
    """FastAPI dependency for user search service."""
    return get_container().user_search
