"""
User search module interfaces.

The search core only depends on these protocols. The Supabase-backed
implementations live in repository.py; tests substitute fakes.
"""

from typing import Iterable, Iterator, Optional, Protocol, runtime_checkable

from modules.auth.interfaces import IUserPermissionEvaluator

from .criteria import SearchCriteria
from .models import BruteUser, LoginFailureRecord, Realm, UserRecord, UserSearchParams


@runtime_checkable
class IRealmRepository(Protocol):
    """Read-only realm lookup."""

    def get_by_name(self, name: str) -> Optional[Realm]:
        """
        Get a realm by its name.

        Returns:
            Realm if found, None otherwise
        """
        ...


@runtime_checkable
class IUserDirectory(Protocol):
    """
    Read-only access to the users of a realm.

    Ordering must be stable for a fixed criteria and directory state.
    """

    def get_by_id(self, realm_id: str, user_id: str) -> Optional[UserRecord]:
        """
        Get a single user by ID.

        Returns:
            UserRecord if found, None otherwise
        """
        ...

    def search(
        self,
        realm_id: str,
        criteria: SearchCriteria,
        groups: Optional[Iterable[str]] = None,
    ) -> Iterator[UserRecord]:
        """
        Search users matching the criteria.

        Args:
            realm_id: Realm to search in
            criteria: Search mode and result window
            groups: If given, only users in at least one of these groups

        Returns:
            Lazy iterator over matching users
        """
        ...


@runtime_checkable
class ILoginFailureStore(Protocol):
    """Read-only access to login failure records."""

    def get_user_login_failure(
        self,
        realm_id: str,
        user_id: str,
    ) -> Optional[LoginFailureRecord]:
        """
        Get the login failure record of a user.

        Returns:
            LoginFailureRecord if the user ever failed a login, None otherwise
        """
        ...


@runtime_checkable
class IClock(Protocol):
    """Wall clock in whole seconds since the epoch."""

    def now_seconds(self) -> int:
        ...


@runtime_checkable
class IUserSearchService(Protocol):
    """
    Interface for the admin user search.

    The API layer depends on this protocol only.
    """

    def search_users(
        self,
        realm_name: str,
        params: UserSearchParams,
        evaluator: IUserPermissionEvaluator,
    ) -> Iterator[BruteUser]:
        """
        Search users visible to the caller, with their lockout status.

        Args:
            realm_name: Realm to search in
            params: Raw query parameters
            evaluator: Permission evaluator for the caller

        Returns:
            Lazy iterator over decorated users

        Raises:
            AuthorizationError: If the caller may not query users
            RealmNotFoundError: If the realm does not exist
        """
        ...
