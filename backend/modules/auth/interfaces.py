"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The user search only ever asks capability questions,
so any policy engine can stand behind IUserPermissionEvaluator.
"""

from typing import TYPE_CHECKING, Iterable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import UserAccess

if TYPE_CHECKING:
    from modules.users.models import UserRecord


@runtime_checkable
class IAuthService(Protocol):
    """Interface for caller authentication."""

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated caller.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...


@runtime_checkable
class IUserPermissionEvaluator(Protocol):
    """
    Capability queries about users for one caller.

    The "grant if no permission" fallback is passed explicitly to the
    per-user checks instead of being stored on the evaluator, so one
    evaluator can be shared by concurrent iterations without leaking
    state between them.
    """

    def require_query(self) -> None:
        """
        Raise if the caller may not query users at all.

        Raises:
            AuthorizationError: If the caller lacks the query capability
        """
        ...

    def can_view(self) -> bool:
        """Whether the caller may view every user in the realm."""
        ...

    def can_view_user(
        self,
        user: "UserRecord",
        groups: Optional[Iterable[str]] = None,
        grant_if_no_permission: bool = False,
    ) -> bool:
        """
        Whether the caller may view one user.

        Args:
            user: The user being checked
            groups: Group restriction established for this request, if any
            grant_if_no_permission: Grant view of users that belong to no
                group when no narrower rule applies
        """
        ...

    def groups_with_view_permission(self) -> set[str]:
        """Group IDs whose members the caller may view."""
        ...

    def get_access(
        self,
        user: "UserRecord",
        grant_if_no_permission: bool = False,
    ) -> UserAccess:
        """Capability summary for one user."""
        ...
