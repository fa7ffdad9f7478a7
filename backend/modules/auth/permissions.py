"""
Claims-based user permission evaluator.

Answers capability questions from the admin roles and group grants
carried in the caller's token. One evaluator is built per request.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from shared.models import AuthenticatedUser

from .exceptions import QueryNotAllowedError
from .interfaces import IUserPermissionEvaluator
from .models import AdminRole, UserAccess

if TYPE_CHECKING:
    from modules.users.models import UserRecord


VIEW_ROLES = frozenset({AdminRole.VIEW_USERS.value, AdminRole.MANAGE_USERS.value})


class RolePermissionEvaluator(IUserPermissionEvaluator):
    """
    Permission evaluator backed by token roles.

    - view-users / manage-users: view every user in the realm
    - query-users: may run searches, sees only what other grants allow
    - view_groups: view members of the listed groups
    - manage-users: manage, map roles and group membership
    - impersonation (with manage-users): impersonate
    """

    def __init__(self, caller: AuthenticatedUser) -> None:
        self._caller = caller
        self._roles = caller.roles
        self._view_groups = caller.view_groups

    def require_query(self) -> None:
        if self.can_view() or AdminRole.QUERY_USERS.value in self._roles:
            return
        if self._view_groups:
            return
        raise QueryNotAllowedError(self._caller.id)

    def can_view(self) -> bool:
        return bool(self._roles & VIEW_ROLES)

    def can_manage(self) -> bool:
        return AdminRole.MANAGE_USERS.value in self._roles

    def can_view_user(
        self,
        user: "UserRecord",
        groups: Optional[Iterable[str]] = None,
        grant_if_no_permission: bool = False,
    ) -> bool:
        if self.can_view():
            return True

        allowed = self._view_groups
        if groups is not None:
            allowed = allowed & frozenset(groups)
        if allowed.intersection(user.groups):
            return True

        # No rule covers users outside every group
        return grant_if_no_permission and not user.groups

    def groups_with_view_permission(self) -> set[str]:
        return set(self._view_groups)

    def get_access(
        self,
        user: "UserRecord",
        grant_if_no_permission: bool = False,
    ) -> UserAccess:
        manage = self.can_manage()
        return UserAccess(
            view=self.can_view_user(user, grant_if_no_permission=grant_if_no_permission),
            manage=manage,
            impersonate=manage and AdminRole.IMPERSONATION.value in self._roles,
            map_roles=manage,
            manage_group_membership=manage,
        )
