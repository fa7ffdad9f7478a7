"""
Visibility filtering for user search results.

The caller's view scope is decided once per request, before the
directory is searched, and then applied to every returned user.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from modules.auth.interfaces import IUserPermissionEvaluator
from modules.auth.models import UserAccess

from .models import UserRecord


@dataclass(frozen=True)
class ViewScope:
    """
    What the caller may see in this request.

    Attributes:
        global_view: Caller may view every user in the realm
        groups: Group restriction for the search, None when unrestricted
        grant_if_no_permission: Users in no group are visible because
            the caller holds neither a global nor a group-scoped grant
    """

    global_view: bool
    groups: Optional[frozenset[str]] = None
    grant_if_no_permission: bool = False


@dataclass(frozen=True)
class VisibleUser:
    user: UserRecord
    brief: bool
    access: UserAccess


class VisibilityFilter:
    """Applies permission evaluator decisions to raw search results."""

    def establish_scope(self, evaluator: IUserPermissionEvaluator) -> ViewScope:
        if evaluator.can_view():
            return ViewScope(global_view=True)

        groups = evaluator.groups_with_view_permission()
        if groups:
            return ViewScope(global_view=False, groups=frozenset(groups))

        return ViewScope(global_view=False, grant_if_no_permission=True)

    def filter(
        self,
        raw_users: Iterable[UserRecord],
        evaluator: IUserPermissionEvaluator,
        scope: ViewScope,
        brief: bool = False,
    ) -> Iterator[VisibleUser]:
        for user in raw_users:
            if not (scope.global_view or evaluator.can_view_user(
                user,
                groups=scope.groups,
                grant_if_no_permission=scope.grant_if_no_permission,
            )):
                continue

            access = evaluator.get_access(
                user, grant_if_no_permission=scope.grant_if_no_permission
            )
            yield VisibleUser(user=user, brief=brief, access=access)
