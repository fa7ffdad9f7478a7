"""
User search service implementation.

Composes criteria building, directory search, visibility filtering and
lockout resolution into one lazy pipeline:

    criteria -> raw users -> visible users -> users with lockout status
"""

import logging
from typing import Iterator, Optional

from modules.auth.interfaces import IUserPermissionEvaluator

from .criteria import ById, SearchCriteriaBuilder
from .exceptions import RealmNotFoundError
from .interfaces import (
    IClock,
    ILoginFailureStore,
    IRealmRepository,
    IUserDirectory,
    IUserSearchService,
)
from .lockout import LockoutStatusResolver, SystemClock
from .models import BruteUser, Realm, UserSearchParams
from .visibility import VisibilityFilter, VisibleUser

logger = logging.getLogger(__name__)


class UserSearchService(IUserSearchService):
    """
    Admin user search with brute-force lockout status.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        realms: IRealmRepository,
        directory: IUserDirectory,
        failures: ILoginFailureStore,
        clock: Optional[IClock] = None,
        default_max_results: int = 100,
    ) -> None:
        self._realms = realms
        self._directory = directory
        self._criteria = SearchCriteriaBuilder(default_max_results)
        self._visibility = VisibilityFilter()
        self._lockout = LockoutStatusResolver(failures, clock or SystemClock())

    def search_users(
        self,
        realm_name: str,
        params: UserSearchParams,
        evaluator: IUserPermissionEvaluator,
    ) -> Iterator[BruteUser]:
        evaluator.require_query()

        realm = self._realms.get_by_name(realm_name)
        if realm is None:
            raise RealmNotFoundError(realm_name)

        criteria = self._criteria.build(params)
        scope = self._visibility.establish_scope(evaluator)

        if isinstance(criteria.mode, ById):
            user = self._directory.get_by_id(realm.id, criteria.mode.id)
            if user is None:
                logger.debug(f"No user with id {criteria.mode.id!r} in realm {realm.name}")
            raw_users = [user] if user is not None else []
        else:
            raw_users = self._directory.search(realm.id, criteria, scope.groups)

        visible = self._visibility.filter(
            raw_users,
            evaluator,
            scope,
            brief=bool(params.brief_representation),
        )
        return (self._decorate(realm, entry) for entry in visible)

    def _decorate(self, realm: Realm, entry: VisibleUser) -> BruteUser:
        """Project a visible user and attach access and lockout status."""
        user = entry.user
        rep = BruteUser.brief(user) if entry.brief else BruteUser.full(user)
        return rep.model_copy(
            update={
                "access": entry.access,
                "brute_force_status": self._lockout.resolve(realm, user.id),
            }
        )
