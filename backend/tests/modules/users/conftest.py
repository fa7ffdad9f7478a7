"""
Fixtures for the user search tests.

In-memory stand-ins for the realm, directory and login failure stores.
"""

from typing import Iterable, Iterator, Optional

import pytest

from modules.users.criteria import AttributeFilter, ById, FreeText, SearchCriteria
from modules.users.models import LoginFailureRecord, Realm, UserRecord


class FixedClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def now_seconds(self) -> int:
        return self.now


class InMemoryRealms:
    def __init__(self, *realms: Realm) -> None:
        self._realms = {realm.name: realm for realm in realms}

    def get_by_name(self, name: str) -> Optional[Realm]:
        return self._realms.get(name)


class InMemoryDirectory:
    """Directory over a list of users, recording every call."""

    def __init__(self, users: Iterable[UserRecord] = ()) -> None:
        self.users = sorted(users, key=lambda u: u.username)
        self.calls: list[tuple] = []
        self.rows_read = 0

    def get_by_id(self, realm_id: str, user_id: str) -> Optional[UserRecord]:
        self.calls.append(("get_by_id", realm_id, user_id))
        return next((u for u in self.users if u.id == user_id), None)

    def search(
        self,
        realm_id: str,
        criteria: SearchCriteria,
        groups: Optional[Iterable[str]] = None,
    ) -> Iterator[UserRecord]:
        self.calls.append(("search", realm_id, criteria, groups))
        mode = criteria.mode
        if isinstance(mode, ById):
            matches = [u for u in self.users if u.id == mode.id]
        elif isinstance(mode, FreeText):
            matches = [u for u in self.users if mode.term.lower() in u.username.lower()]
        elif isinstance(mode, AttributeFilter):
            matches = [u for u in self.users if self._matches(u, mode)]
        else:
            matches = list(self.users)

        if not criteria.include_service_accounts:
            matches = [u for u in matches if u.service_account_client_link is None]
        if groups is not None:
            matches = [u for u in matches if u.groups.intersection(groups)]

        start = max(criteria.first, 0)
        end = start + criteria.max if criteria.max >= 0 else None
        for user in matches[start:end]:
            self.rows_read += 1
            yield user

    @staticmethod
    def _matches(user: UserRecord, mode: AttributeFilter) -> bool:
        for key, value in mode.attributes.items():
            if key == "username" and value not in user.username:
                return False
            if key == "email" and user.email != value:
                return False
        return True


class InMemoryFailures:
    def __init__(self, *records: LoginFailureRecord) -> None:
        self._records = {(r.realm_id, r.user_id): r for r in records}
        self.lookups = 0

    def get_user_login_failure(
        self, realm_id: str, user_id: str
    ) -> Optional[LoginFailureRecord]:
        self.lookups += 1
        return self._records.get((realm_id, user_id))


@pytest.fixture
def protected_realm() -> Realm:
    return Realm(id="realm-1", name="acme", brute_force_protected=True)


@pytest.fixture
def unprotected_realm() -> Realm:
    return Realm(id="realm-2", name="open", brute_force_protected=False)


@pytest.fixture
def users() -> list[UserRecord]:
    return [
        UserRecord(id="u-alice", username="alice", email="alice@acme.test", groups=frozenset({"g-sales"})),
        UserRecord(id="u-bob", username="bob", email="bob@acme.test", groups=frozenset({"g-eng"})),
        UserRecord(id="u-carol", username="carol", email="carol@acme.test"),
        UserRecord(
            id="u-svc",
            username="service-account-ci",
            service_account_client_link="client-ci",
        ),
    ]


@pytest.fixture
def directory(users) -> InMemoryDirectory:
    return InMemoryDirectory(users)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(1500)


@pytest.fixture
def failures() -> InMemoryFailures:
    return InMemoryFailures(
        LoginFailureRecord(
            user_id="u-alice",
            realm_id="realm-1",
            num_failures=5,
            last_failure=1000,
            last_ip_failure="10.0.0.1",
            failed_login_not_before=2000,
        ),
        LoginFailureRecord(
            user_id="u-alice",
            realm_id="realm-2",
            num_failures=9,
            last_failure=1200,
            last_ip_failure="10.0.0.9",
            failed_login_not_before=9999,
        ),
    )


@pytest.fixture
def realms(protected_realm, unprotected_realm) -> InMemoryRealms:
    return InMemoryRealms(protected_realm, unprotected_realm)
