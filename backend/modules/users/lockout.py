"""
Brute-force lockout status resolution.

A user is temporarily disabled while the current time is strictly before
the failed-login-not-before mark of their login failure record. At the
mark itself the lockout has expired.
"""

import logging
import time

from .interfaces import IClock, ILoginFailureStore
from .models import BruteForceStatus, Realm

logger = logging.getLogger(__name__)


class SystemClock(IClock):
    """Wall clock backed by time.time()."""

    def now_seconds(self) -> int:
        return int(time.time())


class LockoutStatusResolver:
    """
    Computes the lockout status of a user.

    Status is derived fresh on every call and never cached.
    """

    def __init__(self, failures: ILoginFailureStore, clock: IClock) -> None:
        self._failures = failures
        self._clock = clock

    def resolve(self, realm: Realm, user_id: str) -> BruteForceStatus:
        if not realm.brute_force_protected:
            return BruteForceStatus()

        record = self._failures.get_user_login_failure(realm.id, user_id)
        if record is None:
            return BruteForceStatus()

        now = self._clock.now_seconds()
        disabled = now < record.failed_login_not_before
        if disabled:
            logger.debug(
                f"User {user_id} locked out: current {now} "
                f"notBefore {record.failed_login_not_before}"
            )

        return BruteForceStatus(
            disabled=disabled,
            num_failures=record.num_failures,
            last_failure=record.last_failure,
            last_ip_failure=record.last_ip_failure,
        )
