"""
Supabase-backed stores for the user search.

Read-only access to these tables:
- realms
- users
- federated_identities (joined for identity provider filters)
- login_failures

Note: These repositories do NOT perform authorization checks.
The service layer decides what the caller may see.
"""

from itertools import islice
from typing import Any, Iterable, Iterator, Optional

from shared.repository import BaseRepository

from .criteria import (
    AttributeFilter,
    ById,
    EMAIL,
    EMAIL_VERIFIED,
    ENABLED,
    FIRST_NAME,
    FreeText,
    IDP_ALIAS,
    IDP_USER_ID,
    LAST_NAME,
    SearchCriteria,
    USERNAME,
)
from .interfaces import ILoginFailureStore, IRealmRepository, IUserDirectory
from .models import NO_IP_FAILURE, LoginFailureRecord, Realm, UserRecord


TEXT_COLUMNS = {
    USERNAME: "username",
    EMAIL: "email",
    FIRST_NAME: "first_name",
    LAST_NAME: "last_name",
}

BOOLEAN_COLUMNS = {
    EMAIL_VERIFIED: "email_verified",
    ENABLED: "enabled",
}

IDP_COLUMNS = {
    IDP_ALIAS: "federated_identities.identity_provider",
    IDP_USER_ID: "federated_identities.federated_user_id",
}

FREE_TEXT_COLUMNS = ("username", "email", "first_name", "last_name")

IDP_JOIN = "*, federated_identities!inner(identity_provider, federated_user_id)"


def _or_value(value: str) -> str:
    """Quote a value for use inside a PostgREST or() filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _free_text_pattern(term: str) -> str:
    """
    Translate a free-text term into an ilike pattern.

    "quoted" terms match exactly, * is a wildcard, anything else
    matches as a substring.
    """
    if len(term) >= 2 and term.startswith('"') and term.endswith('"'):
        return term[1:-1]
    if "*" in term:
        return term.replace("*", "%")
    return f"%{term}%"


class RealmRepository(BaseRepository[Realm], IRealmRepository):
    """Repository for realm lookups."""

    def get_by_name(self, name: str) -> Optional[Realm]:
        result = self._db.table("realms").select("*").eq("name", name).execute()

        if not result.data:
            return None

        return self._map_to_realm(result.data[0])

    def _map_to_realm(self, data: dict[str, Any]) -> Realm:
        """Map database row to Realm model."""
        return Realm(
            id=str(data["id"]),
            name=data["name"],
            enabled=data.get("enabled", True),
            brute_force_protected=data.get("brute_force_protected", False),
        )


class SupabaseUserDirectory(BaseRepository[UserRecord], IUserDirectory):
    """
    User directory over the users table.

    Results are ordered by username. Rows are mapped to UserRecord
    only as the caller iterates.
    """

    def get_by_id(self, realm_id: str, user_id: str) -> Optional[UserRecord]:
        result = (
            self._db.table("users")
            .select("*")
            .eq("realm_id", realm_id)
            .eq("id", user_id)
            .execute()
        )

        if not result.data:
            return None

        return self._map_to_user(result.data[0])

    def search(
        self,
        realm_id: str,
        criteria: SearchCriteria,
        groups: Optional[Iterable[str]] = None,
    ) -> Iterator[UserRecord]:
        mode = criteria.mode

        if isinstance(mode, ById):
            user = self.get_by_id(realm_id, mode.id)
            if user is not None and (groups is None or user.groups.intersection(groups)):
                yield user
            return

        if criteria.max == 0:
            return

        uses_idp = isinstance(mode, AttributeFilter) and any(
            key in IDP_COLUMNS for key in mode.attributes
        )
        query = self._db.table("users").select(IDP_JOIN if uses_idp else "*")
        query = query.eq("realm_id", realm_id)

        if not criteria.include_service_accounts:
            query = query.is_("service_account_client_link", "null")

        if isinstance(mode, FreeText):
            query = self._apply_free_text(query, mode)
        elif isinstance(mode, AttributeFilter):
            query = self._apply_attributes(query, mode)

        if groups is not None:
            query = query.ov("groups", sorted(groups))

        query = query.order("username")

        offset = max(criteria.first, 0)
        if criteria.max > 0:
            rows = query.range(offset, offset + criteria.max - 1).execute().data
        else:
            rows = islice(query.execute().data, offset, None)

        for row in rows:
            yield self._map_to_user(row)

    # -------------------------------------------------------------------------
    # Private filter builders
    # -------------------------------------------------------------------------

    def _apply_free_text(self, query, mode: FreeText):
        if mode.term and mode.term != "*":
            pattern = _or_value(_free_text_pattern(mode.term))
            query = query.or_(
                ",".join(f"{column}.ilike.{pattern}" for column in FREE_TEXT_COLUMNS)
            )
        if mode.enabled is not None:
            query = query.eq("enabled", mode.enabled)
        return query

    def _apply_attributes(self, query, mode: AttributeFilter):
        for key, value in mode.attributes.items():
            if key in TEXT_COLUMNS:
                column = TEXT_COLUMNS[key]
                if mode.exact:
                    query = query.eq(column, value)
                else:
                    query = query.ilike(column, f"%{value}%")
            elif key in BOOLEAN_COLUMNS:
                query = query.eq(BOOLEAN_COLUMNS[key], value.lower() == "true")
            elif key in IDP_COLUMNS:
                query = query.eq(IDP_COLUMNS[key], value)
            else:
                # Phone fields and custom attributes live in the attributes JSON
                query = query.contains("attributes", {key: [value]})
        return query

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        attributes = {
            name: values if isinstance(values, list) else [values]
            for name, values in (data.get("attributes") or {}).items()
        }

        return UserRecord(
            id=str(data["id"]),
            username=data["username"],
            email=data.get("email"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            enabled=data.get("enabled", True),
            email_verified=data.get("email_verified", False),
            created_timestamp=data.get("created_timestamp"),
            attributes=attributes,
            groups=frozenset(data.get("groups") or []),
            federation_link=data.get("federation_link"),
            service_account_client_link=data.get("service_account_client_link"),
            required_actions=data.get("required_actions") or [],
            not_before=data.get("not_before") or 0,
        )


class LoginFailureRepository(BaseRepository[LoginFailureRecord], ILoginFailureStore):
    """Repository for login failure records."""

    def get_user_login_failure(
        self,
        realm_id: str,
        user_id: str,
    ) -> Optional[LoginFailureRecord]:
        result = (
            self._db.table("login_failures")
            .select("*")
            .eq("realm_id", realm_id)
            .eq("user_id", user_id)
            .execute()
        )

        if not result.data:
            return None

        return self._map_to_failure(result.data[0])

    def _map_to_failure(self, data: dict[str, Any]) -> LoginFailureRecord:
        """Map database row to LoginFailureRecord model."""
        return LoginFailureRecord(
            user_id=str(data["user_id"]),
            realm_id=str(data["realm_id"]),
            num_failures=data.get("num_failures") or 0,
            last_failure=data.get("last_failure") or 0,
            last_ip_failure=data.get("last_ip_failure") or NO_IP_FAILURE,
            failed_login_not_before=data.get("failed_login_not_before") or 0,
        )
