"""
User search module data models.

Records read from the stores are snake_case and immutable. Representations
returned by the API serialize to camelCase.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.auth.models import UserAccess


NO_IP_FAILURE = "n/a"


# =============================================================================
# Store records
# =============================================================================


class Realm(BaseModel):
    """An isolated identity domain with its own brute-force policy."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Realm ID")
    name: str = Field(..., description="Realm name used in URLs")
    enabled: bool = Field(default=True)
    brute_force_protected: bool = Field(
        default=False,
        description="Whether repeated login failures lock accounts",
    )


class UserRecord(BaseModel):
    """
    Identity record as held by the user directory.

    Owned by the directory; the search never modifies it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    enabled: bool = True
    email_verified: bool = False
    created_timestamp: Optional[int] = Field(None, description="Creation time (ms)")
    attributes: dict[str, list[str]] = Field(default_factory=dict)
    groups: frozenset[str] = Field(default_factory=frozenset, description="Group IDs")
    federation_link: Optional[str] = None
    service_account_client_link: Optional[str] = None
    required_actions: list[str] = Field(default_factory=list)
    not_before: int = 0


class LoginFailureRecord(BaseModel):
    """
    Login failure counters for one user in one realm.

    Written by the authentication pipeline; read-only here.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    realm_id: str
    num_failures: int = Field(default=0, ge=0)
    last_failure: int = 0
    last_ip_failure: str = NO_IP_FAILURE
    failed_login_not_before: int = Field(
        default=0,
        description="End of the current lockout window (seconds since epoch)",
    )


# =============================================================================
# API representations
# =============================================================================


class BruteForceStatus(BaseModel):
    """Point-in-time lockout status of one user."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    disabled: bool = False
    num_failures: int = Field(default=0, alias="numFailures")
    last_failure: int = Field(default=0, alias="lastFailure")
    last_ip_failure: str = Field(default=NO_IP_FAILURE, alias="lastIPFailure")


class UserRepresentation(BaseModel):
    """
    User projection returned to admin callers.

    The brief projection leaves the full-only fields unset; responses
    are serialized with exclude_none so they are omitted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    email_verified: bool = False
    enabled: bool = True
    created_timestamp: Optional[int] = None
    federation_link: Optional[str] = None

    # Full projection only
    attributes: Optional[dict[str, list[str]]] = None
    required_actions: Optional[list[str]] = None
    service_account_client_id: Optional[str] = None
    not_before: Optional[int] = None

    access: Optional[UserAccess] = None

    @classmethod
    def brief(cls, user: UserRecord) -> "UserRepresentation":
        return cls(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            email_verified=user.email_verified,
            enabled=user.enabled,
            created_timestamp=user.created_timestamp,
            federation_link=user.federation_link,
        )

    @classmethod
    def full(cls, user: UserRecord) -> "UserRepresentation":
        rep = cls.brief(user)
        return rep.model_copy(
            update={
                "attributes": dict(user.attributes),
                "required_actions": list(user.required_actions),
                "service_account_client_id": user.service_account_client_link,
                "not_before": user.not_before,
            }
        )


class BruteUser(UserRepresentation):
    """User representation decorated with its brute-force status."""

    brute_force_status: BruteForceStatus = Field(default_factory=BruteForceStatus)


# =============================================================================
# Request models
# =============================================================================


class UserSearchParams(BaseModel):
    """
    Raw query parameters of a user search.

    Every field is optional; absence is meaningful and distinct from an
    empty or false value.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    search: Optional[str] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    email_verified: Optional[bool] = None
    phone_number_locale: Optional[str] = None
    phone_number: Optional[str] = None
    phone_number_verified: Optional[bool] = None
    idp_alias: Optional[str] = None
    idp_user_id: Optional[str] = None
    first: Optional[int] = None
    max: Optional[int] = None
    enabled: Optional[bool] = None
    brief_representation: Optional[bool] = None
    exact: Optional[bool] = None
    q: Optional[str] = None
