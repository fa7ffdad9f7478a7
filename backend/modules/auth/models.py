"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminRole(str, Enum):
    """Realm administration roles carried in the caller's token."""

    QUERY_USERS = "query-users"
    VIEW_USERS = "view-users"
    MANAGE_USERS = "manage-users"
    IMPERSONATION = "impersonation"


class JWTPayload(BaseModel):
    """
    Decoded caller token payload.

    Admin roles and group-scoped view grants are read from app_metadata:
        {"roles": ["view-users"], "view_groups": ["group-1"]}
    """

    sub: str = Field(..., description="Subject (caller ID)")
    email: Optional[str] = Field(None, description="Caller's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Token role")

    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)

    @property
    def roles(self) -> frozenset[str]:
        return frozenset(self.app_metadata.get("roles") or [])

    @property
    def view_groups(self) -> frozenset[str]:
        return frozenset(self.app_metadata.get("view_groups") or [])


class UserAccess(BaseModel):
    """What the caller may do with one particular user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    view: bool = False
    manage: bool = False
    impersonate: bool = False
    map_roles: bool = False
    manage_group_membership: bool = False
