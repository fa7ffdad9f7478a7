"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated admin caller.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. Admin roles and
    group-scoped view grants come from the token's app_metadata.
    """

    id: str = Field(..., description="Caller ID (token subject)")
    email: Optional[EmailStr] = Field(None, description="Caller's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")

    roles: frozenset[str] = Field(default_factory=frozenset, description="Admin roles")
    view_groups: frozenset[str] = Field(
        default_factory=frozenset,
        description="Group IDs whose members the caller may view",
    )

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
