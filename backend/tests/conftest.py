"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.service import reset_auth_service
from shared.config import get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "admin-123",
    email: str = "admin@example.com",
    roles: Optional[list[str]] = None,
    view_groups: Optional[list[str]] = None,
    expired: bool = False,
    audience: str = "authenticated",
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for an admin caller.

    Args:
        user_id: Caller ID to include in the token
        email: Email to include in the token
        roles: Admin roles placed in app_metadata
        view_groups: Group IDs with view grant placed in app_metadata
        expired: If True, creates an expired token
        audience: Token audience
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat(),
        "aud": audience,
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "app_metadata": {
            "roles": roles if roles is not None else ["view-users"],
            "view_groups": view_groups or [],
        },
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset service singletons and settings before and after each test."""
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    get_settings.cache_clear()
    reset_auth_service()
    reset_container()
    yield
    reset_container()
    reset_auth_service()
    get_settings.cache_clear()


@pytest.fixture
def make_token():
    """Factory fixture for caller tokens."""
    return create_test_token


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization headers for a caller holding view-users."""
    return {"Authorization": f"Bearer {create_test_token()}"}
