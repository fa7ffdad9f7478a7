"""
Authentication module.

Handles caller JWT validation and user permission evaluation.

Public API:
- IAuthService: Interface for token validation
- IUserPermissionEvaluator: Capability queries about users
- RolePermissionEvaluator: Evaluator backed by token roles
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IUserPermissionEvaluator
from .models import AdminRole, JWTPayload, UserAccess
from .permissions import RolePermissionEvaluator
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    QueryNotAllowedError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserPermissionEvaluator",
    # Implementations
    "RolePermissionEvaluator",
    # Models
    "AdminRole",
    "JWTPayload",
    "UserAccess",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "QueryNotAllowedError",
]
