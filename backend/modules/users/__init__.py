"""
User search module.

Admin search over the users of a realm, decorated with each user's
brute-force lockout status.

Public API:
- IUserSearchService: Interface for the search
- IUserDirectory, ILoginFailureStore, IRealmRepository, IClock: collaborators
- SearchCriteriaBuilder and the search modes
- BruteUser, BruteForceStatus: response models
"""

from .interfaces import (
    IClock,
    ILoginFailureStore,
    IRealmRepository,
    IUserDirectory,
    IUserSearchService,
)
from .criteria import (
    AttributeFilter,
    ById,
    FreeText,
    ListAll,
    SearchCriteria,
    SearchCriteriaBuilder,
)
from .models import (
    BruteForceStatus,
    BruteUser,
    LoginFailureRecord,
    Realm,
    UserRecord,
    UserSearchParams,
)
from .exceptions import RealmNotFoundError

__all__ = [
    # Interfaces
    "IClock",
    "ILoginFailureStore",
    "IRealmRepository",
    "IUserDirectory",
    "IUserSearchService",
    # Criteria
    "AttributeFilter",
    "ById",
    "FreeText",
    "ListAll",
    "SearchCriteria",
    "SearchCriteriaBuilder",
    # Models
    "BruteForceStatus",
    "BruteUser",
    "LoginFailureRecord",
    "Realm",
    "UserRecord",
    "UserSearchParams",
    # Exceptions
    "RealmNotFoundError",
]
