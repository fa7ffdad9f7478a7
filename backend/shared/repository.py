"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement read methods and handle dict-to-Pydantic
    mapping internally.

    Example:
        class RealmRepository(BaseRepository[Realm]):
            def get_by_name(self, name: str) -> Optional[Realm]:
                result = self._db.table("realms").select("*").eq("name", name).execute()
                if not result.data:
                    return None
                return self._map_to_realm(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
