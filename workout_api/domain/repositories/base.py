"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, Optional, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for operations shared by every entity."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID, or None if absent."""
        ...

    def create(self, obj: T) -> T:
        """Persist a new entity and return it with store-assigned fields."""
        ...
