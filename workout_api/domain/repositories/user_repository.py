"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Optional

from workout_api.domain.repositories.base import BaseRepository
from workout_api.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, or None if absent."""
        ...

    def update(self, user: User) -> None:
        """Write profile fields back; raises EntityNotFoundException if the row is gone."""
        ...

    def get_for_token(self, scope: str, token_plaintext: str) -> Optional[User]:
        """Resolve an unexpired token of the given scope to its owner."""
        ...
