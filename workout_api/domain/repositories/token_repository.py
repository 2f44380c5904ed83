"""
Token Repository Interface.
Defines data access operations for bearer tokens.
"""

from datetime import timedelta
from typing import Protocol

from workout_api.core.tokens import IssuedToken


class TokenRepository(Protocol):
    """Interface for token issuance."""

    def create_new_token(self, user_id: int, ttl: timedelta, scope: str) -> IssuedToken:
        """Generate, persist and return a token; the plaintext is only available here."""
        ...

    def insert(self, token: IssuedToken) -> None:
        """Persist the digest, owner, scope and expiry of ``token``."""
        ...
