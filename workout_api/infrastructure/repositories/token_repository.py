"""
SQLAlchemy Implementation of Token Repository.
"""

from datetime import timedelta

from workout_api.core.tokens import IssuedToken, generate_token
from workout_api.domain.models.token import Token
from workout_api.domain.repositories.token_repository import TokenRepository
from workout_api.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTokenRepository(SQLAlchemyRepository[Token], TokenRepository):
    """Token repository implementation using SQLAlchemy."""

    def create_new_token(self, user_id: int, ttl: timedelta, scope: str) -> IssuedToken:
        token = generate_token(user_id, ttl, scope)
        self.insert(token)
        return token

    def insert(self, token: IssuedToken) -> None:
        self.db.add(
            Token(
                hash=token.hash,
                user_id=token.user_id,
                expiry=token.expiry,
                scope=token.scope,
            )
        )
        self.commit()
