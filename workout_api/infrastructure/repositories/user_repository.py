"""
SQLAlchemy Implementation of User Repository.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import func

from workout_api.core.exceptions import EntityNotFoundException
from workout_api.core.tokens import hash_token
from workout_api.domain.models.token import Token
from workout_api.domain.models.user import User
from workout_api.domain.repositories.user_repository import UserRepository
from workout_api.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def update(self, user: User) -> None:
        try:
            result = self.db.execute(
                update(User)
                .where(User.id == user.id)
                .values(
                    username=user.username,
                    email=user.email,
                    bio=user.bio,
                    updated_at=func.now(),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                raise EntityNotFoundException("user not found")
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)

    def get_for_token(self, scope: str, token_plaintext: str) -> Optional[User]:
        """Get the user owning an unexpired token with the given scope."""
        query = (
            select(User)
            .join(Token, Token.user_id == User.id)
            .where(
                Token.hash == hash_token(token_plaintext),
                Token.scope == scope,
                Token.expiry > datetime.now(timezone.utc),
            )
        )
        return self.db.execute(query).scalar_one_or_none()
