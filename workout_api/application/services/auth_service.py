"""Auth service — registration, credential checks and token issuance."""

from datetime import timedelta
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError

from workout_api.config import get_settings
from workout_api.core.exceptions import ConflictException
from workout_api.core.security import PasswordVerificationError, dummy_verify
from workout_api.core.tokens import SCOPE_AUTH, IssuedToken
from workout_api.domain.models.user import User
from workout_api.domain.repositories.token_repository import TokenRepository
from workout_api.domain.repositories.user_repository import UserRepository
from workout_api.domain.schemas.auth import UserCreate

settings = get_settings()
logger = structlog.get_logger(__name__)


def register_user(users: UserRepository, body: UserCreate) -> User:
    if users.get_by_username(body.username) is not None:
        raise ConflictException("a user with that username already exists")

    user = User(username=body.username, email=body.email, bio=body.bio)
    user.set_password(body.password)
    try:
        user = users.create(user)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same username
        raise ConflictException("a user with that username already exists")

    logger.info("User registered", user_id=user.id, username=user.username)
    return user


def authenticate_user(users: UserRepository, username: str, password: str) -> Optional[User]:
    """Return the user only if ``password`` verifies; every other outcome is None."""
    user = users.get_by_username(username)
    if user is None:
        dummy_verify()
        return None

    try:
        matches = user.password_matches(password)
    except PasswordVerificationError as exc:
        logger.error("Stored password hash unusable", user_id=user.id, error=str(exc))
        return None

    return user if matches is True else None


def issue_auth_token(tokens: TokenRepository, user: User) -> IssuedToken:
    ttl = timedelta(hours=settings.AUTH_TOKEN_TTL_HOURS)
    token = tokens.create_new_token(user.id, ttl, SCOPE_AUTH)
    logger.info("Authentication token issued", user_id=user.id, expiry=token.expiry.isoformat())
    return token
