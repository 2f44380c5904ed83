"""Auth API routes — user registration and authentication tokens."""

import structlog
from fastapi import APIRouter, Depends, status

from workout_api.application.services.auth_service import (
    authenticate_user,
    issue_auth_token,
    register_user,
)
from workout_api.core.exceptions import UnauthorizedException
from workout_api.domain.repositories.token_repository import TokenRepository
from workout_api.domain.repositories.user_repository import UserRepository
from workout_api.domain.schemas.auth import LoginRequest, UserCreate, UserRead
from workout_api.interfaces.deps import get_token_repository, get_user_repository

router = APIRouter(tags=["Auth"])
logger = structlog.get_logger(__name__)


@router.post("/users", status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, users: UserRepository = Depends(get_user_repository)):
    user = register_user(users, body)
    return {"user": UserRead.model_validate(user)}


@router.post("/tokens/authentication", status_code=status.HTTP_201_CREATED)
def create_authentication_token(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenRepository = Depends(get_token_repository),
):
    user = authenticate_user(users, body.username, body.password)
    if user is None:
        logger.info("Invalid credentials", username=body.username)
        raise UnauthorizedException("invalid credentials")

    token = issue_auth_token(tokens, user)
    return {"auth_token": token.plaintext}
