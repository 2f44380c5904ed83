"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from workout_api.domain.models.token import Token
from workout_api.domain.models.user import User
from workout_api.domain.models.workout import Workout
from workout_api.domain.repositories.token_repository import TokenRepository
from workout_api.domain.repositories.user_repository import UserRepository
from workout_api.domain.repositories.workout_repository import WorkoutRepository
from workout_api.infrastructure.database import get_db
from workout_api.infrastructure.repositories.token_repository import SQLAlchemyTokenRepository
from workout_api.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from workout_api.infrastructure.repositories.workout_repository import SQLAlchemyWorkoutRepository


def build_user_repository(db: Session) -> UserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return build_user_repository(db)


def get_token_repository(db: Session = Depends(get_db)) -> TokenRepository:
    """Get token repository instance."""
    return SQLAlchemyTokenRepository(db, Token)


def get_workout_repository(db: Session = Depends(get_db)) -> WorkoutRepository:
    """Get workout repository instance."""
    return SQLAlchemyWorkoutRepository(db, Workout)
