"""Workout service — ownership checks and workout lifecycle."""

from typing import Optional

import structlog

from workout_api.core.exceptions import ForbiddenException, UnauthorizedException
from workout_api.domain.identity import Identity, is_anonymous
from workout_api.domain.models.user import User
from workout_api.domain.models.workout import Workout, WorkoutEntry
from workout_api.domain.repositories.workout_repository import WorkoutRepository
from workout_api.domain.schemas.workout import WorkoutCreate, WorkoutUpdate

logger = structlog.get_logger(__name__)


def require_authenticated(identity: Identity, action: str) -> User:
    if is_anonymous(identity):
        raise UnauthorizedException(f"you must be authenticated to {action}")
    return identity.user


def authorize_owner(repo: WorkoutRepository, workout_id: int, identity: Identity, action: str) -> User:
    """Ensure ``identity`` owns the workout before it is mutated.

    Anonymous callers are rejected before the owner is looked up. A missing
    workout surfaces as 404 and a different owner as 403.
    """
    user = require_authenticated(identity, action)
    owner_id = repo.get_owner(workout_id)
    if owner_id != user.id:
        logger.warning(
            "Workout ownership check failed",
            user_id=user.id,
            workout_id=workout_id,
            owner_id=owner_id,
        )
        raise ForbiddenException(f"you do not have permission to {action}")
    return user


def get_workout(repo: WorkoutRepository, workout_id: int) -> Optional[Workout]:
    return repo.get_by_id(workout_id)


def create_workout(repo: WorkoutRepository, identity: Identity, body: WorkoutCreate) -> Workout:
    user = require_authenticated(identity, "create a workout")
    workout = Workout(
        user_id=user.id,
        title=body.title,
        description=body.description,
        duration_minutes=body.duration,
        calories_burned=body.calories_burned,
        entries=[WorkoutEntry(**entry.model_dump(exclude={"id"})) for entry in body.entries],
    )
    created = repo.create(workout)
    logger.info("Workout created", workout_id=created.id, user_id=user.id, entries=len(created.entries))
    return created


def update_workout(
    repo: WorkoutRepository, identity: Identity, workout_id: int, body: WorkoutUpdate
) -> Workout:
    user = authorize_owner(repo, workout_id, identity, "update this workout")
    entries = None
    if "entries" in body.model_fields_set:
        entries = [entry.model_dump() for entry in body.entries]
    repo.update(workout_id, body.workout_fields(), entries)
    logger.info("Workout updated", workout_id=workout_id, user_id=user.id)
    return repo.get_by_id(workout_id)


def delete_workout(repo: WorkoutRepository, identity: Identity, workout_id: int) -> None:
    user = authorize_owner(repo, workout_id, identity, "delete this workout")
    repo.delete(workout_id)
    logger.info("Workout deleted", workout_id=workout_id, user_id=user.id)
