"""Workouts API routes — create, read, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from workout_api.application.services.workout_service import (
    create_workout,
    delete_workout,
    get_workout,
    update_workout,
)
from workout_api.core.exceptions import EntityNotFoundException
from workout_api.domain.identity import Identity
from workout_api.domain.repositories.workout_repository import WorkoutRepository
from workout_api.domain.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate
from workout_api.interfaces.api.deps import current_identity
from workout_api.interfaces.deps import get_workout_repository

router = APIRouter(prefix="/workouts", tags=["Workouts"])

# Upper bound is the largest INTEGER column value
WorkoutID = Annotated[int, Path(ge=1, le=2_147_483_647, description="Workout ID")]


@router.get("/{workout_id}")
def read_workout(
    workout_id: WorkoutID,
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    workout = get_workout(repo, workout_id)
    if workout is None:
        raise EntityNotFoundException("workout not found")
    return {"workout": WorkoutRead.model_validate(workout)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: WorkoutCreate,
    repo: WorkoutRepository = Depends(get_workout_repository),
    identity: Identity = Depends(current_identity),
):
    workout = create_workout(repo, identity, body)
    return {"workout": WorkoutRead.model_validate(workout)}


@router.patch("/{workout_id}")
def update(
    body: WorkoutUpdate,
    workout_id: WorkoutID,
    repo: WorkoutRepository = Depends(get_workout_repository),
    identity: Identity = Depends(current_identity),
):
    workout = update_workout(repo, identity, workout_id, body)
    return {"workout": WorkoutRead.model_validate(workout)}


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    workout_id: WorkoutID,
    repo: WorkoutRepository = Depends(get_workout_repository),
    identity: Identity = Depends(current_identity),
):
    delete_workout(repo, identity, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
