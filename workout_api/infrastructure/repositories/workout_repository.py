"""
SQLAlchemy Implementation of Workout Repository.

A workout and its entries are always written in a single transaction: any
failing statement rolls the whole unit back before the error propagates.
"""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import func

from workout_api.core.exceptions import EntityNotFoundException
from workout_api.domain.models.workout import Workout, WorkoutEntry
from workout_api.domain.repositories.workout_repository import WorkoutRepository
from workout_api.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyWorkoutRepository(SQLAlchemyRepository[Workout], WorkoutRepository):
    """Workout repository implementation using SQLAlchemy."""

    def create(self, workout: Workout) -> Workout:
        """Insert the workout row followed by its entries, all or nothing."""
        try:
            self.db.add(workout)
            # Assigns workout.id; entries are inserted in list order
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("Workout create rolled back", user_id=workout.user_id)
            raise
        return self.get_by_id(workout.id)

    def get_by_id(self, id: int) -> Optional[Workout]:
        """Get a workout with its entries ordered by order_index."""
        query = (
            select(Workout)
            .where(Workout.id == id)
            .options(selectinload(Workout.entries))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(query).scalar_one_or_none()

    def update(
        self,
        workout_id: int,
        fields: Dict[str, Any],
        entries: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        try:
            result = self.db.execute(
                update(Workout)
                .where(Workout.id == workout_id)
                .values(**fields, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                raise EntityNotFoundException("workout not found")

            if entries is not None:
                self._reconcile_entries(workout_id, entries)

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning("Workout update rolled back", workout_id=workout_id)
            raise

    def _reconcile_entries(self, workout_id: int, entries: List[Dict[str, Any]]) -> None:
        """Make the stored entries of ``workout_id`` match ``entries``.

        Entries whose id already belongs to this workout are updated in place,
        the rest are inserted, and stored entries missing from ``entries`` are
        deleted.
        """
        existing_ids = set(
            self.db.execute(
                select(WorkoutEntry.id).where(WorkoutEntry.workout_id == workout_id)
            ).scalars()
        )
        kept_ids = {entry.get("id") for entry in entries} & existing_ids

        removed_ids = existing_ids - kept_ids
        if removed_ids:
            self.db.execute(
                delete(WorkoutEntry)
                .where(WorkoutEntry.workout_id == workout_id, WorkoutEntry.id.in_(removed_ids))
                .execution_options(synchronize_session=False)
            )

        for entry in entries:
            values = {key: value for key, value in entry.items() if key != "id"}
            entry_id = entry.get("id")
            if entry_id in kept_ids:
                self.db.execute(
                    update(WorkoutEntry)
                    .where(WorkoutEntry.id == entry_id, WorkoutEntry.workout_id == workout_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
            else:
                self.db.execute(insert(WorkoutEntry).values(workout_id=workout_id, **values))

    def get_owner(self, workout_id: int) -> int:
        owner_id = self.db.execute(
            select(Workout.user_id).where(Workout.id == workout_id)
        ).scalar_one_or_none()
        if owner_id is None:
            raise EntityNotFoundException("workout not found")
        return owner_id

    def delete(self, workout_id: int) -> None:
        # Entry rows go with the workout through ON DELETE CASCADE
        try:
            result = self.db.execute(
                delete(Workout)
                .where(Workout.id == workout_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                raise EntityNotFoundException("workout not found")
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
