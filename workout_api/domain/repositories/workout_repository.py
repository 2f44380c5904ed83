"""
Workout Repository Interface.
Defines specific data access operations for Workouts.
"""

from typing import Any, Dict, List, Optional

from workout_api.domain.repositories.base import BaseRepository
from workout_api.domain.models.workout import Workout


class WorkoutRepository(BaseRepository[Workout]):
    """Interface for Workout-specific operations."""

    def update(
        self,
        workout_id: int,
        fields: Dict[str, Any],
        entries: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Update a workout and, when given, reconcile its entries in one transaction."""
        ...

    def get_owner(self, workout_id: int) -> int:
        """Get the owning user ID; raises EntityNotFoundException if absent."""
        ...

    def delete(self, workout_id: int) -> None:
        """Delete a workout and its entries; raises EntityNotFoundException if absent."""
        ...
