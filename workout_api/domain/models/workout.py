"""Workout domain models — map to the 'workouts' and 'workout_entries' tables."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from workout_api.infrastructure.database import Base


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    duration_minutes = Column(Integer, nullable=False)
    calories_burned = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    entries = relationship(
        "WorkoutEntry",
        back_populates="workout",
        order_by="WorkoutEntry.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Workout {self.id} - {self.title}>"


class WorkoutEntry(Base):
    __tablename__ = "workout_entries"
    __table_args__ = (
        # An entry is either rep-based or time-based, never both or neither
        CheckConstraint(
            "(reps IS NOT NULL AND duration_seconds IS NULL) OR "
            "(reps IS NULL AND duration_seconds IS NOT NULL)",
            name="valid_workout_entry",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_name = Column(String(255), nullable=False)
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=True)
    duration_seconds = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    notes = Column(Text, nullable=False, default="")
    order_index = Column(Integer, nullable=False)

    workout = relationship("Workout", back_populates="entries")

    def __repr__(self):
        return f"<WorkoutEntry {self.order_index} - {self.exercise_name}>"
