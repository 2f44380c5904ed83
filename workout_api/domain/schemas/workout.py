"""Pydantic schemas for Workout domain."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class WorkoutEntryBase(BaseModel):
    exercise_name: str = Field(min_length=1, max_length=255)
    sets: int = Field(ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    notes: str = ""
    order_index: int


class WorkoutEntryWrite(WorkoutEntryBase):
    # Only meaningful on update: identifies the stored entry to change in place
    id: Optional[int] = None

    @model_validator(mode="after")
    def reps_or_duration(self) -> "WorkoutEntryWrite":
        if (self.reps is None) == (self.duration_seconds is None):
            raise ValueError("an entry must specify exactly one of reps or duration_seconds")
        return self


class WorkoutEntryRead(WorkoutEntryBase):
    id: int

    model_config = {"from_attributes": True}


class WorkoutCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    duration: int = Field(ge=0)
    calories_burned: int = Field(default=0, ge=0)
    entries: List[WorkoutEntryWrite] = []


class WorkoutUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    entries: Optional[List[WorkoutEntryWrite]] = None

    @field_validator("title", "description", "duration", "calories_burned", "entries", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("field may be omitted but not set to null")
        return value

    @field_validator("entries")
    @classmethod
    def unique_entry_ids(cls, entries: List[WorkoutEntryWrite]) -> List[WorkoutEntryWrite]:
        ids = [entry.id for entry in entries if entry.id is not None]
        if len(ids) != len(set(ids)):
            raise ValueError("entry ids must be unique within a workout")
        return entries

    def workout_fields(self) -> dict:
        """Column values for the workout row, keyed by model attribute."""
        column_for = {
            "title": "title",
            "description": "description",
            "duration": "duration_minutes",
            "calories_burned": "calories_burned",
        }
        return {
            column_for[name]: getattr(self, name)
            for name in self.model_fields_set
            if name in column_for
        }


class WorkoutRead(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    duration: int = Field(validation_alias="duration_minutes")
    calories_burned: int
    entries: List[WorkoutEntryRead] = []

    model_config = {"from_attributes": True}
