"""Normalized workout models and the flat export row."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Set(_Frozen):
    """A single completed set."""
    id: str
    weight: float | None = None
    reps: int = Field(default=0, ge=0)
    rpe: float | None = None


class Exercise(_Frozen):
    """One exercise instance within a workout; always has at least one set."""
    id: str
    name: str = ""
    sets: tuple[Set, ...] = Field(min_length=1)


class Workout(_Frozen):
    """A workout session.

    Timestamps and timezone are passed through from the log as-is.
    """
    id: str
    name: str = ""
    timezone: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    exercises: tuple[Exercise, ...] = ()

    @property
    def set_count(self) -> int:
        return sum(len(e.sets) for e in self.exercises)


class WorkoutSetRow(_Frozen):
    """One set with its workout and exercise context, ready for columnar storage."""
    workout_id: str
    workout_name: str
    timezone: str
    start_date: datetime
    end_date: datetime
    exercise_id: str
    exercise_ordinal: int = Field(ge=0)
    exercise_name: str
    set_id: str
    set_ordinal: int = Field(ge=0)
    weight: float
    reps: int = Field(ge=0)
    rpe: float


class RowError(_Frozen):
    """A set that produced no row, and why."""
    workout_id: str
    exercise_id: str
    set_id: str
    field: str
    value: str | None
    reason: str


class FlattenResult(_Frozen):
    rows: tuple[WorkoutSetRow, ...] = ()
    errors: tuple[RowError, ...] = ()


class ExportResult(_Frozen):
    """Outcome of one export run."""
    workouts: list[Workout]
    rows: tuple[WorkoutSetRow, ...] = ()
    errors: tuple[RowError, ...] = ()

    @property
    def skipped_sets(self) -> int:
        return len({(e.workout_id, e.set_id) for e in self.errors})
