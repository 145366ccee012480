"""Flatten workouts into one row per set.

Rows need real timestamps while workouts only carry the backend's strings.
A workout whose ``start_date`` or ``end_date`` is missing or not RFC 3339
contributes no rows; each of its sets is reported as a ``RowError`` instead,
and the remaining workouts are flattened as usual.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Iterable

from strong_mcp.export.models import FlattenResult, RowError, Workout, WorkoutSetRow

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Europe/Berlin"
MISSING_VALUE = 0.0

_RFC3339_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?(?:Z|[+-][0-9]{2}:[0-9]{2})"
)


class TimestampError(ValueError):
    def __init__(self, value: str | None, reason: str):
        super().__init__(reason)
        self.value = value
        self.reason = reason


def parse_timestamp(value: str | None) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime."""
    if value is None:
        raise TimestampError(value, "missing")
    if not _RFC3339_RE.fullmatch(value):
        raise TimestampError(value, "not an RFC 3339 timestamp")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise TimestampError(value, str(exc)) from exc
    return parsed.astimezone(timezone.utc)


def _timestamps(workout: Workout) -> tuple[dict[str, datetime], dict[str, TimestampError]]:
    parsed, failed = {}, {}
    for field in ("start_date", "end_date"):
        try:
            parsed[field] = parse_timestamp(getattr(workout, field))
        except TimestampError as exc:
            failed[field] = exc
    return parsed, failed


def flatten_workout(workout: Workout, default_timezone: str = DEFAULT_TIMEZONE) -> FlattenResult:
    parsed, failed = _timestamps(workout)

    if failed:
        errors = tuple(
            RowError(
                workout_id=workout.id,
                exercise_id=exercise.id,
                set_id=s.id,
                field=field,
                value=exc.value,
                reason=exc.reason,
            )
            for exercise in workout.exercises
            for s in exercise.sets
            for field, exc in failed.items()
        )
        if errors:
            logger.warning(
                "Skipping %d sets of workout %s: bad %s",
                workout.set_count, workout.id, ", ".join(failed),
            )
        return FlattenResult(errors=errors)

    rows = tuple(
        WorkoutSetRow(
            workout_id=workout.id,
            workout_name=workout.name,
            timezone=workout.timezone or default_timezone,
            start_date=parsed["start_date"],
            end_date=parsed["end_date"],
            exercise_id=exercise.id,
            exercise_ordinal=exercise_ordinal,
            exercise_name=exercise.name,
            set_id=s.id,
            set_ordinal=set_ordinal,
            weight=s.weight if s.weight is not None else MISSING_VALUE,
            reps=s.reps,
            rpe=s.rpe if s.rpe is not None else MISSING_VALUE,
        )
        for exercise_ordinal, exercise in enumerate(workout.exercises)
        for set_ordinal, s in enumerate(exercise.sets)
    )
    return FlattenResult(rows=rows)


def flatten_workouts(
    workouts: Iterable[Workout], default_timezone: str = DEFAULT_TIMEZONE,
) -> FlattenResult:
    rows: list[WorkoutSetRow] = []
    errors: list[RowError] = []
    for workout in workouts:
        flat = flatten_workout(workout, default_timezone)
        rows.extend(flat.rows)
        errors.extend(flat.errors)
    return FlattenResult(rows=tuple(rows), errors=tuple(errors))
