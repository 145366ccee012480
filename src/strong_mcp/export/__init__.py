from strong_mcp.export.catalog import MeasurementCatalog, measurement_key
from strong_mcp.export.flatten import flatten_workout, flatten_workouts, parse_timestamp
from strong_mcp.export.models import (
    Set, Exercise, Workout, WorkoutSetRow, RowError, FlattenResult, ExportResult,
)
from strong_mcp.export.run import export_workouts
from strong_mcp.export.storage import ParquetSaver
from strong_mcp.export.transformer import (
    extract_set, resolve_exercise, assemble_workout, assemble_workouts,
)

__all__ = [
    "MeasurementCatalog", "measurement_key",
    "extract_set", "resolve_exercise", "assemble_workout", "assemble_workouts",
    "flatten_workout", "flatten_workouts", "parse_timestamp",
    "Set", "Exercise", "Workout", "WorkoutSetRow", "RowError", "FlattenResult",
    "ExportResult", "export_workouts",
    "ParquetSaver",
]
