"""Columnar storage for flattened workout rows."""

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from strong_mcp.export.models import WorkoutSetRow

logger = logging.getLogger(__name__)

# Column -> pandas dtype. Timestamps are handled separately.
SCHEMA = {
    "workout_id": "string",
    "workout_name": "string",
    "timezone": "string",
    "start_date": "datetime64[ms, UTC]",
    "end_date": "datetime64[ms, UTC]",
    "exercise_id": "string",
    "exercise_ordinal": "uint32",
    "exercise_name": "string",
    "set_id": "string",
    "set_ordinal": "uint32",
    "weight": "float32",
    "reps": "uint32",
    "rpe": "float32",
}
TIMESTAMP_COLUMNS = ("start_date", "end_date")


def rows_to_frame(rows: Sequence[WorkoutSetRow]) -> pd.DataFrame:
    """Build a DataFrame with exactly ``SCHEMA``'s columns and types, in row order."""
    columns = {}
    for name, dtype in SCHEMA.items():
        values = [getattr(row, name) for row in rows]
        if name in TIMESTAMP_COLUMNS:
            columns[name] = pd.Series(pd.to_datetime(values, utc=True).as_unit("ms"))
        else:
            columns[name] = pd.Series(values, dtype=dtype)
    return pd.DataFrame(columns)


class ParquetSaver:
    """Writes one export run to a single Parquet file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def save(self, rows: Sequence[WorkoutSetRow]) -> int:
        df = rows_to_frame(rows)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df.to_parquet(self.path, index=False, engine="pyarrow")
        logger.info("Wrote %d rows -> %s", len(df), self.path)
        return len(df)

    def load(self) -> pd.DataFrame:
        return pd.read_parquet(self.path, engine="pyarrow")
