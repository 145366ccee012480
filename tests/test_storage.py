import pandas as pd

from strong_mcp.export.flatten import flatten_workout
from strong_mcp.export.models import Exercise, Set, Workout
from strong_mcp.export.storage import SCHEMA, ParquetSaver, rows_to_frame


def _rows():
    workout = Workout(
        id="w1", name="Pull", timezone="UTC",
        start_date="2024-03-01T10:00:00Z", end_date="2024-03-01T11:00:00Z",
        exercises=(
            Exercise(id="e1", name="Row", sets=(Set(id="s1", weight=60.0, reps=8), Set(id="s2", reps=6, rpe=9.0))),
        ),
    )
    return flatten_workout(workout).rows


def test_frame_has_fixed_schema():
    df = rows_to_frame(_rows())
    assert list(df.columns) == list(SCHEMA)
    assert df["exercise_ordinal"].dtype == "uint32"
    assert df["reps"].dtype == "uint32"
    assert df["weight"].dtype == "float32"
    assert str(df["start_date"].dtype) == "datetime64[ms, UTC]"


def test_save_and_load_keeps_rows_in_order(tmp_path):
    saver = ParquetSaver(tmp_path / "out" / "workouts.parquet")

    assert saver.save(_rows()) == 2

    df = saver.load()
    assert list(df["set_id"]) == ["s1", "s2"]
    assert list(df["set_ordinal"]) == [0, 1]
    assert list(df["weight"]) == [60.0, 0.0]
    assert list(df["rpe"]) == [0.0, 9.0]
    assert df["start_date"].iloc[0] == pd.Timestamp("2024-03-01T10:00:00Z")


def test_save_empty_writes_schema(tmp_path):
    saver = ParquetSaver(tmp_path / "empty.parquet")
    assert saver.save([]) == 0
    df = saver.load()
    assert len(df) == 0
    assert list(df.columns) == list(SCHEMA)
