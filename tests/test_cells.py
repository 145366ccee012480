import pytest

from factories import cell, make_cell_set
from strong_mcp.export.cells import (
    find_reps, find_rpe, find_weight, has_excluded, is_weight, parse_float, parse_uint,
)
from strong_mcp.export.transformer import extract_set
from strong_mcp.strong.models import Cell, CellKind


def test_unknown_cell_type_decodes_to_unrecognized():
    c = Cell.model_validate({"id": "1", "cellType": "HEART_RATE", "value": "120"})
    assert c.cell_type is CellKind.UNRECOGNIZED


def test_cell_type_match_is_case_sensitive():
    c = Cell.model_validate({"id": "1", "cellType": "reps", "value": "5"})
    assert c.cell_type is CellKind.UNRECOGNIZED
    assert find_reps([c]) is None


def test_numeric_json_value_is_kept_as_string():
    c = Cell.model_validate({"id": "1", "cellType": "REPS", "value": 8})
    assert c.value == "8"


def test_weight_kinds():
    assert is_weight(CellKind.WEIGHTED_BODYWEIGHT)
    assert not is_weight(CellKind.ASSISTED_BODYWEIGHT)
    assert not is_weight(CellKind.REPS)


@pytest.mark.parametrize("raw,expected", [
    ("100", 100.0),
    ("62.5", 62.5),
    ("-2.5", -2.5),
    (".5", 0.5),
    ("1e2", 100.0),
])
def test_parse_float_accepts_decimals(raw, expected):
    assert parse_float(raw) == expected


@pytest.mark.parametrize("raw", [
    None, "", " 100", "100kg", "inf", "nan", "1_000", "1,5", "1e400", "-1e400", "١٠٠", "１０",
])
def test_parse_float_treats_garbage_as_missing(raw):
    assert parse_float(raw) is None


@pytest.mark.parametrize("raw,expected", [("5", 5), ("+12", 12), ("0", 0), ("4294967295", 4294967295)])
def test_parse_uint(raw, expected):
    assert parse_uint(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "-1", "5.0", "abc", "4294967296", "٥", "１０"])
def test_parse_uint_treats_garbage_as_missing(raw):
    assert parse_uint(raw) is None


def test_first_weight_cell_wins():
    cs = make_cell_set("s1", cell("DUMBBELL_WEIGHT", "50"), cell("BARBELL_WEIGHT", "60"))
    assert find_weight(cs.cells) == 50.0


def test_first_weight_cell_wins_even_when_unparseable():
    cs = make_cell_set("s1", cell("OTHER_WEIGHT", "heavy"), cell("BARBELL_WEIGHT", "60"))
    assert find_weight(cs.cells) is None


def test_first_reps_and_rpe_cells_win():
    cs = make_cell_set(
        "s1",
        cell("REPS", "5", id="a"), cell("REPS", "7", id="b"),
        cell("RPE", "8", id="c"), cell("RPE", "9.5", id="d"),
    )
    assert find_reps(cs.cells) == 5
    assert find_rpe(cs.cells) == 8.0


def test_has_excluded():
    assert has_excluded(make_cell_set("s", cell("NOTE", "felt good")).cells)
    assert not has_excluded(make_cell_set("s", cell("REPS", "5")).cells)


class TestExtractSet:

    @pytest.mark.parametrize("marker", ["REST_TIMER", "NOTE"])
    def test_exclusion_wins_over_other_cells(self, marker):
        cs = make_cell_set(
            "s1", cell("BARBELL_WEIGHT", "100"), cell("REPS", "5"), cell("RPE", "8"), cell(marker, "90"),
        )
        assert extract_set(cs) is None

    def test_full_set(self):
        cs = make_cell_set("s1", cell("BARBELL_WEIGHT", "100"), cell("REPS", "5"), cell("RPE", "8"))
        s = extract_set(cs)
        assert s.id == "s1"
        assert (s.weight, s.reps, s.rpe) == (100.0, 5, 8.0)

    def test_missing_reps_defaults_to_zero(self):
        s = extract_set(make_cell_set("s1", cell("BARBELL_WEIGHT", "100")))
        assert s.reps == 0

    def test_unparseable_reps_defaults_to_zero(self):
        s = extract_set(make_cell_set("s1", cell("REPS", "five")))
        assert s.reps == 0

    def test_missing_weight_and_rpe_stay_absent(self):
        s = extract_set(make_cell_set("s1", cell("REPS", "10"), cell("RPE", None)))
        assert s.weight is None
        assert s.rpe is None

    def test_unrecognized_cells_are_ignored(self):
        s = extract_set(make_cell_set("s1", cell("DURATION", "60"), cell("HEART_RATE", "150")))
        assert (s.weight, s.reps, s.rpe) == (None, 0, None)

    def test_empty_cell_set_still_yields_a_set(self):
        s = extract_set(make_cell_set("s1"))
        assert s is not None and s.reps == 0

    def test_non_ascii_digits_are_missing(self):
        s = extract_set(make_cell_set("s1", cell("BARBELL_WEIGHT", "١٠٠"), cell("REPS", "٥")))
        assert (s.weight, s.reps) == (None, 0)
