"""Cell classification and strict numeric parsing."""

import math
import re
from typing import Iterable

from strong_mcp.strong.models import Cell, CellKind

WEIGHT_KINDS = (
    CellKind.OTHER_WEIGHT,
    CellKind.DUMBBELL_WEIGHT,
    CellKind.BARBELL_WEIGHT,
    CellKind.WEIGHTED_BODYWEIGHT,
)
EXCLUDED_KINDS = (CellKind.REST_TIMER, CellKind.NOTE)

UINT32_MAX = 2**32 - 1

_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_UINT_RE = re.compile(r"\+?[0-9]+")


def is_weight(kind: CellKind) -> bool:
    return kind in WEIGHT_KINDS


def is_excluded(kind: CellKind) -> bool:
    return kind in EXCLUDED_KINDS


def parse_float(value: str | None) -> float | None:
    """Parse a plain decimal number. Anything else is treated as missing."""
    if value is None or not _FLOAT_RE.fullmatch(value):
        return None
    number = float(value)
    # Out-of-range exponents overflow to inf.
    return number if math.isfinite(number) else None


def parse_uint(value: str | None) -> int | None:
    """Parse an unsigned 32-bit integer. Anything else is treated as missing."""
    if value is None or not _UINT_RE.fullmatch(value):
        return None
    number = int(value)
    return number if number <= UINT32_MAX else None


def first_cell(cells: Iterable[Cell], kinds: tuple[CellKind, ...]) -> Cell | None:
    return next((cell for cell in cells if cell.cell_type in kinds), None)


def find_weight(cells: Iterable[Cell]) -> float | None:
    # The first weight-like cell decides, even if its value does not parse.
    cell = first_cell(cells, WEIGHT_KINDS)
    return parse_float(cell.value) if cell else None


def find_reps(cells: Iterable[Cell]) -> int | None:
    cell = first_cell(cells, (CellKind.REPS,))
    return parse_uint(cell.value) if cell else None


def find_rpe(cells: Iterable[Cell]) -> float | None:
    cell = first_cell(cells, (CellKind.RPE,))
    return parse_float(cell.value) if cell else None


def has_excluded(cells: Iterable[Cell]) -> bool:
    return any(is_excluded(cell.cell_type) for cell in cells)
