"""Turn Strong logs into normalized workouts.

Cell set -> ``Set``, cell set group -> ``Exercise``, log -> ``Workout``.
Unparseable values, missing links and catalog misses are not errors: they
become absent values or empty names.
"""

import logging
from typing import Iterable

from strong_mcp.export.catalog import MeasurementCatalog, measurement_key
from strong_mcp.export.cells import find_reps, find_rpe, find_weight, has_excluded
from strong_mcp.export.models import Exercise, Set, Workout
from strong_mcp.strong.models import CellSet, CellSetGroup, Log

logger = logging.getLogger(__name__)


def extract_set(cell_set: CellSet) -> Set | None:
    """Build a ``Set`` from one cell set, or None for rest timers and notes."""
    if has_excluded(cell_set.cells):
        return None

    reps = find_reps(cell_set.cells)
    return Set(
        id=cell_set.id,
        weight=find_weight(cell_set.cells),
        reps=reps if reps is not None else 0,
        rpe=find_rpe(cell_set.cells),
    )


def resolve_exercise(group: CellSetGroup, catalog: MeasurementCatalog) -> Exercise | None:
    """Build an ``Exercise`` named from the catalog; None if no set survives."""
    sets = tuple(s for s in map(extract_set, group.cell_sets) if s is not None)
    if not sets:
        return None

    key = measurement_key(group.links)
    name = catalog.name_for(key)
    if key is None:
        logger.debug("Cell set group %s has no measurement link", group.id)
    elif name is None:
        logger.debug("Measurement %s for cell set group %s not in catalog", key, group.id)

    return Exercise(id=group.id, name=name or "", sets=sets)


def assemble_workout(log: Log, catalog: MeasurementCatalog) -> Workout:
    exercises = (resolve_exercise(group, catalog) for group in log.embedded.cell_set_group)
    return Workout(
        id=log.id,
        name=str(log.name) if log.name is not None else "",
        timezone=log.timezone_id,
        start_date=log.start_date,
        end_date=log.end_date,
        exercises=tuple(e for e in exercises if e is not None),
    )


def assemble_workouts(logs: Iterable[Log] | None, catalog: MeasurementCatalog) -> list[Workout]:
    """Assemble every log in order. A missing log collection gives no workouts."""
    if logs is None:
        return []
    return [assemble_workout(log, catalog) for log in logs]
