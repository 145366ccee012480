"""One export run: user logs + catalog -> workouts -> rows."""

import logging

from strong_mcp.export.catalog import MeasurementCatalog
from strong_mcp.export.flatten import DEFAULT_TIMEZONE, flatten_workouts
from strong_mcp.export.models import ExportResult
from strong_mcp.export.transformer import assemble_workouts
from strong_mcp.strong.models import UserResponse

logger = logging.getLogger(__name__)


def export_workouts(
    user: UserResponse,
    catalog: MeasurementCatalog,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> ExportResult:
    logger.info("Measurements count: %d/%d", len(catalog), catalog.total)

    workouts = assemble_workouts(user.embedded.log, catalog)
    logger.info("Workout count: %d", len(workouts))

    flat = flatten_workouts(workouts, default_timezone)
    if flat.errors:
        logger.warning("%d row errors while flattening", len(flat.errors))

    return ExportResult(workouts=workouts, rows=flat.rows, errors=flat.errors)
