"""Strong MCP Server."""

import os
import logging
from datetime import datetime, timezone

from mcp.server.fastmcp import FastMCP

from strong_mcp.export import MeasurementCatalog, ParquetSaver, Workout, export_workouts as run_export
from strong_mcp.export.flatten import TimestampError, parse_timestamp
from strong_mcp.export.transformer import assemble_workouts
from strong_mcp.strong.client import StrongClient
from strong_mcp.strong.exceptions import AuthenticationError, StrongError

logger = logging.getLogger(__name__)

mcp = FastMCP("strong")
_state: dict = {"client": None, "catalog": None}


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise StrongError(f"{name} environment variable must be set.")
    return value


async def _get_client() -> StrongClient:
    """Create the client and log in from env vars on first use."""
    client = _state["client"]
    if client is not None and client.is_authenticated:
        return client

    username = os.environ.get("STRONG_USER")
    password = os.environ.get("STRONG_PASS")
    if not username or not password:
        raise AuthenticationError(
            "STRONG_USER and STRONG_PASS environment variables must be set."
        )

    client = StrongClient(_require_env("STRONG_BACKEND"))
    await client.login(username, password)
    _state["client"] = client
    return client


async def _get_catalog(client: StrongClient) -> MeasurementCatalog:
    if _state["catalog"] is None:
        response = await client.get_catalog(
            pages=int(os.environ.get("STRONG_CATALOG_PAGES", "2")),
            cache_path=os.environ.get("STRONG_CATALOG_CACHE", "measurements.json"),
        )
        _state["catalog"] = MeasurementCatalog(response)
    return _state["catalog"]


_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _started(workout: Workout) -> datetime:
    try:
        return parse_timestamp(workout.start_date)
    except TimestampError:
        return _UNDATED


def _most_recent(workouts: list[Workout], limit: int) -> list[Workout]:
    """Newest first by start time; undated workouts sort last."""
    if limit < 1:
        raise ValueError("limit must be at least 1.")
    return sorted(workouts, key=_started, reverse=True)[:limit]


def _format_set(s) -> str:
    text = f"{s.weight}kg x {s.reps}" if s.weight is not None else f"{s.reps} reps"
    if s.rpe is not None:
        text += f" @RPE{s.rpe}"
    return text


@mcp.tool()
async def get_workouts(limit: int = 20) -> str:
    """Fetch logged workouts from Strong with exercise names resolved.

    Args:
        limit: Maximum number of workouts to return (default 20).
    """
    client = await _get_client()
    catalog = await _get_catalog(client)
    user = await client.get_user()

    workouts = _most_recent(assemble_workouts(user.embedded.log, catalog), limit)
    if not workouts:
        return "No workouts found."

    lines = []
    for w in workouts:
        date_str = f" ({w.start_date})" if w.start_date else ""
        lines.append(f"## {w.name or 'Workout'}{date_str}")
        for exercise in w.exercises:
            name = exercise.name or exercise.id
            lines.append(f"  {name}: " + ", ".join(_format_set(s) for s in exercise.sets))
        lines.append("")

    return "\n".join(lines)


@mcp.tool()
async def get_exercises() -> str:
    """List the exercise catalog (Strong measurements)."""
    client = await _get_client()
    catalog = await _get_catalog(client)

    if not catalog:
        return "No exercises found."

    lines = [f"Found {len(catalog)} exercises (declared total {catalog.total}):\n"]
    for m in sorted(catalog.measurements, key=lambda m: str(m.name)):
        lines.append(f"- **{m.name}** (id: {m.id})")

    return "\n".join(lines)


@mcp.tool()
async def export_workouts(path: str = "workouts.parquet") -> str:
    """Export every logged set as one row to a Parquet file.

    Args:
        path: Output file path (default workouts.parquet).
    """
    client = await _get_client()
    catalog = await _get_catalog(client)
    user = await client.get_user()

    result = run_export(user, catalog)
    written = ParquetSaver(path).save(result.rows)

    lines = [f"Exported {written} sets from {len(result.workouts)} workouts to {path}."]
    if result.errors:
        lines.append(f"Skipped {result.skipped_sets} sets:")
        for e in result.errors:
            lines.append(f"- workout {e.workout_id}, set {e.set_id}: {e.field} {e.reason} ({e.value!r})")

    return "\n".join(lines)


def main():
    logging.basicConfig(level=os.environ.get("STRONG_LOG_LEVEL", "INFO"))
    mcp.run()


if __name__ == "__main__":
    main()
