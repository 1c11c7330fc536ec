"""Loading account snapshots and daily series from the data provider."""

import json
import logging
from pathlib import Path
from typing import Any

import polars as pl
from pydantic import ValidationError

from ..exceptions import ColumnMappingError, SnapshotLoadError, SnapshotValidationError
from ..models.account import AccountSnapshot, DailyMetrics
from .cleaner import clean_daily_frame, normalize_snapshot_payload

logger = logging.getLogger(__name__)

# {internal_name: csv_column_name}
DEFAULT_DAILY_COLUMNS: dict[str, str] = {
    "date": "date",
    "impressions": "impressions",
    "clicks": "clicks",
    "spend": "spend",
    "results": "results",
}

OPTIONAL_DAILY_COLUMNS: dict[str, str] = {
    "roas": "roas",
    "subscriptions": "subscriptions",
}


def parse_snapshot(payload: dict[str, Any]) -> AccountSnapshot:
    """Validate a raw (camelCase) payload into an AccountSnapshot.

    Raises:
        SnapshotValidationError: If the payload fails validation, including
            duplicate daily dates
    """
    normalized = normalize_snapshot_payload(payload)
    try:
        return AccountSnapshot.model_validate(normalized)
    except ValidationError as e:
        raise SnapshotValidationError(e.errors(), 1) from e


def load_snapshot_file(path: Path) -> AccountSnapshot:
    """Read and validate a JSON snapshot file."""
    try:
        with open(path) as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotLoadError(f"Failed to load snapshot from {path}: {e}") from e

    snapshot = parse_snapshot(payload)
    logger.info(
        "Loaded snapshot for %s with %d days", snapshot.config.id, len(snapshot.daily_data)
    )
    return snapshot


def _rename_columns(df: pl.DataFrame, column_map: dict[str, str]) -> pl.DataFrame:
    """Rename wire columns to internal names.

    column_map: {internal_name: raw_column_name}
    """
    raw_to_internal = {v: k for k, v in column_map.items()}

    available = set(df.columns)
    missing = set(raw_to_internal) - available
    if missing:
        raise ColumnMappingError(sorted(missing), list(df.columns))

    optional = {
        raw: internal
        for internal, raw in OPTIONAL_DAILY_COLUMNS.items()
        if raw in available and raw not in raw_to_internal
    }
    rename_dict = {
        raw: internal
        for raw, internal in {**raw_to_internal, **optional}.items()
        if raw != internal
    }
    return df.rename(rename_dict) if rename_dict else df


def load_daily_csv(
    path: Path,
    column_map: dict[str, str] | None = None,
) -> list[DailyMetrics]:
    """Load a daily metrics CSV: Load -> Rename -> Clean -> Validate.

    Args:
        path: CSV file with one row per day
        column_map: {internal_name: csv_column} for required columns

    Returns:
        Chronological list of DailyMetrics

    Raises:
        SnapshotLoadError: If the file cannot be read
        ColumnMappingError: If a required column is missing
        SnapshotValidationError: If rows fail validation or dates repeat
    """
    try:
        df = pl.read_csv(path)
    except Exception as e:
        raise SnapshotLoadError(f"Failed to read daily CSV {path}: {e}") from e

    df = _rename_columns(df, column_map or DEFAULT_DAILY_COLUMNS)
    df = clean_daily_frame(df)

    errors: list[dict[str, Any]] = []
    rows = df.to_dicts()
    days: list[DailyMetrics] = []

    for i, row in enumerate(rows):
        try:
            days.append(DailyMetrics.model_validate(row))
        except ValidationError as e:
            errors.append({"row": i, "errors": e.errors()})

    seen: set = set()
    for i, day in enumerate(days):
        if day.date in seen:
            errors.append({"row": i, "errors": [f"duplicate date {day.date}"]})
        seen.add(day.date)

    if errors:
        raise SnapshotValidationError(errors, len(rows))

    logger.info("Loaded %d daily rows from %s", len(days), path)
    return days


class FileSnapshotProvider:
    """Data provider reading ``<account_id>.json`` snapshots from a directory.

    Usage:
        provider = FileSnapshotProvider(Path("data/snapshots"))
        snapshot = provider.fetch_snapshot("charlie-ralph-melb")
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def fetch_snapshot(self, account_id: str) -> AccountSnapshot:
        path = self.directory / f"{account_id}.json"
        if not path.exists():
            raise SnapshotLoadError(f"No snapshot for {account_id} in {self.directory}")
        return load_snapshot_file(path)
