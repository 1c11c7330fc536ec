"""Custom exceptions for the data-provider and service layers."""

from typing import Any


class AdPulseError(Exception):
    """Base exception for adpulse."""

    pass


class IngestionError(AdPulseError):
    """Base exception for ingestion errors."""

    pass


class SnapshotLoadError(IngestionError):
    """Failed to read a snapshot or daily series from disk."""

    pass


class SnapshotValidationError(IngestionError):
    """Snapshot payload failed validation against the Pydantic models."""

    def __init__(self, errors: list[dict[str, Any]], row_count: int):
        self.errors = errors
        self.row_count = row_count
        super().__init__(
            f"Validation failed for {len(errors)} of {row_count} records. "
            f"First error: {errors[0] if errors else 'N/A'}"
        )


class ColumnMappingError(IngestionError):
    """Required column not found in source data."""

    def __init__(self, missing_columns: list[str], available_columns: list[str]):
        self.missing_columns = missing_columns
        self.available_columns = available_columns
        super().__init__(
            f"Missing required columns: {missing_columns}. "
            f"Available: {available_columns[:10]}..."
        )


class ConfigLoadError(AdPulseError):
    """Failed to load a YAML registry."""

    pass


class UnknownAccountError(AdPulseError):
    """Account id or slug is not in the registry."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")
