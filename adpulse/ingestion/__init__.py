from .cleaner import infer_metrics_kind, normalize_snapshot_payload
from .loader import FileSnapshotProvider, load_daily_csv, load_snapshot_file, parse_snapshot
from .registry import AccountRegistry

__all__ = [
    "AccountRegistry",
    "FileSnapshotProvider",
    "infer_metrics_kind",
    "load_daily_csv",
    "load_snapshot_file",
    "normalize_snapshot_payload",
    "parse_snapshot",
]
