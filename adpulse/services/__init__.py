from .cache import TTLCache
from .report_service import AccountReportService, SnapshotProvider

__all__ = ["AccountReportService", "SnapshotProvider", "TTLCache"]
