"""Report service - orchestrates snapshot retrieval and analytics."""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Protocol

from ..analytics import (
    Alert,
    InsightEngine,
    InsightThresholds,
    calculate_benchmarks,
    calculate_health_score,
    calculate_wow_trends,
    detect_anomalies,
    forecast_spend,
    generate_alerts,
    get_primary_kpi_color,
    predict_month_end_results,
)
from ..analytics.benchmarks import load_benchmark_table
from ..exceptions import ConfigLoadError, UnknownAccountError
from ..ingestion import AccountRegistry, FileSnapshotProvider
from ..models.account import AccountSnapshot
from ..models.report import AccountReport
from ..settings import Settings, get_settings
from .cache import TTLCache

logger = logging.getLogger(__name__)


class SnapshotProvider(Protocol):
    """Anything that can fetch a fully materialised account snapshot."""

    def fetch_snapshot(self, account_id: str) -> AccountSnapshot: ...


class AccountReportService:
    """Service for generating account analytics reports.

    Orchestrates:
    1. Resolving the account in the registry (id or slug)
    2. Fetching its snapshot through the cache
    3. Running every engine analysis on the same snapshot
    4. Returning a consolidated AccountReport

    Usage:
        service = AccountReportService(FileSnapshotProvider(Path("data")))
        report = service.generate_report("charlie-ralph-melb")
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        cache: TTLCache | None = None,
        registry: AccountRegistry | None = None,
        settings: Settings | None = None,
        thresholds: InsightThresholds | None = None,
    ):
        self.settings = settings or get_settings()
        self.provider = provider
        self.cache = cache if cache is not None else TTLCache(self.settings.cache_ttl_seconds)
        self.registry = registry or AccountRegistry(self.settings.accounts_path)
        self.thresholds = thresholds or InsightThresholds()
        self.benchmark_table = load_benchmark_table(self.settings.benchmarks_path)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AccountReportService":
        """Service reading JSON snapshots from ``settings.snapshot_dir``."""
        settings = settings or get_settings()
        if settings.snapshot_dir is None:
            raise ConfigLoadError("ADPULSE_SNAPSHOT_DIR is not set")
        return cls(FileSnapshotProvider(settings.snapshot_dir), settings=settings)

    def _resolve_id(self, account_id: str) -> str:
        config = self.registry.get(account_id)
        if config is None:
            raise UnknownAccountError(account_id)
        return config.id

    def get_snapshot(self, account_id: str, refresh: bool = False) -> AccountSnapshot:
        """Snapshot for an account id or slug, served from cache when fresh."""
        resolved = self._resolve_id(account_id)
        if refresh:
            self.cache.invalidate(resolved)
        return self.cache.get_or_load(
            resolved, lambda: self.provider.fetch_snapshot(resolved)
        )

    def generate_report(
        self,
        account_id: str,
        as_of: date | None = None,
        now: datetime | None = None,
    ) -> AccountReport:
        """Generate the full analytics report for one account.

        Args:
            account_id: Registry id or slug
            as_of: Reference day for month-end projection (default: today)
            now: Report/alert timestamp (default: current UTC time)

        Returns:
            AccountReport with health, trends, forecasts, anomalies,
            insights, benchmarks and alerts.
        """
        snapshot = self.get_snapshot(account_id)
        now = now or datetime.now(timezone.utc)
        as_of = as_of or now.date()
        daily = snapshot.daily_data

        logger.info("Generating report for %s (%d days)", snapshot.config.id, len(daily))

        health = calculate_health_score(snapshot)
        anomalies = detect_anomalies(daily)
        insights = InsightEngine(
            snapshot, self.thresholds, health=health
        ).generate_all_insights()

        return AccountReport(
            generated_at=now,
            account_id=snapshot.config.id,
            account_name=snapshot.config.name,
            account_type=snapshot.config.type,
            as_of=as_of,
            health=health,
            primary_kpi_color=get_primary_kpi_color(snapshot.config, snapshot.metrics),
            wow_trends=calculate_wow_trends(daily, self.settings.significance_threshold),
            spend_forecast=forecast_spend(daily, self.settings.forecast_days),
            month_end_results=predict_month_end_results(daily, as_of=as_of),
            anomalies=anomalies,
            insights=insights,
            benchmarks=calculate_benchmarks(snapshot, self.benchmark_table),
            alerts=generate_alerts([snapshot], now=now),
        )

    def generate_alerts(
        self,
        account_ids: Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> list[Alert]:
        """Alerts across accounts (default: every registered account)."""
        ids = list(account_ids) if account_ids is not None else [c.id for c in self.registry.all()]
        snapshots = [self.get_snapshot(account_id) for account_id in ids]
        alerts = generate_alerts(snapshots, now=now)
        logger.info("Generated %d alerts across %d accounts", len(alerts), len(ids))
        return alerts

    def refresh(self) -> None:
        """Drop every cached snapshot."""
        self.cache.clear()
        logger.info("Snapshot cache cleared")
