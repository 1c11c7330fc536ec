"""Tests for the TTL cache, AccountReportService and AccountReport."""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from adpulse.analytics import AlertSeverity, Grade, ThresholdColor
from adpulse.exceptions import ConfigLoadError, SnapshotLoadError, UnknownAccountError
from adpulse.models.account import AccountSnapshot
from adpulse.services import AccountReportService, TTLCache
from adpulse.settings import Settings, configure_logging

NOW = datetime(2024, 3, 14, 9, 30, tzinfo=timezone.utc)
AS_OF = date(2024, 3, 14)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeProvider:
    """In-memory provider that counts fetches per account."""

    def __init__(self, snapshots: list[AccountSnapshot]):
        self.snapshots = {s.config.id: s for s in snapshots}
        self.calls: dict[str, int] = {}

    def fetch_snapshot(self, account_id: str) -> AccountSnapshot:
        self.calls[account_id] = self.calls.get(account_id, 0) + 1
        if account_id not in self.snapshots:
            raise SnapshotLoadError(f"No snapshot for {account_id}")
        return self.snapshots[account_id]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(cache_ttl_seconds=300, significance_threshold=5.0, forecast_days=7)


@pytest.fixture
def provider(
    ecommerce_snapshot: AccountSnapshot, gym_snapshot: AccountSnapshot
) -> FakeProvider:
    return FakeProvider([ecommerce_snapshot, gym_snapshot])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(provider: FakeProvider, settings: Settings, clock: FakeClock) -> AccountReportService:
    return AccountReportService(provider, cache=TTLCache(300, clock=clock), settings=settings)


@pytest.fixture
def report(service: AccountReportService):
    return service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)


# =============================================================================
# CACHE
# =============================================================================


class TestTTLCache:
    """Tests for TTLCache."""

    def test_fresh_entry_is_served(self, clock: FakeClock) -> None:
        cache = TTLCache(10, clock=clock)
        cache.set("a", 1)
        clock.now = 9.9
        assert cache.get("a") == 1

    def test_expired_entry_is_evicted(self, clock: FakeClock) -> None:
        cache = TTLCache(10, clock=clock)
        cache.set("a", 1)
        clock.now = 10.0

        assert cache.get("a") is None
        assert len(cache) == 0

    def test_get_or_load_calls_loader_once(self, clock: FakeClock) -> None:
        cache = TTLCache(10, clock=clock)
        calls = []

        def loader() -> str:
            calls.append(1)
            return "value"

        assert cache.get_or_load("k", loader) == "value"
        assert cache.get_or_load("k", loader) == "value"
        assert len(calls) == 1

        clock.now = 11
        cache.get_or_load("k", loader)
        assert len(calls) == 2

    def test_cached_none_is_not_reloaded(self, clock: FakeClock) -> None:
        cache = TTLCache(10, clock=clock)
        calls = []

        def loader() -> None:
            calls.append(1)

        assert cache.get_or_load("k", loader) is None
        assert cache.get_or_load("k", loader) is None
        assert len(calls) == 1

        clock.now = 10
        cache.get_or_load("k", loader)
        assert len(calls) == 2

    def test_invalidate_and_clear(self) -> None:
        cache = TTLCache(60)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate("a")
        cache.invalidate("missing")
        assert cache.get("a") is None
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(ValueError):
            TTLCache(-1)


# =============================================================================
# SERVICE
# =============================================================================


class TestAccountReportService:
    """Tests for AccountReportService."""

    def test_report_contents(self, report) -> None:
        assert report.account_id == "charlie-ralph-melb"
        assert report.account_type == "ecommerce"
        assert report.generated_at == NOW
        assert report.as_of == AS_OF
        assert report.health.grade == Grade.A
        assert report.health.overall == 92
        assert report.primary_kpi_color == ThresholdColor.GREEN
        assert set(report.wow_trends) == {"spend", "results", "impressions", "clicks"}
        assert len(report.spend_forecast) == 7
        assert report.month_end_results.value > 170
        assert [i.id for i in report.insights] == [
            "ecom-high-roas",
            "achievement-grade-a",
            "high-ctr",
        ]
        assert [b.metric for b in report.benchmarks] == ["CTR", "CPC", "ROAS"]
        assert report.anomalies == []
        assert report.alerts == []

    def test_slug_resolves_to_same_snapshot(
        self, service: AccountReportService, provider: FakeProvider
    ) -> None:
        by_slug = service.get_snapshot("charlie-ralph-melbourne")
        by_id = service.get_snapshot("charlie-ralph-melb")

        assert by_slug is by_id
        assert provider.calls == {"charlie-ralph-melb": 1}

    def test_snapshot_is_cached_until_expiry(
        self, service: AccountReportService, provider: FakeProvider, clock: FakeClock
    ) -> None:
        service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)
        service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)
        assert provider.calls["charlie-ralph-melb"] == 1

        clock.now = 300
        service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)
        assert provider.calls["charlie-ralph-melb"] == 2

    def test_forced_refresh(
        self, service: AccountReportService, provider: FakeProvider
    ) -> None:
        service.get_snapshot("charlie-ralph-melb")
        service.get_snapshot("charlie-ralph-melb", refresh=True)
        assert provider.calls["charlie-ralph-melb"] == 2

    def test_refresh_clears_cache(
        self, service: AccountReportService, provider: FakeProvider
    ) -> None:
        service.get_snapshot("charlie-ralph-melb")
        service.get_snapshot("roar-mma-rockingham")
        assert len(service.cache) == 2

        service.refresh()
        assert len(service.cache) == 0
        service.get_snapshot("charlie-ralph-melb")
        assert provider.calls["charlie-ralph-melb"] == 2

    def test_unknown_account(
        self, service: AccountReportService, provider: FakeProvider
    ) -> None:
        with pytest.raises(UnknownAccountError):
            service.generate_report("nobody")
        assert provider.calls == {}

    def test_provider_errors_propagate(self, service: AccountReportService) -> None:
        with pytest.raises(SnapshotLoadError):
            service.get_snapshot("blank-kanvas")

    def test_portfolio_alerts(self, service: AccountReportService) -> None:
        alerts = service.generate_alerts(
            ["charlie-ralph-melb", "roar-mma-rockingham"], now=NOW
        )

        assert {a.account_id for a in alerts} == {"roar-mma-rockingham"}
        assert all(a.severity == AlertSeverity.WARNING for a in alerts)
        assert all(a.timestamp == NOW for a in alerts)

    def test_gym_report(self, service: AccountReportService) -> None:
        report = service.generate_report("roar-mma-rockingham", as_of=AS_OF, now=NOW)

        assert report.primary_kpi_color == ThresholdColor.RED
        assert report.wow_trends == {}
        assert len(report.alerts) == 2

    def test_settings_drive_forecast_horizon(
        self, provider: FakeProvider, settings: Settings
    ) -> None:
        service = AccountReportService(
            provider, settings=settings.model_copy(update={"forecast_days": 3})
        )
        report = service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)
        assert len(report.spend_forecast) == 3

    def test_logs_report_generation(
        self, service: AccountReportService, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="adpulse")
        service.generate_report("charlie-ralph-melb", as_of=AS_OF, now=NOW)
        assert "Generating report for charlie-ralph-melb" in caplog.text

    def test_from_settings(
        self, tmp_path: Path, ecommerce_snapshot: AccountSnapshot
    ) -> None:
        path = tmp_path / "charlie-ralph-melb.json"
        path.write_text(ecommerce_snapshot.model_dump_json(by_alias=True))

        service = AccountReportService.from_settings(Settings(snapshot_dir=tmp_path))
        report = service.generate_report("charlie-ralph-melbourne", as_of=AS_OF, now=NOW)
        assert report.health.grade == Grade.A

    def test_from_settings_requires_snapshot_dir(self) -> None:
        with pytest.raises(ConfigLoadError):
            AccountReportService.from_settings(Settings(snapshot_dir=None))


class TestSettings:
    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ADPULSE_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("ADPULSE_FORECAST_DAYS", "14")

        settings = Settings()
        assert settings.cache_ttl_seconds == 60
        assert settings.forecast_days == 14

    def test_bundled_paths_exist(self) -> None:
        settings = Settings()
        assert settings.accounts_path.exists()
        assert settings.benchmarks_path.exists()

    def test_configure_logging_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured: dict = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        configure_logging("debug")
        assert captured["level"] == "DEBUG"


# =============================================================================
# REPORT SERIALISATION
# =============================================================================


class TestAccountReport:
    """Tests for AccountReport.to_dict(), to_json() and get_summary()."""

    def test_to_dict_shape(self, report) -> None:
        data = report.to_dict()

        assert set(data) == {
            "meta",
            "healthScore",
            "primaryKpiColor",
            "trends",
            "forecast",
            "monthEndResults",
            "anomalies",
            "insights",
            "benchmarks",
            "alerts",
        }
        assert data["meta"]["accountId"] == "charlie-ralph-melb"
        assert data["meta"]["asOf"] == "2024-03-14"
        assert data["healthScore"]["grade"] == "A"
        assert data["primaryKpiColor"] == "green"
        assert data["trends"]["spend"]["direction"] == "stable"
        assert data["forecast"][0]["date"] == "2024-03-15"
        assert set(data["forecast"][0]) == {"date", "predicted", "lowerBound", "upperBound"}
        assert data["benchmarks"][2]["industryAvg"] == 4.0

    def test_to_json_is_valid(self, report) -> None:
        parsed = json.loads(report.to_json())
        assert parsed["healthScore"]["overall"] == 92
        assert parsed["insights"][0]["id"] == "ecom-high-roas"

    def test_summary(self, report) -> None:
        summary = report.get_summary()

        assert summary["health_score"] == 92
        assert summary["grade"] == "A"
        assert summary["kpi_color"] == "green"
        assert summary["spend_wow_pct"] == 0
        assert summary["anomaly_count"] == 0
        assert summary["high_priority_insights"] == 1
        assert summary["alert_count"] == 0
        assert summary["top_insight"] == "Scale Opportunity"

    def test_summary_without_history(self, service: AccountReportService) -> None:
        report = service.generate_report("roar-mma-rockingham", as_of=AS_OF, now=NOW)
        summary = report.get_summary()

        assert summary["spend_wow_pct"] is None
        assert summary["top_insight"] == "Improve Lead-to-Subscription Rate"
