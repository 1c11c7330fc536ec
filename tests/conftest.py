"""Shared fixtures for the analytics tests."""

from collections.abc import Sequence
from datetime import date, timedelta

import pytest

from adpulse.models.account import (
    AccountConfig,
    AccountSnapshot,
    BaseMetrics,
    Campaign,
    DailyMetrics,
    EcommerceMetrics,
    GymMetrics,
    Threshold,
)

START = date(2024, 3, 1)


def make_daily(
    spend: Sequence[float],
    results: Sequence[int] | None = None,
    impressions: Sequence[int] | None = None,
    clicks: Sequence[int] | None = None,
    start: date = START,
) -> list[DailyMetrics]:
    """Chronological daily series; unspecified metrics are held constant."""
    n = len(spend)
    results = results if results is not None else [10] * n
    impressions = impressions if impressions is not None else [10_000] * n
    clicks = clicks if clicks is not None else [200] * n
    return [
        DailyMetrics(
            date=start + timedelta(days=i),
            impressions=impressions[i],
            clicks=clicks[i],
            spend=spend[i],
            results=results[i],
        )
        for i in range(n)
    ]


@pytest.fixture
def growing_daily() -> list[DailyMetrics]:
    """14 days of flat spend with results doubling over the last 3 days."""
    return make_daily([100.0] * 14, results=[10] * 11 + [20] * 3)


@pytest.fixture
def ecommerce_config() -> AccountConfig:
    return AccountConfig(
        id="charlie-ralph-melb",
        name="Charlie Ralph Melbourne",
        slug="charlie-ralph-melbourne",
        type="ecommerce",
        primary_kpi="roas",
        thresholds={"roas": Threshold(green=5, yellow=3)},
    )


@pytest.fixture
def gym_config() -> AccountConfig:
    return AccountConfig(
        id="roar-mma-rockingham",
        name="ROAR MMA Rockingham",
        type="leadgen-gym",
        primary_kpi="costPerSubscription",
        thresholds={"costPerSubscription": Threshold(green=50, yellow=80)},
    )


@pytest.fixture
def leadgen_config() -> AccountConfig:
    return AccountConfig(
        id="cale-henderson",
        name="Cale Henderson",
        type="leadgen",
        primary_kpi="costPerResult",
    )


@pytest.fixture
def ecommerce_snapshot(
    ecommerce_config: AccountConfig, growing_daily: list[DailyMetrics]
) -> AccountSnapshot:
    """Strong e-commerce account: CTR 3.5%, ROAS 6x."""
    return AccountSnapshot(
        config=ecommerce_config,
        metrics=EcommerceMetrics(
            impressions=140_000,
            clicks=4_900,
            ctr=3.5,
            cpc=0.29,
            results=170,
            cost_per_result=8.2,
            amount_spent=1_400.0,
            roas=6.0,
            conversion_value=8_400.0,
            purchases=170,
            cost_per_purchase=8.2,
        ),
        daily_data=growing_daily,
    )


@pytest.fixture
def gym_snapshot(gym_config: AccountConfig) -> AccountSnapshot:
    """Gym account with weak CTR and a leaky application funnel."""
    return AccountSnapshot(
        config=gym_config,
        metrics=GymMetrics(
            impressions=50_000,
            clicks=400,
            ctr=0.8,
            cpc=2.5,
            results=40,
            cost_per_result=25.0,
            amount_spent=1_000.0,
            submit_application=40,
            start_trial=12,
            subscriptions=5,
            cost_per_subscription=90.0,
        ),
        daily_data=make_daily([100.0] * 10),
    )


def make_campaign(campaign_id: str, amount_spent: float, status: str = "ACTIVE") -> Campaign:
    return Campaign(
        id=campaign_id,
        name=f"Campaign {campaign_id}",
        status=status,
        objective="LEAD_GENERATION",
        metrics=BaseMetrics(amount_spent=amount_spent),
    )


@pytest.fixture
def leadgen_snapshot(leadgen_config: AccountConfig) -> AccountSnapshot:
    return AccountSnapshot(
        config=leadgen_config,
        metrics=BaseMetrics(
            impressions=60_000,
            clicks=900,
            ctr=1.5,
            cpc=1.1,
            results=40,
            cost_per_result=25.0,
            amount_spent=1_000.0,
        ),
        daily_data=make_daily([100.0] * 10),
    )


@pytest.fixture
def daily_factory():
    """Factory for daily series, see ``make_daily``."""
    return make_daily


@pytest.fixture
def campaign_factory():
    """Factory for campaigns, see ``make_campaign``."""
    return make_campaign
