"""Account health scoring.

The overall score is a weighted blend of four 0-100 sub-scores:

    efficiency  35%  CTR and type-specific cost efficiency
    growth      25%  results of the last 3 days vs. the 4 before
    consistency 20%  coefficient of variation of daily spend
    risk        20%  count of binary risk flags

Growth and consistency need 7 days of history and stay at a neutral 50
otherwise.
"""

from ..models.account import AccountSnapshot
from .expressions import daily_frame, results_growth_rate, spend_variation_pct
from .models import FactorImpact, Grade, HealthFactor, HealthScore
from .stats import round_half_up

NEUTRAL_SCORE = 50.0
HISTORY_MIN_DAYS = 7

WEIGHTS = {
    "efficiency": 0.35,
    "growth": 0.25,
    "consistency": 0.2,
    "risk": 0.2,
}

GRADE_CUTOFFS = [(85, Grade.A), (70, Grade.B), (55, Grade.C), (40, Grade.D)]


def _impact(score: float, positive: float = 70, neutral: float = 50) -> FactorImpact:
    if score >= positive:
        return FactorImpact.POSITIVE
    if score >= neutral:
        return FactorImpact.NEUTRAL
    return FactorImpact.NEGATIVE


def _tier_at_least(value: float, tiers: list[tuple[float, float]]) -> float:
    """Score for the first tier whose floor ``value`` reaches, else 30."""
    for floor, score in tiers:
        if value >= floor:
            return score
    return 30.0


def _tier_at_most(value: float, tiers: list[tuple[float, float]]) -> float:
    """Score for the first tier whose ceiling ``value`` stays under, else 30."""
    for ceiling, score in tiers:
        if value <= ceiling:
            return score
    return 30.0


def grade_for(overall: float) -> Grade:
    for cutoff, grade in GRADE_CUTOFFS:
        if overall >= cutoff:
            return grade
    return Grade.F


def _ctr_factor(ctr: float) -> HealthFactor:
    score = min(100.0, ctr * 30)
    if score >= 70:
        verdict = "is excellent"
    elif score >= 40:
        verdict = "is average"
    else:
        verdict = "needs improvement"
    return HealthFactor(
        name="Click-Through Rate",
        score=score,
        impact=_impact(score, positive=70, neutral=40),
        description=f"CTR of {ctr:.2f}% {verdict}",
    )


def _cost_factor(snapshot: AccountSnapshot) -> HealthFactor:
    """Cost efficiency by account type: ROAS, cost per sub, or cost per result."""
    config, metrics = snapshot.config, snapshot.metrics

    if config.type == "ecommerce" and metrics.kind == "ecommerce":
        score = _tier_at_least(metrics.roas, [(5, 90), (3, 70), (2, 50)])
        verdicts = ("exceeds targets", "meets targets", "is below targets")
        name = "ROAS"
        subject = f"ROAS of {metrics.roas:.2f}x"
    elif config.type == "leadgen-gym" and metrics.kind == "gym":
        score = _tier_at_most(
            metrics.cost_per_subscription, [(50, 90), (80, 70), (100, 50)]
        )
        verdicts = ("is efficient", "is acceptable", "needs optimization")
        name = "Cost Per Subscription"
        subject = f"Cost of ${metrics.cost_per_subscription:.2f} per subscription"
    else:
        score = _tier_at_most(metrics.cost_per_result, [(30, 90), (50, 70), (80, 50)])
        verdicts = ("is efficient", "is acceptable", "needs optimization")
        name = "Cost Per Result"
        subject = f"Cost of ${metrics.cost_per_result:.2f} per result"

    impact = _impact(score)
    verdict = {
        FactorImpact.POSITIVE: verdicts[0],
        FactorImpact.NEUTRAL: verdicts[1],
        FactorImpact.NEGATIVE: verdicts[2],
    }[impact]
    return HealthFactor(
        name=name,
        score=score,
        impact=impact,
        description=f"{subject} {verdict}",
    )


def _growth_factor(growth_rate: float) -> HealthFactor:
    if growth_rate > 20:
        score = 90.0
    elif growth_rate > 10:
        score = 75.0
    elif growth_rate > 0:
        score = 60.0
    elif growth_rate > -10:
        score = 45.0
    else:
        score = 30.0
    trend = "growing" if growth_rate > 0 else "declining"
    return HealthFactor(
        name="Results Growth",
        score=score,
        impact=_impact(score, positive=60, neutral=45),
        description=f"Results {trend} at {abs(growth_rate):.1f}% week-over-week",
    )


def _consistency_factor(variation_pct: float) -> HealthFactor:
    score = _tier_at_most(variation_pct, [(10, 90), (25, 70), (40, 50)])
    impact = _impact(score)
    verdict = {
        FactorImpact.POSITIVE: "is stable",
        FactorImpact.NEUTRAL: "is moderate",
        FactorImpact.NEGATIVE: "is volatile",
    }[impact]
    return HealthFactor(
        name="Spend Consistency",
        score=score,
        impact=impact,
        description=f"Daily spend variance of {variation_pct:.1f}% {verdict}",
    )


def _risk_factor(snapshot: AccountSnapshot) -> HealthFactor:
    daily = snapshot.daily_data
    low_ctr = snapshot.metrics.ctr < 1
    no_recent_results = bool(daily) and daily[-1].results == 0
    flags = sum([low_ctr, no_recent_results])

    score, description = {
        0: (90.0, "No significant risks detected"),
        1: (60.0, "Minor risk factors present"),
        2: (30.0, "Multiple risk factors detected"),
    }[flags]
    return HealthFactor(
        name="Risk Level",
        score=score,
        impact=_impact(score),
        description=description,
    )


def calculate_health_score(snapshot: AccountSnapshot) -> HealthScore:
    """Score an account 0-100 and assign a letter grade.

    Args:
        snapshot: Current metrics, config and chronological daily data

    Returns:
        HealthScore with rounded sub-scores and the factors behind them.
    """
    factors: list[HealthFactor] = []

    ctr = _ctr_factor(snapshot.metrics.ctr)
    cost = _cost_factor(snapshot)
    factors.extend([ctr, cost])
    efficiency = (ctr.score + cost.score) / 2

    growth = NEUTRAL_SCORE
    consistency = NEUTRAL_SCORE
    if len(snapshot.daily_data) >= HISTORY_MIN_DAYS:
        frame = daily_frame(snapshot.daily_data)

        growth_factor = _growth_factor(results_growth_rate(frame))
        factors.append(growth_factor)
        growth = growth_factor.score

        consistency_factor = _consistency_factor(spend_variation_pct(frame))
        factors.append(consistency_factor)
        consistency = consistency_factor.score

    risk_factor = _risk_factor(snapshot)
    factors.append(risk_factor)
    risk = risk_factor.score

    overall = round_half_up(
        efficiency * WEIGHTS["efficiency"]
        + growth * WEIGHTS["growth"]
        + consistency * WEIGHTS["consistency"]
        + risk * WEIGHTS["risk"]
    )

    return HealthScore(
        overall=overall,
        efficiency=round_half_up(efficiency),
        growth=round_half_up(growth),
        consistency=round_half_up(consistency),
        risk=round_half_up(risk),
        grade=grade_for(overall),
        factors=factors,
    )
