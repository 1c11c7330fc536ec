"""Output models for analytics calculations."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class AnomalySeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnomalyType(str, Enum):
    SPIKE = "spike"
    DROP = "drop"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class FactorImpact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InsightType(str, Enum):
    OPTIMIZATION = "optimization"
    WARNING = "warning"
    OPPORTUNITY = "opportunity"
    ACHIEVEMENT = "achievement"


class InsightPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BenchmarkStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class ThresholdColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class AlertType(str, Enum):
    DECLINING_ROAS = "declining_roas"
    HIGH_COST_PER_SUB = "high_cost_per_sub"
    LOW_CTR = "low_ctr"
    SPEND_PACING = "spend_pacing"
    NO_RESULTS = "no_results"


@dataclass(frozen=True)
class TrendResult:
    """Period-over-period change for one metric."""

    direction: TrendDirection
    percentage: float  # signed % change
    is_significant: bool
    confidence: float  # min(|percentage| / 100, 1)


@dataclass(frozen=True)
class ForecastPoint:
    """Projected spend for one future day."""

    date: date
    predicted: float
    lower_bound: float
    upper_bound: float


@dataclass(frozen=True)
class Prediction:
    """Month-end results projection."""

    value: int
    lower_bound: int
    upper_bound: int
    confidence: float


@dataclass(frozen=True)
class Anomaly:
    """Single recent-day outlier."""

    id: str  # "<date>-<metric>"
    metric: str
    date: date
    value: float
    expected: float  # series mean
    deviation: float  # z-score
    severity: AnomalySeverity
    type: AnomalyType
    description: str


@dataclass(frozen=True)
class HealthFactor:
    """One scored component behind a health score."""

    name: str
    score: float
    impact: FactorImpact
    description: str


@dataclass(frozen=True)
class HealthScore:
    """Weighted composite account health."""

    overall: int
    efficiency: int
    growth: int
    consistency: int
    risk: int
    grade: Grade
    factors: list[HealthFactor]


@dataclass(frozen=True)
class Insight:
    """Rule-based narrative recommendation."""

    id: str
    type: InsightType
    priority: InsightPriority
    title: str
    description: str
    actionable: bool
    action: str | None = None
    impact: str | None = None


@dataclass(frozen=True)
class Benchmark:
    """Account metric placed against the industry average."""

    metric: str
    value: float
    industry_avg: float
    percentile: float  # 0-100, capped
    status: BenchmarkStatus


@dataclass(frozen=True)
class Alert:
    """Portfolio-level alert for a single account."""

    id: str
    account_id: str
    account_name: str
    type: AlertType
    severity: AlertSeverity
    message: str
    timestamp: datetime
    value: float | None = None
    threshold: float | None = None
