from .account import (
    AccountConfig,
    AccountMetrics,
    AccountSnapshot,
    AccountType,
    BaseMetrics,
    Campaign,
    DailyMetrics,
    EcommerceMetrics,
    GymMetrics,
    PrimaryKPI,
    Threshold,
)

__all__ = [
    "AccountConfig",
    "AccountMetrics",
    "AccountSnapshot",
    "AccountType",
    "BaseMetrics",
    "Campaign",
    "DailyMetrics",
    "EcommerceMetrics",
    "GymMetrics",
    "PrimaryKPI",
    "Threshold",
]
