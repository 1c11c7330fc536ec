"""Pydantic models for account snapshots supplied by the data provider.

Field names are snake_case in Python and camelCase on the wire; both are
accepted on input. CTR is expressed in percent (1.5 = 1.5%), currency values
as plain floats.
"""

import datetime as dt
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

AccountType = Literal["ecommerce", "leadgen-gym", "leadgen"]
PrimaryKPI = Literal["roas", "costPerSubscription", "costPerResult"]
CampaignStatus = Literal["ACTIVE", "PAUSED", "DELETED", "ARCHIVED"]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DailyMetrics(_WireModel):
    """One calendar day of account performance."""

    date: dt.date
    impressions: int = Field(ge=0)
    clicks: int = Field(ge=0)
    spend: float = Field(ge=0)
    results: int = Field(ge=0)
    roas: float | None = None  # e-commerce accounts only
    subscriptions: int | None = None  # gym accounts only


class _CoreMetrics(_WireModel):
    impressions: int = 0
    clicks: int = 0
    ctr: float = 0.0
    cpc: float = 0.0
    results: int = 0
    cost_per_result: float = 0.0
    amount_spent: float = 0.0


class BaseMetrics(_CoreMetrics):
    """Metrics shared by every account (plain lead-gen)."""

    kind: Literal["base"] = "base"


class EcommerceMetrics(_CoreMetrics):
    """Base metrics plus purchase/ROAS figures."""

    kind: Literal["ecommerce"] = "ecommerce"
    roas: float = 0.0
    conversion_value: float = 0.0
    purchases: int = 0
    cost_per_purchase: float = 0.0


class GymMetrics(_CoreMetrics):
    """Base metrics plus the application -> trial -> subscription funnel."""

    kind: Literal["gym"] = "gym"
    submit_application: int = 0
    start_trial: int = 0
    subscriptions: int = 0
    cost_per_subscription: float = 0.0


AccountMetrics = Annotated[
    Union[BaseMetrics, EcommerceMetrics, GymMetrics],
    Field(discriminator="kind"),
]


class Threshold(_WireModel):
    """Green/yellow cut-offs; direction is implied by the metric."""

    green: float
    yellow: float


class AccountConfig(_WireModel):
    """Static identity and classification of an ad account."""

    id: str
    name: str
    slug: str = Field(default="", validate_default=True)
    type: AccountType
    primary_kpi: PrimaryKPI = Field(alias="primaryKPI")
    metrics: list[str] = Field(default_factory=list)
    thresholds: dict[str, Threshold] | None = None
    fb_account_id: str | None = None

    @field_validator("slug", mode="after")
    @classmethod
    def _default_slug(cls, value: str, info: ValidationInfo) -> str:
        return value or info.data.get("id", "")


class Campaign(_WireModel):
    """Campaign-level aggregate; ``metrics.amount_spent`` is the campaign spend."""

    id: str
    name: str
    status: CampaignStatus
    objective: str = ""
    metrics: AccountMetrics


class AccountSnapshot(_WireModel):
    """Everything the engine needs about one account for the current period.

    ``daily_data`` must be strictly ascending by date; several formulas read
    the most recent days positionally.
    """

    config: AccountConfig
    metrics: AccountMetrics
    daily_data: list[DailyMetrics] = Field(default_factory=list)
    campaigns: list[Campaign] = Field(default_factory=list)
    today_spend: float = 0.0
    seven_day_spend: float = 0.0
    last_updated: dt.datetime | None = None
    status: Literal["active", "error", "paused"] = "active"

    @field_validator("daily_data", mode="after")
    @classmethod
    def _check_chronological(cls, days: list[DailyMetrics]) -> list[DailyMetrics]:
        for prev, curr in zip(days, days[1:]):
            if curr.date <= prev.date:
                raise ValueError(
                    f"daily_data must be strictly ascending by date "
                    f"({prev.date} followed by {curr.date})"
                )
        return days
