"""Normalisation of raw data-provider payloads before validation."""

from typing import Any

import polars as pl

ECOMMERCE_MARKER = "roas"
GYM_MARKER = "subscriptions"


def infer_metrics_kind(metrics: dict[str, Any]) -> dict[str, Any]:
    """Add the ``kind`` discriminant to a raw metrics payload.

    An explicit ``kind`` wins. Otherwise a ``roas`` field marks e-commerce
    and a ``subscriptions`` field marks a gym account.
    """
    if "kind" in metrics:
        return metrics
    if ECOMMERCE_MARKER in metrics:
        kind = "ecommerce"
    elif GYM_MARKER in metrics:
        kind = "gym"
    else:
        kind = "base"
    return {**metrics, "kind": kind}


def sort_daily_payload(days: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Order daily rows chronologically; ISO dates sort as strings."""
    return sorted(days, key=lambda day: str(day.get("date", "")))


def normalize_snapshot_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the payload ready for ``AccountSnapshot`` validation.

    Infers metric kinds for the account and each campaign, and sorts the
    daily series. The input is not modified.
    """
    normalized = dict(payload)

    if isinstance(payload.get("metrics"), dict):
        normalized["metrics"] = infer_metrics_kind(payload["metrics"])

    campaigns = payload.get("campaigns") or []
    normalized["campaigns"] = [
        {**c, "metrics": infer_metrics_kind(c["metrics"])}
        if isinstance(c.get("metrics"), dict)
        else c
        for c in campaigns
    ]

    for key in ("dailyData", "daily_data"):
        if key in payload:
            normalized[key] = sort_daily_payload(list(payload[key]))

    return normalized


def clean_date_column(col_name: str, dtype: pl.DataType) -> pl.Expr:
    """Convert to date, handling columns polars already parsed."""
    col = pl.col(col_name)

    if dtype == pl.Date:
        return col.alias(col_name)
    elif dtype.base_type() == pl.Datetime:
        return col.dt.date().alias(col_name)
    else:
        return col.cast(pl.Utf8).str.to_date("%Y-%m-%d", strict=False).alias(col_name)


def clean_daily_frame(df: pl.DataFrame) -> pl.DataFrame:
    """Parse dates, coerce numeric types and sort a daily CSV frame."""
    exprs: list[pl.Expr] = [clean_date_column("date", df.schema["date"])]
    exprs.extend(
        pl.col(c).cast(pl.Float64).round(0).cast(pl.Int64).alias(c)
        for c in ("impressions", "clicks", "results")
    )
    exprs.append(pl.col("spend").cast(pl.Float64).alias("spend"))
    if "roas" in df.columns:
        exprs.append(pl.col("roas").cast(pl.Float64).alias("roas"))
    if "subscriptions" in df.columns:
        exprs.append(pl.col("subscriptions").cast(pl.Int64).alias("subscriptions"))

    return df.with_columns(exprs).sort("date")
