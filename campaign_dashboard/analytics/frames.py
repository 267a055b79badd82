"""Flatten campaign breakdown lists into Polars frames."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import polars as pl

from ..models.campaign import (
    Campaign,
    DemographicRecord,
    DeviceRecord,
    RegionalRecord,
    WeeklyRecord,
)
from .expressions import audience_split_exprs
from .models import Dimension, RowOrder

_METRICS_SCHEMA: dict[str, pl.DataType] = {
    "impressions": pl.Float64,
    "clicks": pl.Float64,
    "conversions": pl.Float64,
    "spend": pl.Float64,
    "revenue": pl.Float64,
    "traffic": pl.Float64,
}


@dataclass(frozen=True)
class DimensionSpec:
    """Where a dimension reads its records and how it groups them."""

    breakdown: str  # Campaign attribute holding the breakdown list
    key_columns: tuple[str, ...]
    first_seen_columns: tuple[str, ...] = ()
    default_order: RowOrder = RowOrder.FIRST_SEEN


DIMENSIONS: dict[Dimension, DimensionSpec] = {
    Dimension.DEVICE: DimensionSpec("device_performance", ("device",)),
    Dimension.WEEK: DimensionSpec(
        "weekly_performance",
        ("week_start",),
        first_seen_columns=("week_end",),
        default_order=RowOrder.CHRONOLOGICAL,
    ),
    Dimension.REGION: DimensionSpec(
        "regional_performance", ("region",), first_seen_columns=("country",)
    ),
    Dimension.DEMOGRAPHIC: DimensionSpec(
        "demographic_breakdown", ("age_group", "gender")
    ),
    Dimension.GENDER: DimensionSpec("demographic_breakdown", ("gender",)),
    Dimension.AGE_GROUP: DimensionSpec("demographic_breakdown", ("age_group",)),
}


def _metric_values(record: Any) -> dict[str, float]:
    return {
        "impressions": record.impressions,
        "clicks": record.clicks,
        "conversions": record.conversions,
        "spend": record.spend,
        "revenue": record.revenue,
        "traffic": 0.0,
    }


def _device_row(campaign: Campaign, record: DeviceRecord) -> dict[str, Any]:
    row = _metric_values(record)
    row["device"] = record.device
    row["traffic"] = record.percentage_of_traffic
    return row


def _weekly_row(campaign: Campaign, record: WeeklyRecord) -> dict[str, Any]:
    row = _metric_values(record)
    row["week_start"] = record.week_start
    row["week_end"] = record.week_end
    return row


def _regional_row(campaign: Campaign, record: RegionalRecord) -> dict[str, Any]:
    row = _metric_values(record)
    row["region"] = record.region
    row["country"] = record.country
    return row


def _demographic_row(campaign: Campaign, record: DemographicRecord) -> dict[str, Any]:
    # spend/revenue are filled in by audience_split_exprs
    return {
        "age_group": record.age_group,
        "gender": record.gender,
        "impressions": record.performance.impressions,
        "clicks": record.performance.clicks,
        "conversions": record.performance.conversions,
        "traffic": 0.0,
        "percentage_of_audience": record.percentage_of_audience,
        "campaign_spend": campaign.spend,
        "campaign_revenue": campaign.revenue,
    }


Extractor = Callable[[Campaign, Any], dict[str, Any]]

_EXTRACTORS: dict[str, tuple[Extractor, dict[str, pl.DataType]]] = {
    "device_performance": (_device_row, {"device": pl.Utf8, **_METRICS_SCHEMA}),
    "weekly_performance": (
        _weekly_row,
        {"week_start": pl.Utf8, "week_end": pl.Utf8, **_METRICS_SCHEMA},
    ),
    "regional_performance": (
        _regional_row,
        {"region": pl.Utf8, "country": pl.Utf8, **_METRICS_SCHEMA},
    ),
    "demographic_breakdown": (
        _demographic_row,
        {
            "age_group": pl.Utf8,
            "gender": pl.Utf8,
            "impressions": pl.Float64,
            "clicks": pl.Float64,
            "conversions": pl.Float64,
            "traffic": pl.Float64,
            "percentage_of_audience": pl.Float64,
            "campaign_spend": pl.Float64,
            "campaign_revenue": pl.Float64,
        },
    ),
}


def breakdown_frame(campaigns: Iterable[Campaign], dimension: Dimension) -> pl.DataFrame:
    """One row per breakdown record, in campaign then record order.

    Campaigns whose breakdown list is absent or empty contribute no rows.
    Demographic records get their spend and revenue split from the campaign
    totals here, before any grouping.
    """
    spec = DIMENSIONS[dimension]
    extract, schema = _EXTRACTORS[spec.breakdown]

    rows = [
        extract(campaign, record)
        for campaign in campaigns
        for record in getattr(campaign, spec.breakdown) or ()
    ]
    df = pl.DataFrame(
        {column: [row[column] for row in rows] for column in schema},
        schema=schema,
    )

    if spec.breakdown == "demographic_breakdown":
        df = df.with_columns(audience_split_exprs())
    return df
