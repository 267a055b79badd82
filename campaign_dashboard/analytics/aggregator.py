"""Group per-campaign breakdown records into one row per dimension value."""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

import polars as pl

from ..models.campaign import Campaign
from .expressions import (
    SORT_DATE_COLUMN,
    first_seen_field_exprs,
    summed_field_exprs,
    week_start_date_expr,
)
from .frames import DIMENSIONS, DimensionSpec, breakdown_frame
from .models import AggregatedRow, Dimension, GroupKey, RowOrder


def aggregate(
    campaigns: Iterable[Campaign],
    dimension: Dimension,
    order: RowOrder | None = None,
) -> list[AggregatedRow]:
    """Roll up every campaign's breakdown list for a dimension.

    Numeric fields are summed per key. Descriptive fields (country, week_end)
    keep the value of the first record seen for the key.

    Args:
        campaigns: Campaign snapshot; campaigns missing the breakdown are skipped
        dimension: Which breakdown list to read and which field is the key
        order: Row order. Defaults to CHRONOLOGICAL for weeks and FIRST_SEEN
            for every other dimension.

    Returns:
        One AggregatedRow per distinct key value (empty list for no records).
    """
    spec = DIMENSIONS[dimension]
    order = order or spec.default_order

    df = breakdown_frame(campaigns, dimension)
    if df.is_empty():
        return []

    grouped = df.group_by(list(spec.key_columns), maintain_order=True).agg(
        summed_field_exprs() + first_seen_field_exprs(spec.first_seen_columns)
    )

    if order is RowOrder.CHRONOLOGICAL:
        grouped = sort_chronologically(grouped, spec.key_columns[0])

    return [_to_row(dimension, spec, row) for row in grouped.to_dicts()]


def sort_chronologically(df: pl.DataFrame, date_col: str) -> pl.DataFrame:
    """Sort by a date-string column compared as dates, not as strings.

    Rows whose date cannot be parsed go last, keeping their relative order.
    """
    return (
        df.with_columns(week_start_date_expr(date_col))
        .sort(SORT_DATE_COLUMN, nulls_last=True, maintain_order=True)
        .drop(SORT_DATE_COLUMN)
    )


def parse_week_starts(values: Sequence[str | None]) -> list[date | None]:
    """Parse week-start strings exactly as sort_chronologically does.

    Unparseable or missing values come back as None.
    """
    return (
        pl.DataFrame({"week_start": list(values)}, schema={"week_start": pl.Utf8})
        .select(week_start_date_expr("week_start"))
        .to_series()
        .to_list()
    )


def _to_row(
    dimension: Dimension, spec: DimensionSpec, values: dict[str, Any]
) -> AggregatedRow:
    key: GroupKey
    if len(spec.key_columns) == 1:
        key = values[spec.key_columns[0]]
    else:
        key = tuple(values[col] for col in spec.key_columns)

    return AggregatedRow(
        dimension=dimension,
        key=key,
        impressions=values["impressions"],
        clicks=values["clicks"],
        conversions=values["conversions"],
        spend=values["spend"],
        revenue=values["revenue"],
        traffic=values["traffic"],
        country=values.get("country"),
        week_end=values.get("week_end"),
    )


# =============================================================================
# PRESENTATION ORDERING
# =============================================================================


def sort_rows(
    rows: Sequence[AggregatedRow], metric: str = "revenue", descending: bool = True
) -> list[AggregatedRow]:
    """Return rows ordered by a summed or derived metric (stable)."""
    return sorted(rows, key=lambda row: row.metric(metric), reverse=descending)


def sort_rows_by_label(rows: Sequence[AggregatedRow]) -> list[AggregatedRow]:
    """Return rows ordered alphabetically by key label."""
    return sorted(rows, key=lambda row: row.label)


def sum_metric(rows: Iterable[AggregatedRow], metric: str) -> float:
    """Total of one summed metric across rows."""
    return sum(row.metric(metric) for row in rows)
