"""Aggregation of campaign breakdowns into grouped rows."""

from .aggregator import (
    aggregate,
    parse_week_starts,
    sort_chronologically,
    sort_rows,
    sort_rows_by_label,
    sum_metric,
)
from .frames import DIMENSIONS, DimensionSpec, breakdown_frame
from .metrics import average, conversion_rate, cpa, cpc, ctr, roas, safe_ratio
from .models import METRIC_NAMES, AggregatedRow, Dimension, GroupKey, RowOrder

__all__ = [
    "AggregatedRow",
    "DIMENSIONS",
    "Dimension",
    "DimensionSpec",
    "GroupKey",
    "METRIC_NAMES",
    "RowOrder",
    "aggregate",
    "average",
    "breakdown_frame",
    "parse_week_starts",
    "conversion_rate",
    "cpa",
    "cpc",
    "ctr",
    "roas",
    "safe_ratio",
    "sort_chronologically",
    "sort_rows",
    "sort_rows_by_label",
    "sum_metric",
]
