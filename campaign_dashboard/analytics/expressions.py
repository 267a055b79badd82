"""Reusable Polars expressions for breakdown aggregation."""

import polars as pl

SUMMED_FIELDS = ("impressions", "clicks", "conversions", "spend", "revenue", "traffic")

SORT_DATE_COLUMN = "_sort_date"


# =============================================================================
# ACCUMULATION
# =============================================================================


def summed_field_exprs(fields: tuple[str, ...] = SUMMED_FIELDS) -> list[pl.Expr]:
    """Insert-or-sum: numeric fields add up across every record of a key."""
    return [pl.col(field).sum().alias(field) for field in fields]


def first_seen_field_exprs(fields: tuple[str, ...]) -> list[pl.Expr]:
    """Insert-or-ignore: descriptive fields keep the first record's value.

    Must be used with group_by(maintain_order=True) so "first" means the
    first record in encounter order.
    """
    return [pl.col(field).first().alias(field) for field in fields]


# =============================================================================
# PER-RECORD DERIVATIONS
# =============================================================================


def audience_split_exprs() -> list[pl.Expr]:
    """Split campaign spend and revenue by a segment's share of the audience.

    spend = campaign_spend * (percentage_of_audience / 100), per record.
    """
    ratio = pl.col("percentage_of_audience") / 100
    return [
        (pl.col("campaign_spend") * ratio).alias("spend"),
        (pl.col("campaign_revenue") * ratio).alias("revenue"),
    ]


def week_start_date_expr(col: str = "week_start") -> pl.Expr:
    """Parse an ISO week-start string (date or datetime) into a Date.

    Unparseable values become null.
    """
    return (
        pl.col(col)
        .str.slice(0, 10)
        .str.to_date("%Y-%m-%d", strict=False)
        .alias(SORT_DATE_COLUMN)
    )
