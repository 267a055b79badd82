"""Derived ratio metrics.

Every ratio resolves to 0 when the division is not finite (zero spend,
zero impressions), so no inf or NaN ever reaches a chart or table.
"""

import math


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    """Return numerator / denominator * scale, or 0.0 if not finite."""
    try:
        result = numerator / denominator * scale
    except ZeroDivisionError:
        return 0.0
    return result if math.isfinite(result) else 0.0


def ctr(clicks: float, impressions: float) -> float:
    """Click-through rate as a decimal (0.05 = 5%)."""
    return safe_ratio(clicks, impressions)


def conversion_rate(conversions: float, clicks: float) -> float:
    """Conversions per click as a decimal."""
    return safe_ratio(conversions, clicks)


def cpc(spend: float, clicks: float) -> float:
    """Cost per click."""
    return safe_ratio(spend, clicks)


def cpa(spend: float, conversions: float) -> float:
    """Cost per acquisition (conversion)."""
    return safe_ratio(spend, conversions)


def roas(revenue: float, spend: float) -> float:
    """Return on ad spend: revenue / spend."""
    return safe_ratio(revenue, spend)


def average(total: float, count: int) -> float:
    """Mean over count periods, treating an empty period set as one."""
    return safe_ratio(total, max(count, 1))
