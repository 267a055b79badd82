"""Output models for aggregation."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from . import metrics

GroupKey = Union[str, tuple[Union[str, None], ...], None]


class Dimension(str, Enum):
    """Axis along which breakdown records are grouped."""

    DEVICE = "device"  # device_performance by device
    WEEK = "week"  # weekly_performance by week_start
    REGION = "region"  # regional_performance by region
    DEMOGRAPHIC = "demographic"  # demographic_breakdown by (age_group, gender)
    GENDER = "gender"  # demographic_breakdown by gender
    AGE_GROUP = "age_group"  # demographic_breakdown by age_group


class RowOrder(str, Enum):
    """Order in which aggregated rows are emitted."""

    FIRST_SEEN = "first_seen"  # insertion order of first encounter
    CHRONOLOGICAL = "chronological"  # key parsed as a date, ascending


@dataclass(frozen=True)
class AggregatedRow:
    """Summed metrics for one distinct key of a dimension.

    country and week_end are taken from the first record seen for the key;
    later records never overwrite them.
    """

    dimension: Dimension
    key: GroupKey
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0
    traffic: float = 0.0  # summed percentage_of_traffic (device only)
    country: str | None = None
    week_end: str | None = None

    @property
    def label(self) -> str:
        if isinstance(self.key, tuple):
            return " / ".join("" if part is None else part for part in self.key)
        return "" if self.key is None else self.key

    @property
    def ctr(self) -> float:
        return metrics.ctr(self.clicks, self.impressions)

    @property
    def conversion_rate(self) -> float:
        return metrics.conversion_rate(self.conversions, self.clicks)

    @property
    def cpc(self) -> float:
        return metrics.cpc(self.spend, self.clicks)

    @property
    def cpa(self) -> float:
        return metrics.cpa(self.spend, self.conversions)

    @property
    def roas(self) -> float:
        return metrics.roas(self.revenue, self.spend)

    def metric(self, name: str) -> float:
        """Look up a summed or derived metric by name."""
        if name not in METRIC_NAMES:
            raise ValueError(f"Unknown metric: {name}")
        return getattr(self, name)


METRIC_NAMES = frozenset(
    {
        "impressions",
        "clicks",
        "conversions",
        "spend",
        "revenue",
        "traffic",
        "ctr",
        "conversion_rate",
        "cpc",
        "cpa",
        "roas",
    }
)
