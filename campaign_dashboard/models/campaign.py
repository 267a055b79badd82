"""Pydantic models for the marketing data snapshot.

The snapshot is trusted, not validated: malformed numbers become 0 and
missing breakdown lists become None. Only a document whose structure cannot
be read at all (e.g. a campaign that is not an object) fails to load.
"""

import math
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

_CURRENCY_CHARS = (",", "$", "₹", "%")


def coerce_number(value: Any) -> float:
    """Convert a raw JSON value to a finite float, falling back to 0.

    Handles numeric strings with separators and currency symbols ("1,200",
    "$45.50"). None, booleans, unparseable strings, NaN and infinities are 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        cleaned = value
        for char in _CURRENCY_CHARS:
            cleaned = cleaned.replace(char, "")
        try:
            value = float(cleaned.strip())
        except ValueError:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_label(value: Any) -> str | None:
    """Dimension values compare as exact strings; only None stays missing."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def coerce_breakdown(value: Any) -> Any:
    """Anything that is not a list is treated as an absent breakdown."""
    return value if isinstance(value, (list, tuple)) else None


Number = Annotated[float, BeforeValidator(coerce_number)]
Label = Annotated[Optional[str], BeforeValidator(coerce_label)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class PerformanceRecord(_Record):
    """Leaf metric tuple shared by device, weekly and regional breakdowns."""

    impressions: Number = 0.0
    clicks: Number = 0.0
    conversions: Number = 0.0
    spend: Number = 0.0
    revenue: Number = 0.0


class DeviceRecord(PerformanceRecord):
    device: Label = None
    ctr: Number = 0.0
    conversion_rate: Number = 0.0
    percentage_of_traffic: Number = 0.0


class WeeklyRecord(PerformanceRecord):
    week_start: Label = None  # ISO date string, kept verbatim as the key
    week_end: Label = None


class RegionalRecord(PerformanceRecord):
    region: Label = None
    country: Label = None

    # Source-reported ratios, informational only (never summed)
    ctr: Number = 0.0
    conversion_rate: Number = 0.0
    cpc: Number = 0.0
    cpa: Number = 0.0
    roas: Number = 0.0


class DemographicPerformance(_Record):
    impressions: Number = 0.0
    clicks: Number = 0.0
    conversions: Number = 0.0
    ctr: Number = 0.0
    conversion_rate: Number = 0.0


class DemographicRecord(_Record):
    """Audience segment of a campaign.

    Carries no spend or revenue: those are split from the campaign totals
    by percentage_of_audience (0-100).
    """

    age_group: Label = None
    gender: Label = None
    percentage_of_audience: Number = 0.0
    performance: DemographicPerformance = Field(default_factory=DemographicPerformance)


DeviceBreakdown = Annotated[
    Optional[tuple[DeviceRecord, ...]], BeforeValidator(coerce_breakdown)
]
WeeklyBreakdown = Annotated[
    Optional[tuple[WeeklyRecord, ...]], BeforeValidator(coerce_breakdown)
]
RegionalBreakdown = Annotated[
    Optional[tuple[RegionalRecord, ...]], BeforeValidator(coerce_breakdown)
]
DemographicBreakdown = Annotated[
    Optional[tuple[DemographicRecord, ...]], BeforeValidator(coerce_breakdown)
]


class Campaign(_Record):
    """One campaign with its per-dimension breakdown lists."""

    campaign_id: Label = Field(
        default=None, validation_alias=AliasChoices("campaign_id", "id")
    )
    campaign_name: Label = Field(
        default=None, validation_alias=AliasChoices("campaign_name", "name")
    )
    spend: Number = 0.0
    revenue: Number = 0.0

    device_performance: DeviceBreakdown = None
    weekly_performance: WeeklyBreakdown = None
    regional_performance: RegionalBreakdown = None
    demographic_breakdown: DemographicBreakdown = None


def _campaign_list(value: Any) -> Any:
    return value if isinstance(value, (list, tuple)) else ()


class MarketingData(_Record):
    """Immutable snapshot of the marketing dataset."""

    campaigns: Annotated[tuple[Campaign, ...], BeforeValidator(_campaign_list)] = ()
