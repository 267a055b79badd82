"""Input models for the marketing data snapshot."""

from .campaign import (
    Campaign,
    DemographicPerformance,
    DemographicRecord,
    DeviceRecord,
    MarketingData,
    PerformanceRecord,
    RegionalRecord,
    WeeklyRecord,
    coerce_label,
    coerce_number,
)

__all__ = [
    "Campaign",
    "DemographicPerformance",
    "DemographicRecord",
    "DeviceRecord",
    "MarketingData",
    "PerformanceRecord",
    "RegionalRecord",
    "WeeklyRecord",
    "coerce_label",
    "coerce_number",
]
