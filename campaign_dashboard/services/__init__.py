"""Dashboard view services."""

from .dashboard_service import DashboardService, series_for, week_label, week_labels
from .views import (
    BubbleMap,
    CampaignDeviceRow,
    Dashboard,
    DemographicView,
    DeviceKPIs,
    DeviceView,
    LineChart,
    RegionView,
    SegmentRecordRow,
    WeeklyView,
)

__all__ = [
    "BubbleMap",
    "CampaignDeviceRow",
    "Dashboard",
    "DashboardService",
    "DemographicView",
    "DeviceKPIs",
    "DeviceView",
    "LineChart",
    "RegionView",
    "SegmentRecordRow",
    "WeeklyView",
    "series_for",
    "week_label",
    "week_labels",
]
