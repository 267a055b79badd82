"""View models handed to the renderer."""

from dataclasses import dataclass, field

from ..analytics.models import AggregatedRow
from ..geometry.bubble import BubbleLayout, GeoPoint
from ..geometry.line import LinePath, SeriesPoint


@dataclass(frozen=True)
class LineChart:
    """Line chart geometry; path is None when the series is empty."""

    title: str
    series: tuple[SeriesPoint, ...]
    path: LinePath | None
    gridlines: tuple[float, ...] = ()


@dataclass(frozen=True)
class BubbleMap:
    """Bubble map geometry for one metric of the region view."""

    title: str
    metric: str
    layout: BubbleLayout
    ranked: tuple[GeoPoint, ...]  # city list, largest value first
    unplotted: tuple[str | None, ...] = ()  # regions without coordinates


@dataclass(frozen=True)
class DeviceKPIs:
    """Headline metrics for one device.

    Rates are percentages (2.5 = 2.5%).
    """

    device: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    traffic: float
    ctr_pct: float
    conversion_rate_pct: float
    roas: float


@dataclass(frozen=True)
class CampaignDeviceRow:
    """A single campaign's record for one device."""

    campaign: str | None
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float  # as reported by the source, percent
    roas: float


@dataclass(frozen=True)
class SegmentRecordRow:
    """A single campaign's record for one audience segment."""

    campaign: str | None
    age_group: str | None
    impressions: float
    clicks: float
    conversions: float
    ctr: float  # as reported by the source, percent
    conversion_rate: float  # as reported by the source, percent


@dataclass(frozen=True)
class DeviceView:
    rows: tuple[AggregatedRow, ...]
    kpis: tuple[DeviceKPIs, ...]
    revenue_by_device: tuple[SeriesPoint, ...]
    spend_by_device: tuple[SeriesPoint, ...]
    clicks_by_device: tuple[SeriesPoint, ...]
    conversions_by_device: tuple[SeriesPoint, ...]
    # keyed by device value; a missing device (None) is its own entry
    campaign_tables: dict[str | None, tuple[CampaignDeviceRow, ...]] = field(
        default_factory=dict
    )

    def kpis_for(self, device: str) -> DeviceKPIs | None:
        return next((k for k in self.kpis if k.device == device), None)


@dataclass(frozen=True)
class WeeklyView:
    rows: tuple[AggregatedRow, ...]
    revenue_chart: LineChart
    spend_chart: LineChart
    clicks_chart: LineChart
    conversions_chart: LineChart
    total_revenue: float
    total_spend: float
    total_clicks: float
    total_conversions: float
    avg_weekly_revenue: float
    avg_weekly_spend: float


@dataclass(frozen=True)
class RegionView:
    rows: tuple[AggregatedRow, ...]  # first-seen order, as aggregated
    table: tuple[AggregatedRow, ...]  # revenue descending
    revenue_map: BubbleMap
    spend_map: BubbleMap
    total_revenue: float
    total_spend: float
    total_clicks: float
    total_conversions: float
    total_regions: int
    roas: float


@dataclass(frozen=True)
class DemographicView:
    segments: tuple[AggregatedRow, ...]  # keyed by (age_group, gender)
    genders: tuple[AggregatedRow, ...]
    age_groups: tuple[AggregatedRow, ...]  # alphabetical
    spend_by_age_group: tuple[SeriesPoint, ...]
    revenue_by_age_group: tuple[SeriesPoint, ...]
    # keyed by gender value
    segment_tables: dict[str | None, tuple[SegmentRecordRow, ...]] = field(
        default_factory=dict
    )

    def gender(self, name: str) -> AggregatedRow | None:
        return next((row for row in self.genders if row.key == name), None)


@dataclass(frozen=True)
class Dashboard:
    """All four views derived from one snapshot."""

    device: DeviceView
    weekly: WeeklyView
    region: RegionView
    demographic: DemographicView
