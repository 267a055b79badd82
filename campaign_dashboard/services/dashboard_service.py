"""Dashboard service - derives every view model from a data snapshot."""

import logging
from collections.abc import Sequence
from typing import Any

from ..analytics import (
    AggregatedRow,
    Dimension,
    aggregate,
    average,
    parse_week_starts,
    roas,
    sort_rows,
    sort_rows_by_label,
    sum_metric,
)
from ..config import DashboardSettings, load_settings
from ..geometry import (
    SeriesPoint,
    build_line_path,
    gridline_levels,
    merge_reference_points,
    project_and_size,
    rank_points,
)
from ..models.campaign import MarketingData
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

logger = logging.getLogger(__name__)


def series_for(
    rows: Sequence[AggregatedRow], metric: str, labels: Sequence[str] | None = None
) -> tuple[SeriesPoint, ...]:
    """Chart series of one metric, one point per row, in row order."""
    labels = labels or [row.label for row in rows]
    return tuple(
        SeriesPoint(label=label, value=row.metric(metric), row=row)
        for label, row in zip(labels, rows)
    )


def week_labels(week_starts: Sequence[str | None]) -> list[str]:
    """Short axis labels for weeks ("Jan 8").

    Dates are read with the same parser as the chronological sort, so a key
    that sorts as a date is also labelled as one. Unparseable keys pass
    through unchanged; a missing key becomes "".
    """
    labels = []
    for raw, day in zip(week_starts, parse_week_starts(week_starts)):
        if day is None:
            labels.append(raw or "")
        else:
            labels.append(f"{day:%b} {day.day}")
    return labels


def week_label(week_start: str | None) -> str:
    return week_labels([week_start])[0]


class DashboardService:
    """Builds the device, weekly, region and demographic views.

    Every call recomputes from the given snapshot; nothing is cached.

    Usage:
        service = DashboardService()
        data = load_marketing_data(Path("marketing-data.json"))
        dashboard = service.build_dashboard(data)
    """

    def __init__(self, settings: DashboardSettings | None = None):
        """Initialize with dashboard settings.

        Args:
            settings: Chart constants and reference table. Defaults to the
                bundled dashboard.yaml.
        """
        self.settings = settings or load_settings()

    def build_dashboard(self, data: MarketingData) -> Dashboard:
        """Derive all four views from one snapshot."""
        logger.debug("Building dashboard for %d campaigns", len(data.campaigns))
        return Dashboard(
            device=self.device_view(data),
            weekly=self.weekly_view(data),
            region=self.region_view(data),
            demographic=self.demographic_view(data),
        )

    # =========================================================================
    # DEVICE VIEW
    # =========================================================================

    def device_view(self, data: MarketingData) -> DeviceView:
        """Per-device totals, KPIs, bar chart series and campaign tables."""
        rows = aggregate(data.campaigns, Dimension.DEVICE)

        kpis = tuple(
            DeviceKPIs(
                device=row.label,
                impressions=row.impressions,
                clicks=row.clicks,
                conversions=row.conversions,
                spend=row.spend,
                revenue=row.revenue,
                traffic=row.traffic,
                ctr_pct=row.ctr * 100,
                conversion_rate_pct=row.conversion_rate * 100,
                roas=row.roas,
            )
            for row in rows
        )

        return DeviceView(
            rows=tuple(rows),
            kpis=kpis,
            revenue_by_device=series_for(rows, "revenue"),
            spend_by_device=series_for(rows, "spend"),
            clicks_by_device=series_for(rows, "clicks"),
            conversions_by_device=series_for(rows, "conversions"),
            campaign_tables={
                row.key: self._campaign_device_rows(data, row.key) for row in rows
            },
        )

    def _campaign_device_rows(
        self, data: MarketingData, device: Any
    ) -> tuple[CampaignDeviceRow, ...]:
        """Each campaign's first record for the device, by revenue descending."""
        table = []
        for campaign in data.campaigns:
            record = next(
                (r for r in campaign.device_performance or () if r.device == device),
                None,
            )
            if record is None:
                continue
            table.append(
                CampaignDeviceRow(
                    campaign=campaign.campaign_name,
                    impressions=record.impressions,
                    clicks=record.clicks,
                    conversions=record.conversions,
                    spend=record.spend,
                    revenue=record.revenue,
                    ctr=record.ctr,
                    roas=roas(record.revenue, record.spend),
                )
            )
        return tuple(sorted(table, key=lambda r: r.revenue, reverse=True))

    # =========================================================================
    # WEEKLY VIEW
    # =========================================================================

    def weekly_view(self, data: MarketingData) -> WeeklyView:
        """Chronological weekly totals and their line charts."""
        rows = aggregate(data.campaigns, Dimension.WEEK)
        labels = week_labels([row.key for row in rows])

        total_revenue = sum_metric(rows, "revenue")
        total_spend = sum_metric(rows, "spend")

        return WeeklyView(
            rows=tuple(rows),
            revenue_chart=self._line_chart("Weekly Revenue", rows, "revenue", labels),
            spend_chart=self._line_chart("Weekly Spend", rows, "spend", labels),
            clicks_chart=self._line_chart("Weekly Clicks", rows, "clicks", labels),
            conversions_chart=self._line_chart(
                "Weekly Conversions", rows, "conversions", labels
            ),
            total_revenue=total_revenue,
            total_spend=total_spend,
            total_clicks=sum_metric(rows, "clicks"),
            total_conversions=sum_metric(rows, "conversions"),
            avg_weekly_revenue=average(total_revenue, len(rows)),
            avg_weekly_spend=average(total_spend, len(rows)),
        )

    def _line_chart(
        self,
        title: str,
        rows: Sequence[AggregatedRow],
        metric: str,
        labels: Sequence[str],
    ) -> LineChart:
        charts = self.settings.charts
        series = series_for(rows, metric, labels)
        if not series:
            return LineChart(title=title, series=(), path=None)

        chart_height = charts.line_chart_height
        return LineChart(
            title=title,
            series=series,
            path=build_line_path(series, chart_height, charts.plot_width),
            gridlines=tuple(gridline_levels(chart_height)),
        )

    # =========================================================================
    # REGION VIEW
    # =========================================================================

    def region_view(self, data: MarketingData) -> RegionView:
        """Regional totals, region table and the revenue/spend bubble maps."""
        rows = aggregate(data.campaigns, Dimension.REGION)

        total_revenue = sum_metric(rows, "revenue")
        total_spend = sum_metric(rows, "spend")

        return RegionView(
            rows=tuple(rows),
            table=tuple(sort_rows(rows, "revenue")),
            revenue_map=self._bubble_map("Revenue by City", rows, "revenue", "spend"),
            spend_map=self._bubble_map("Spend by City", rows, "spend", "revenue"),
            total_revenue=total_revenue,
            total_spend=total_spend,
            total_clicks=sum_metric(rows, "clicks"),
            total_conversions=sum_metric(rows, "conversions"),
            total_regions=len(rows),
            roas=roas(total_revenue, total_spend),
        )

    def _bubble_map(
        self,
        title: str,
        rows: Sequence[AggregatedRow],
        metric: str,
        secondary_metric: str,
    ) -> BubbleMap:
        charts = self.settings.charts
        points, unplotted = merge_reference_points(
            rows,
            self.settings.reference_points,
            metric=metric,
            secondary_metric=secondary_metric,
            sentinel_value=charts.sentinel_value,
        )
        if unplotted:
            logger.debug("Regions without coordinates, not mapped: %s", unplotted)

        layout = project_and_size(
            points,
            view_width=charts.map_width,
            view_height=charts.map_height,
            min_radius=charts.min_radius,
            max_radius=charts.max_radius,
        )
        return BubbleMap(
            title=title,
            metric=metric,
            layout=layout,
            ranked=tuple(rank_points(points)),
            unplotted=tuple(unplotted),
        )

    # =========================================================================
    # DEMOGRAPHIC VIEW
    # =========================================================================

    def demographic_view(self, data: MarketingData) -> DemographicView:
        """Audience segments, gender and age-group rollups, record tables."""
        segments = aggregate(data.campaigns, Dimension.DEMOGRAPHIC)
        genders = aggregate(data.campaigns, Dimension.GENDER)
        age_groups = sort_rows_by_label(aggregate(data.campaigns, Dimension.AGE_GROUP))

        return DemographicView(
            segments=tuple(segments),
            genders=tuple(genders),
            age_groups=tuple(age_groups),
            spend_by_age_group=series_for(age_groups, "spend"),
            revenue_by_age_group=series_for(age_groups, "revenue"),
            segment_tables={
                row.key: self._segment_rows(data, row.key) for row in genders
            },
        )

    def _segment_rows(
        self, data: MarketingData, gender: Any
    ) -> tuple[SegmentRecordRow, ...]:
        return tuple(
            SegmentRecordRow(
                campaign=campaign.campaign_name,
                age_group=record.age_group,
                impressions=record.performance.impressions,
                clicks=record.performance.clicks,
                conversions=record.performance.conversions,
                ctr=record.performance.ctr,
                conversion_rate=record.performance.conversion_rate,
            )
            for campaign in data.campaigns
            for record in campaign.demographic_breakdown or ()
            if record.gender == gender
        )

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def summary_dict(self, dashboard: Dashboard) -> dict[str, Any]:
        """Convert a Dashboard to a JSON-serializable dictionary.

        Ratios are rounded to 2 decimals, currency to 2 decimals.
        """

        def row_dict(row: AggregatedRow) -> dict[str, Any]:
            return {
                "key": list(row.key) if isinstance(row.key, tuple) else row.key,
                "impressions": row.impressions,
                "clicks": row.clicks,
                "conversions": row.conversions,
                "spend": round(row.spend, 2),
                "revenue": round(row.revenue, 2),
                "ctr_pct": round(row.ctr * 100, 2),
                "roas": round(row.roas, 2),
            }

        def chart_dict(chart: LineChart) -> dict[str, Any]:
            return {
                "title": chart.title,
                "labels": [p.label for p in chart.series],
                "path_d": chart.path.path_d if chart.path else None,
                "area_path_d": chart.path.area_path_d if chart.path else None,
            }

        def map_dict(bubble_map: BubbleMap) -> dict[str, Any]:
            return {
                "title": bubble_map.title,
                "metric": bubble_map.metric,
                "min_value": bubble_map.layout.min_value,
                "max_value": bubble_map.layout.max_value,
                "bubbles": [
                    {
                        "city": b.point.city,
                        "country": b.point.country,
                        "value": round(b.point.value, 2),
                        "secondary_value": round(b.point.secondary_value, 2),
                        "x": round(b.svg_x, 2),
                        "y": round(b.svg_y, 2),
                        "radius": round(b.radius, 2),
                    }
                    for b in bubble_map.layout.bubbles
                ],
                "unplotted": list(bubble_map.unplotted),
            }

        device = dashboard.device
        weekly = dashboard.weekly
        region = dashboard.region
        demographic = dashboard.demographic

        return {
            "device": {
                "rows": [row_dict(r) for r in device.rows],
                "kpis": [
                    {
                        "device": k.device,
                        "ctr_pct": round(k.ctr_pct, 2),
                        "conversion_rate_pct": round(k.conversion_rate_pct, 2),
                        "roas": round(k.roas, 2),
                    }
                    for k in device.kpis
                ],
            },
            "weekly": {
                "rows": [
                    {**row_dict(r), "week_end": r.week_end} for r in weekly.rows
                ],
                "charts": [
                    chart_dict(c)
                    for c in (
                        weekly.revenue_chart,
                        weekly.spend_chart,
                        weekly.clicks_chart,
                        weekly.conversions_chart,
                    )
                ],
                "total_revenue": round(weekly.total_revenue, 2),
                "total_spend": round(weekly.total_spend, 2),
                "avg_weekly_revenue": round(weekly.avg_weekly_revenue, 2),
                "avg_weekly_spend": round(weekly.avg_weekly_spend, 2),
            },
            "region": {
                "table": [
                    {**row_dict(r), "country": r.country} for r in region.table
                ],
                "maps": [map_dict(region.revenue_map), map_dict(region.spend_map)],
                "total_revenue": round(region.total_revenue, 2),
                "total_spend": round(region.total_spend, 2),
                "total_regions": region.total_regions,
                "roas": round(region.roas, 2),
            },
            "demographic": {
                "segments": [row_dict(r) for r in demographic.segments],
                "genders": [row_dict(r) for r in demographic.genders],
                "age_groups": [row_dict(r) for r in demographic.age_groups],
            },
        }
