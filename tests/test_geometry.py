"""Tests for line and bubble chart geometry."""

import math

import pytest

from campaign_dashboard.analytics import AggregatedRow, Dimension
from campaign_dashboard.config import ReferencePoint
from campaign_dashboard.geometry import (
    GeoPoint,
    SeriesPoint,
    bubble_radii,
    build_line_path,
    format_coordinate,
    gridline_levels,
    merge_reference_points,
    project,
    project_and_size,
    rank_points,
)


def _series(*values: float) -> list[SeriesPoint]:
    return [SeriesPoint(label=chr(ord("A") + i), value=v) for i, v in enumerate(values)]


def _geo(city: str, value: float, x: float = 0.0, y: float = 0.0) -> GeoPoint:
    return GeoPoint(city=city, country=None, value=value, x=x, y=y)


@pytest.fixture
def reference_points() -> list[ReferencePoint]:
    return [
        ReferencePoint(city="Dubai", longitude=55.2708, latitude=25.2048, country="UAE"),
        ReferencePoint(city="Cairo", longitude=31.2357, latitude=30.0444, country="Egypt"),
        ReferencePoint(city="Paris", longitude=2.3522, latitude=48.8566, country="France"),
    ]


@pytest.fixture
def region_rows() -> list[AggregatedRow]:
    return [
        AggregatedRow(Dimension.REGION, "Dubai", spend=200, revenue=650, country="UAE"),
        AggregatedRow(Dimension.REGION, "Cairo", spend=100, revenue=200, country="Egypt"),
        AggregatedRow(Dimension.REGION, "Lagos", spend=40, revenue=60, country="Nigeria"),
    ]


# =============================================================================
# LINE GEOMETRY
# =============================================================================


class TestLinePath:
    """Tests for build_line_path()."""

    def test_polyline_and_area(self) -> None:
        path = build_line_path(_series(0, 10, 5), chart_height=100)
        assert path.path_d == "M 0 100 L 50 0 L 100 50"
        assert path.area_path_d == "M 0 100 L 50 0 L 100 50 L 100 100 L 0 100 Z"

    def test_larger_value_is_higher(self) -> None:
        path = build_line_path(_series(1, 3), chart_height=220)
        low, high = path.points
        assert high.y < low.y
        assert high.y == 0
        assert low.y == 220

    def test_flat_series_has_equal_y(self) -> None:
        """Equal values use a substitute range; no NaN anywhere."""
        path = build_line_path(_series(5, 5), chart_height=100)
        first, second = path.points
        assert first.y == second.y == 100
        assert "nan" not in path.path_d.lower()
        assert path.path_d == "M 0 100 L 100 100"

    def test_single_point_at_origin(self) -> None:
        path = build_line_path(_series(42), chart_height=80)
        assert len(path.points) == 1
        assert path.points[0].x == 0
        assert not math.isnan(path.points[0].y)
        assert path.path_d == "M 0 80"
        assert path.area_path_d == "M 0 80 L 100 80 L 0 80 Z"

    def test_custom_width(self) -> None:
        path = build_line_path(_series(1, 2, 3, 4, 5), chart_height=10, width=8)
        assert [p.x for p in path.points] == [0, 2, 4, 6, 8]

    def test_points_keep_labels_and_rows(self) -> None:
        row = AggregatedRow(Dimension.WEEK, "2024-01-01", revenue=10)
        path = build_line_path(
            [SeriesPoint("Jan 1", 10, row), SeriesPoint("Jan 8", 20)], chart_height=50
        )
        assert path.points[0].label == "Jan 1"
        assert path.points[0].row is row
        assert path.points[1].row is None
        assert path.min_value == 10
        assert path.max_value == 20

    def test_idempotent(self) -> None:
        series = _series(3.7, 1.1, 9.25, 4.0)
        assert build_line_path(series, 220) == build_line_path(series, 220)

    def test_empty_series_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one point"):
            build_line_path([], chart_height=100)


class TestLineHelpers:
    def test_format_coordinate(self) -> None:
        assert format_coordinate(0.0) == "0"
        assert format_coordinate(-0.0) == "0"
        assert format_coordinate(100.0) == "100"
        assert format_coordinate(12.5) == "12.5"
        assert format_coordinate(1 / 3) == "0.3333333333333333"

    def test_gridline_levels(self) -> None:
        assert gridline_levels(200) == [150, 100, 50]


# =============================================================================
# BUBBLE GEOMETRY
# =============================================================================


class TestProjection:
    """Tests for project()."""

    def test_corners(self) -> None:
        assert project(-180, 90) == (0, 0)
        assert project(180, -90) == (1000, 500)
        assert project(0, 0) == (500, 250)

    def test_linear_not_mercator(self) -> None:
        """Equal latitude steps give equal vertical steps."""
        _, y0 = project(0, 0, 1000, 500)
        _, y30 = project(0, 30, 1000, 500)
        _, y60 = project(0, 60, 1000, 500)
        assert (y0 - y30) == pytest.approx(y30 - y60)

    def test_custom_view_box(self) -> None:
        assert project(0, 45, view_width=360, view_height=180) == (180, 45)


class TestBubbleRadii:
    """Tests for bubble_radii() and project_and_size()."""

    def test_extremes_and_midpoint(self) -> None:
        assert list(bubble_radii([100, 550, 1000])) == [10, 35, 60]

    def test_all_equal_gives_midpoint(self) -> None:
        assert list(bubble_radii([7, 7, 7])) == [35, 35, 35]

    def test_radius_bounds(self) -> None:
        values = [3.2, 1000, 17, 0, 250.5, 999.9, 42]
        radii = bubble_radii(values)
        assert all(10 <= r <= 60 for r in radii)
        assert radii[values.index(0)] == 10
        assert radii[values.index(1000)] == 60

    def test_recomputed_per_point_set(self) -> None:
        """Adding a point rescales every other point."""
        before = project_and_size([_geo("a", 10), _geo("b", 20)])
        after = project_and_size([_geo("a", 10), _geo("b", 20), _geo("c", 30)])
        assert before.bubbles[1].radius == 60
        assert after.bubbles[1].radius == 35

    def test_layout_carries_legend_range(self) -> None:
        layout = project_and_size([_geo("a", 5, 0, 0), _geo("b", 50, 180, -90)])
        assert layout.min_value == 5
        assert layout.max_value == 50
        assert (layout.bubbles[1].svg_x, layout.bubbles[1].svg_y) == (1000, 500)

    def test_empty_point_set(self) -> None:
        layout = project_and_size([])
        assert layout.bubbles == ()
        assert layout.min_value is None

    def test_invalid_view_box_raises(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            project_and_size([_geo("a", 1)], view_width=0)


class TestReferenceUnion:
    """Tests for merge_reference_points()."""

    def test_every_reference_city_plotted(self, region_rows, reference_points) -> None:
        points, _ = merge_reference_points(region_rows, reference_points)
        assert [p.city for p in points] == ["Dubai", "Cairo", "Paris"]

    def test_matched_city_uses_row_values(self, region_rows, reference_points) -> None:
        points, _ = merge_reference_points(region_rows, reference_points)
        dubai = points[0]
        assert dubai.value == 650
        assert dubai.secondary_value == 200
        assert dubai.row is region_rows[0]
        assert (dubai.x, dubai.y) == (55.2708, 25.2048)

    def test_unmatched_city_gets_sentinel(self, region_rows, reference_points) -> None:
        points, _ = merge_reference_points(region_rows, reference_points)
        paris = points[2]
        assert paris.value == 1000
        assert paris.secondary_value == 0
        assert paris.row is None

    def test_secondary_metric_swap(self, region_rows, reference_points) -> None:
        points, _ = merge_reference_points(
            region_rows, reference_points, metric="spend", secondary_metric="revenue"
        )
        assert points[1].value == 100
        assert points[1].secondary_value == 200

    def test_union_covers_data_and_reference(self, region_rows, reference_points) -> None:
        points, unplotted = merge_reference_points(region_rows, reference_points)
        assert unplotted == ["Lagos"]
        assert {p.city for p in points} | set(unplotted) == {
            r.key for r in region_rows
        } | {ref.city for ref in reference_points}

    def test_rows_not_modified(self, region_rows, reference_points) -> None:
        snapshot = list(region_rows)
        merge_reference_points(region_rows, reference_points, sentinel_value=5)
        assert region_rows == snapshot

    def test_rank_points(self) -> None:
        ranked = rank_points([_geo("a", 1), _geo("b", 3), _geo("c", 2)])
        assert [p.city for p in ranked] == ["b", "c", "a"]
