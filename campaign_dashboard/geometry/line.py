"""Line chart geometry: series values to plot coordinates and SVG paths."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

PLOT_WIDTH = 100.0  # normalized plot units; the renderer scales via viewBox
GRIDLINE_RATIOS = (0.25, 0.5, 0.75)


@dataclass(frozen=True)
class SeriesPoint:
    """Labelled value, optionally tied to the row it was derived from."""

    label: str
    value: float
    row: Any = None


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float
    label: str
    value: float
    row: Any = None


@dataclass(frozen=True)
class LinePath:
    """Polyline path, closed area path, and the plotted points."""

    path_d: str
    area_path_d: str
    points: tuple[PlotPoint, ...]
    chart_height: float
    width: float = PLOT_WIDTH

    @property
    def min_value(self) -> float:
        return min(p.value for p in self.points)

    @property
    def max_value(self) -> float:
        return max(p.value for p in self.points)


def format_coordinate(value: float) -> str:
    """Shortest round-trip text for a coordinate; integral values drop '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def gridline_levels(chart_height: float) -> list[float]:
    """Y positions of the dashed guide lines at 25%, 50% and 75%."""
    return [chart_height * (1 - ratio) for ratio in GRIDLINE_RATIOS]


def build_line_path(
    series: Sequence[SeriesPoint],
    chart_height: float,
    width: float = PLOT_WIDTH,
) -> LinePath:
    """Map an ordered series onto [0, width] x [0, chart_height].

    Point i sits at x = i / (n - 1) * width (x = 0 for a single point).
    Values are scaled between the series min and max, inverted so larger
    values are higher up. A flat series uses a range of 1, so every point
    lands on the baseline.

    Args:
        series: Ordered points, at least one
        chart_height: Drawable height in plot units
        width: Plot width in plot units

    Returns:
        LinePath with the "M ... L ..." polyline and the area path closed
        down to the baseline.

    Raises:
        ValueError: If series is empty.
    """
    if not series:
        raise ValueError("series must contain at least one point")

    values = np.array([p.value for p in series], dtype=float)
    n = len(values)

    min_value = values.min()
    value_range = values.max() - min_value or 1

    if n > 1:
        xs = np.arange(n) / (n - 1) * width
    else:
        xs = np.zeros(1)
    ys = chart_height - ((values - min_value) / value_range) * chart_height

    points = tuple(
        PlotPoint(
            x=float(x),
            y=float(y),
            label=p.label,
            value=p.value,
            row=p.row,
        )
        for p, x, y in zip(series, xs, ys)
    )

    path_d = " ".join(
        f"{'M' if i == 0 else 'L'} {format_coordinate(p.x)} {format_coordinate(p.y)}"
        for i, p in enumerate(points)
    )
    baseline = format_coordinate(chart_height)
    area_path_d = f"{path_d} L {format_coordinate(width)} {baseline} L 0 {baseline} Z"

    return LinePath(
        path_d=path_d,
        area_path_d=area_path_d,
        points=points,
        chart_height=chart_height,
        width=width,
    )
