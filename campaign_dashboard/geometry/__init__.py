"""Chart geometry generators."""

from .bubble import (
    Bubble,
    BubbleLayout,
    GeoPoint,
    bubble_radii,
    merge_reference_points,
    project,
    project_and_size,
    rank_points,
)
from .line import (
    LinePath,
    PlotPoint,
    SeriesPoint,
    build_line_path,
    format_coordinate,
    gridline_levels,
)

__all__ = [
    "Bubble",
    "BubbleLayout",
    "GeoPoint",
    "LinePath",
    "PlotPoint",
    "SeriesPoint",
    "bubble_radii",
    "build_line_path",
    "format_coordinate",
    "gridline_levels",
    "merge_reference_points",
    "project",
    "project_and_size",
    "rank_points",
]
