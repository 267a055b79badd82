"""Bubble map geometry: longitude/latitude to view coordinates, value to radius."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..analytics.models import AggregatedRow
from ..config.settings import ReferencePoint

VIEW_WIDTH = 1000.0
VIEW_HEIGHT = 500.0
MIN_RADIUS = 10.0
MAX_RADIUS = 60.0
SENTINEL_VALUE = 1000.0


@dataclass(frozen=True)
class GeoPoint:
    """Value placed at a longitude (x) / latitude (y)."""

    city: str
    country: str | None
    value: float
    x: float  # longitude
    y: float  # latitude
    secondary_value: float = 0.0
    row: Any = None  # None for reference cities without data


@dataclass(frozen=True)
class Bubble:
    point: GeoPoint
    svg_x: float
    svg_y: float
    radius: float


@dataclass(frozen=True)
class BubbleLayout:
    """Projected bubbles plus the value range used for sizing (legend)."""

    bubbles: tuple[Bubble, ...]
    min_value: float | None
    max_value: float | None


def project(
    longitude: float,
    latitude: float,
    view_width: float = VIEW_WIDTH,
    view_height: float = VIEW_HEIGHT,
) -> tuple[float, float]:
    """Linear equirectangular mapping, north up.

    Longitude -180..180 maps to 0..view_width, latitude 90..-90 maps to
    0..view_height. Intentionally not Mercator.
    """
    svg_x = (longitude + 180) / 360 * view_width
    svg_y = (90 - latitude) / 180 * view_height
    return svg_x, svg_y


def bubble_radii(
    values: Sequence[float],
    min_radius: float = MIN_RADIUS,
    max_radius: float = MAX_RADIUS,
) -> np.ndarray:
    """Scale values linearly onto [min_radius, max_radius].

    The extremes come from the given values only. If they are all equal,
    every radius is the midpoint.
    """
    arr = np.array(values, dtype=float)
    if arr.size == 0:
        return arr

    low, high = arr.min(), arr.max()
    if high == low:
        return np.full_like(arr, (min_radius + max_radius) / 2)

    normalized = (arr - low) / (high - low)
    return min_radius + normalized * (max_radius - min_radius)


def project_and_size(
    points: Sequence[GeoPoint],
    view_width: float = VIEW_WIDTH,
    view_height: float = VIEW_HEIGHT,
    min_radius: float = MIN_RADIUS,
    max_radius: float = MAX_RADIUS,
) -> BubbleLayout:
    """Project every point and size it against the current point set.

    Args:
        points: Geo-tagged values; an empty set yields an empty layout
        view_width: Width of the map view box
        view_height: Height of the map view box
        min_radius: Radius of the smallest value
        max_radius: Radius of the largest value

    Returns:
        BubbleLayout in input order with the min/max values used.

    Raises:
        ValueError: If the view box is not positive.
    """
    if view_width <= 0 or view_height <= 0:
        raise ValueError("view_width and view_height must be positive")
    if not points:
        return BubbleLayout(bubbles=(), min_value=None, max_value=None)

    radii = bubble_radii([p.value for p in points], min_radius, max_radius)

    bubbles = []
    for point, radius in zip(points, radii):
        svg_x, svg_y = project(point.x, point.y, view_width, view_height)
        bubbles.append(
            Bubble(point=point, svg_x=svg_x, svg_y=svg_y, radius=float(radius))
        )

    values = [p.value for p in points]
    return BubbleLayout(
        bubbles=tuple(bubbles),
        min_value=min(values),
        max_value=max(values),
    )


def merge_reference_points(
    rows: Iterable[AggregatedRow],
    reference_points: Iterable[ReferencePoint],
    metric: str = "revenue",
    secondary_metric: str = "spend",
    sentinel_value: float = SENTINEL_VALUE,
) -> tuple[list[GeoPoint], list[str | None]]:
    """Union aggregated region rows with the fixed reference cities.

    Every reference city is plotted, in table order. A city with a matching
    row uses that row's metric; one without gets sentinel_value so it shows
    as a small bubble. Rows are matched by exact key equality and never
    modified.

    Returns:
        (points, unplotted): unplotted lists the keys of rows that have no
        reference coordinates and so cannot be placed on the map.
    """
    rows_by_key = {row.key: row for row in rows}
    references = list(reference_points)

    points = []
    for ref in references:
        row = rows_by_key.get(ref.city)
        if row is None:
            value, secondary = sentinel_value, 0.0
        else:
            value, secondary = row.metric(metric), row.metric(secondary_metric)
        points.append(
            GeoPoint(
                city=ref.city,
                country=ref.country,
                value=value,
                x=ref.longitude,
                y=ref.latitude,
                secondary_value=secondary,
                row=row,
            )
        )

    located = {ref.city for ref in references}
    unplotted = [key for key in rows_by_key if key not in located]
    return points, unplotted


def rank_points(points: Iterable[GeoPoint]) -> list[GeoPoint]:
    """Points by value, largest first (city list order)."""
    return sorted(points, key=lambda p: p.value, reverse=True)
