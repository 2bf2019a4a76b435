"""Geospatial helper functions."""

from __future__ import annotations

from typing import Iterable, Sequence

from shapely.geometry import MultiPoint, shape

# (west, south), (east, north) in lon/lat, as Mapbox expects for fitBounds.
LngLatBounds = tuple[tuple[float, float], tuple[float, float]]


def geometry_bounds(geometry: dict) -> LngLatBounds:
    """Return the lon/lat bounding box of a GeoJSON geometry."""

    geom = shape(geometry)
    if geom.is_empty:
        raise ValueError("Cannot compute bounds of an empty geometry.")
    min_x, min_y, max_x, max_y = geom.bounds
    return (min_x, min_y), (max_x, max_y)


def points_bounds(points: Iterable[Sequence[float]]) -> LngLatBounds | None:
    """Bounding box of (lon, lat) points, or None when there are none."""

    coords = [(float(lon), float(lat)) for lon, lat in points]
    if not coords:
        return None
    min_x, min_y, max_x, max_y = MultiPoint(coords).bounds
    return (min_x, min_y), (max_x, max_y)
