"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Point, Polygon

from ..models.domain import CircleBoundary, Coordinate, PolygonBoundary, ServiceAreaBoundary

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def travel_time_minutes(distance_km: float, speed_kmph: float) -> float:
    """Convert distance (km) to travel time in minutes given speed (km/h)."""
    if speed_kmph <= 0:
        raise ValueError("speed_kmph must be positive")
    if distance_km <= 0:
        return 0.0
    return distance_km / speed_kmph * 60.0


def point_in_circle(point: Coordinate, center: Coordinate, radius_km: float) -> bool:
    """Inclusive: a point exactly ``radius_km`` away is inside."""
    return haversine_km(point, center) <= radius_km


def point_in_polygon(point: Coordinate, vertices: Sequence[Coordinate]) -> bool:
    """Return True if the point lies inside or on the edge of the polygon.

    Planar test on the lng/lat grid, good enough at city scale. Vertex order may
    be clockwise or counter-clockwise and the ring may be open or closed.
    """

    polygon = Polygon([(vertex.lng, vertex.lat) for vertex in vertices])
    return polygon.covers(Point(point.lng, point.lat))


def boundary_contains(boundary: ServiceAreaBoundary, point: Coordinate) -> bool:
    match boundary:
        case CircleBoundary(center=center, radius_km=radius_km):
            return point_in_circle(point, center, radius_km)
        case PolygonBoundary(vertices=vertices):
            return point_in_polygon(point, vertices)
        case _:
            raise TypeError(f"Unsupported boundary type: {type(boundary).__name__}")
