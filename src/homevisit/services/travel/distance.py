"""Distance sources: road distance from OSRM, straight-line fallback."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from ...config import settings
from ...errors import DistanceSourceUnavailable
from ...models.domain import Coordinate, DistanceEstimate
from ..geospatial import haversine_km, travel_time_minutes
from .osrm_client import OSRMClient

logger = logging.getLogger(__name__)


class DistanceSource(Protocol):
    def distance(self, origin: Coordinate, destination: Coordinate) -> DistanceEstimate:
        ...


class HaversineDistanceSource:
    """Great-circle distance at an assumed average speed.

    Under-estimates real road distance, so results are always flagged as
    estimates.
    """

    def __init__(self, average_speed_kmh: float | None = None) -> None:
        self.average_speed_kmh = average_speed_kmh or settings.average_speed_kmh

    def distance(self, origin: Coordinate, destination: Coordinate) -> DistanceEstimate:
        distance_km = haversine_km(origin, destination)
        return DistanceEstimate(
            distance_km=distance_km,
            duration_minutes=travel_time_minutes(distance_km, self.average_speed_kmh),
            is_estimate=True,
        )


class OSRMDistanceSource:
    def __init__(self, client: OSRMClient | None = None) -> None:
        self.client = client or OSRMClient()

    def distance(self, origin: Coordinate, destination: Coordinate) -> DistanceEstimate:
        try:
            data = self.client.route([origin, destination])
            best = data["routes"][0]
            distance_m = float(best["distance"])
            duration_s = float(best["duration"])
        except (ConnectionError, httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as exc:
            raise DistanceSourceUnavailable(f"OSRM could not route: {exc}") from exc
        return DistanceEstimate(
            distance_km=distance_m / 1000.0,
            duration_minutes=duration_s / 60.0,
            is_estimate=False,
        )


class FallbackDistanceSource:
    """Ask ``primary`` first and degrade to ``fallback`` when it is down."""

    def __init__(self, primary: DistanceSource, fallback: DistanceSource) -> None:
        self.primary = primary
        self.fallback = fallback

    def distance(self, origin: Coordinate, destination: Coordinate) -> DistanceEstimate:
        try:
            return self.primary.distance(origin, destination)
        except DistanceSourceUnavailable as exc:
            logger.warning(f"Distance source unavailable ({exc}). Using straight-line fallback.")
            return self.fallback.distance(origin, destination)


def get_distance_source(base_url: Optional[str] = None) -> DistanceSource:
    haversine = HaversineDistanceSource()
    base = base_url or settings.osrm_base_url
    if not base:
        return haversine
    return FallbackDistanceSource(OSRMDistanceSource(OSRMClient(base_url=base)), haversine)
