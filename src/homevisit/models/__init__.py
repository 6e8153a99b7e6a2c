"""Domain model exports."""

from .domain import (
    CircleBoundary,
    Coordinate,
    DistanceEstimate,
    PolygonBoundary,
    RouteItineraryStep,
    RouteOptimizationResult,
    ServiceArea,
    ServiceAreaBoundary,
    ServiceAreaChanges,
    ServiceAreaDraft,
    TravelCalculationResult,
    TravelStatus,
    VisitStop,
)

__all__ = [
    "CircleBoundary",
    "Coordinate",
    "DistanceEstimate",
    "PolygonBoundary",
    "RouteItineraryStep",
    "RouteOptimizationResult",
    "ServiceArea",
    "ServiceAreaBoundary",
    "ServiceAreaChanges",
    "ServiceAreaDraft",
    "TravelCalculationResult",
    "TravelStatus",
    "VisitStop",
]
