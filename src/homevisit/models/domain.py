"""Domain models for service areas, travel pricing and visit routes."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 point. Range checks live in the validator."""

    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class CircleBoundary:
    center: Coordinate
    radius_km: float


@dataclass(frozen=True, slots=True)
class PolygonBoundary:
    vertices: tuple[Coordinate, ...]


ServiceAreaBoundary = Union[CircleBoundary, PolygonBoundary]


@dataclass(slots=True)
class ServiceArea:
    """A tenant-owned zone with its travel pricing."""

    id: str
    tenant_id: str
    name: str
    boundary: ServiceAreaBoundary
    base_travel_surcharge: Decimal
    max_travel_distance_km: float
    per_km_surcharge: Decimal = Decimal("0")
    estimated_travel_time_minutes: int = 0
    available_service_ids: frozenset[str] = frozenset()
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def offers(self, service_id: Optional[str]) -> bool:
        """An empty service list means every service is offered."""
        if service_id is None or not self.available_service_ids:
            return True
        return service_id in self.available_service_ids


@dataclass(slots=True)
class ServiceAreaDraft:
    """Fields supplied when creating a service area."""

    name: str
    boundary: ServiceAreaBoundary
    base_travel_surcharge: Decimal
    max_travel_distance_km: float
    per_km_surcharge: Decimal = Decimal("0")
    estimated_travel_time_minutes: int = 0
    available_service_ids: frozenset[str] = frozenset()
    description: Optional[str] = None
    is_active: bool = True


@dataclass(slots=True)
class ServiceAreaChanges:
    """Partial update; ``None`` leaves the stored value untouched."""

    name: Optional[str] = None
    description: Optional[str] = None
    boundary: Optional[ServiceAreaBoundary] = None
    base_travel_surcharge: Optional[Decimal] = None
    per_km_surcharge: Optional[Decimal] = None
    max_travel_distance_km: Optional[float] = None
    estimated_travel_time_minutes: Optional[int] = None
    available_service_ids: Optional[frozenset[str]] = None
    is_active: Optional[bool] = None

    def as_dict(self) -> dict:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


class TravelStatus(str, Enum):
    WITHIN_AREA = "within_area"
    OUTSIDE_MAX_DISTANCE = "outside_max_distance"
    NO_MATCHING_ZONE = "no_matching_zone"


@dataclass(slots=True)
class TravelCalculationResult:
    distance_km: float
    travel_time_minutes: float
    surcharge: Decimal
    matched_service_area_id: Optional[str]
    is_within_service_area: bool
    status: TravelStatus
    is_estimate: bool = False


@dataclass(frozen=True, slots=True)
class DistanceEstimate:
    distance_km: float
    duration_minutes: float
    is_estimate: bool


@dataclass(frozen=True, slots=True)
class VisitStop:
    booking_id: str
    address: str
    coordinate: Coordinate
    service_duration_minutes: int
    scheduled_at: datetime


@dataclass(slots=True)
class RouteItineraryStep:
    booking_id: str
    address: str
    order: int
    estimated_arrival: datetime
    travel_time_from_previous_minutes: float
    service_duration_minutes: int
    distance_from_previous_km: float
    coordinate: Coordinate


@dataclass(slots=True)
class RouteOptimizationResult:
    optimized_route: list[RouteItineraryStep] = field(default_factory=list)
    total_distance_km: float = 0.0
    total_duration_minutes: float = 0.0
    total_surcharge: Decimal = Decimal("0")
