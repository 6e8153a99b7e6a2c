"""Validation of service-area definitions before they are persisted."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from shapely.geometry import Polygon
from shapely.validation import explain_validity

from ...errors import InvalidBoundary, InvalidCoordinate, ValidationError
from ...models.domain import (
    CircleBoundary,
    Coordinate,
    PolygonBoundary,
    ServiceAreaBoundary,
    ServiceAreaChanges,
    ServiceAreaDraft,
)

MIN_POLYGON_VERTICES = 3


def is_valid_coordinate(coordinate: Coordinate) -> bool:
    lat, lng = coordinate.lat, coordinate.lng
    if not (isinstance(lat, (int, float)) and isinstance(lng, (int, float))):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def validate_coordinate(coordinate: Coordinate, *, label: str = "coordinate") -> None:
    if not is_valid_coordinate(coordinate):
        raise InvalidCoordinate(f"Invalid {label}: ({coordinate.lat}, {coordinate.lng}).")


def open_ring(vertices: tuple[Coordinate, ...]) -> tuple[Coordinate, ...]:
    """Drop the closing vertex if the ring repeats its first point."""
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        return vertices[:-1]
    return vertices


def _validate_circle(boundary: CircleBoundary) -> None:
    if not is_valid_coordinate(boundary.center):
        raise InvalidBoundary("Invalid center coordinates.")
    radius = boundary.radius_km
    if not isinstance(radius, (int, float)) or not math.isfinite(radius) or radius <= 0:
        raise InvalidBoundary("Circle radius must be greater than 0.")


def _validate_polygon(boundary: PolygonBoundary) -> None:
    vertices = open_ring(tuple(boundary.vertices))
    if len(vertices) < MIN_POLYGON_VERTICES:
        raise InvalidBoundary(
            f"Polygon boundaries require at least {MIN_POLYGON_VERTICES} coordinates."
        )
    for vertex in vertices:
        if not is_valid_coordinate(vertex):
            raise InvalidBoundary(f"Invalid polygon coordinates: ({vertex.lat}, {vertex.lng}).")

    shape = Polygon([(vertex.lng, vertex.lat) for vertex in vertices])
    if shape.area == 0:
        raise InvalidBoundary("Polygon boundary has zero area.")
    if not shape.is_valid:
        raise InvalidBoundary(f"Polygon boundary is not simple: {explain_validity(shape)}.")


def validate_boundary(boundary: ServiceAreaBoundary) -> None:
    """Raise ``InvalidBoundary`` unless the boundary is well formed."""
    match boundary:
        case CircleBoundary():
            _validate_circle(boundary)
        case PolygonBoundary():
            _validate_polygon(boundary)
        case _:
            raise InvalidBoundary(f"Unsupported boundary type: {type(boundary).__name__}.")


def _validate_terms(
    *,
    base_travel_surcharge: Optional[Decimal],
    per_km_surcharge: Optional[Decimal],
    max_travel_distance_km: Optional[float],
    estimated_travel_time_minutes: Optional[int],
) -> None:
    if base_travel_surcharge is not None and not base_travel_surcharge >= 0:
        raise ValidationError("base_travel_surcharge must be >= 0.")
    if per_km_surcharge is not None and not per_km_surcharge >= 0:
        raise ValidationError("per_km_surcharge must be >= 0.")
    if max_travel_distance_km is not None and not max_travel_distance_km > 0:
        raise ValidationError("max_travel_distance_km must be > 0.")
    if estimated_travel_time_minutes is not None and estimated_travel_time_minutes < 0:
        raise ValidationError("estimated_travel_time_minutes must be >= 0.")


def validate_draft(draft: ServiceAreaDraft) -> None:
    if not draft.name or not draft.name.strip():
        raise ValidationError("Service area name is required.")
    validate_boundary(draft.boundary)
    _validate_terms(
        base_travel_surcharge=draft.base_travel_surcharge,
        per_km_surcharge=draft.per_km_surcharge,
        max_travel_distance_km=draft.max_travel_distance_km,
        estimated_travel_time_minutes=draft.estimated_travel_time_minutes,
    )


def validate_changes(changes: ServiceAreaChanges) -> None:
    """Only the supplied fields are checked; an omitted boundary is skipped."""
    if changes.name is not None and not changes.name.strip():
        raise ValidationError("Service area name cannot be blank.")
    if changes.boundary is not None:
        validate_boundary(changes.boundary)
    _validate_terms(
        base_travel_surcharge=changes.base_travel_surcharge,
        per_km_surcharge=changes.per_km_surcharge,
        max_travel_distance_km=changes.max_travel_distance_km,
        estimated_travel_time_minutes=changes.estimated_travel_time_minutes,
    )
