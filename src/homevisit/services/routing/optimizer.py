"""Greedy nearest-neighbour ordering of a day's home visits."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import Coordinate, RouteItineraryStep, RouteOptimizationResult, VisitStop
from ..geospatial import haversine_km, travel_time_minutes
from ..service_areas.validator import validate_coordinate

logger = logging.getLogger(__name__)

SurchargeResolver = Callable[[VisitStop], Decimal]


def _next_stop_index(current: Coordinate, unvisited: list[tuple[int, VisitStop]]) -> tuple[int, float]:
    """Position in ``unvisited`` of the nearest stop and its distance.

    Exact distance ties go to the earliest ``scheduled_at``, then to input order.
    """
    best_position = 0
    best_key: tuple | None = None
    for position, (input_index, stop) in enumerate(unvisited):
        key = (haversine_km(current, stop.coordinate), stop.scheduled_at, input_index)
        if best_key is None or key < best_key:
            best_key = key
            best_position = position
    return best_position, best_key[0]


def optimize_route(
    start: Coordinate,
    stops: Sequence[VisitStop],
    *,
    reference_time: Optional[datetime] = None,
    average_speed_kmh: Optional[float] = None,
    leg_buffer_minutes: Optional[float] = None,
    surcharge_for: Optional[SurchargeResolver] = None,
) -> RouteOptimizationResult:
    """Order ``stops`` by repeatedly visiting the nearest unvisited one.

    Distance and travel time both come from straight-line distance at
    ``average_speed_kmh``, so the ordering never depends on a network call.
    The tour is not globally optimal; it is deterministic and O(n^2).

    Args:
        start: Fixed starting point (usually the business location).
        stops: Visits with resolved coordinates.
        reference_time: Departure time; defaults to now (UTC).
        average_speed_kmh: Overrides ``settings.average_speed_kmh``.
        leg_buffer_minutes: Fixed minutes added to each leg.
        surcharge_for: Prices one stop; omitted means zero surcharge.

    Returns:
        RouteOptimizationResult with one itinerary step per stop.
    """
    validate_coordinate(start, label="start location")
    for stop in stops:
        validate_coordinate(stop.coordinate, label=f"coordinate of booking {stop.booking_id}")
        if stop.service_duration_minutes < 0:
            raise ValueError(f"Booking {stop.booking_id} has a negative service duration.")

    speed = average_speed_kmh if average_speed_kmh is not None else settings.average_speed_kmh
    buffer_minutes = leg_buffer_minutes if leg_buffer_minutes is not None else settings.leg_buffer_minutes
    if not speed > 0:
        raise ValueError(f"average_speed_kmh must be positive, got {speed!r}.")
    if not buffer_minutes >= 0:
        raise ValueError(f"leg_buffer_minutes must be >= 0, got {buffer_minutes!r}.")
    clock = reference_time or datetime.now(timezone.utc)

    result = RouteOptimizationResult()
    if not stops:
        return result

    unvisited = list(enumerate(stops))
    current = start
    total_distance = 0.0
    total_duration = 0.0
    total_surcharge = Decimal("0")

    while unvisited:
        position, leg_km = _next_stop_index(current, unvisited)
        _, stop = unvisited.pop(position)

        leg_minutes = travel_time_minutes(leg_km, speed) + buffer_minutes
        clock = clock + timedelta(minutes=leg_minutes)
        result.optimized_route.append(
            RouteItineraryStep(
                booking_id=stop.booking_id,
                address=stop.address,
                order=len(result.optimized_route),
                estimated_arrival=clock,
                travel_time_from_previous_minutes=leg_minutes,
                service_duration_minutes=stop.service_duration_minutes,
                distance_from_previous_km=leg_km,
                coordinate=stop.coordinate,
            )
        )
        clock = clock + timedelta(minutes=stop.service_duration_minutes)

        total_distance += leg_km
        total_duration += leg_minutes + stop.service_duration_minutes
        if surcharge_for is not None:
            total_surcharge += surcharge_for(stop)
        current = stop.coordinate

    result.total_distance_km = total_distance
    result.total_duration_minutes = total_duration
    result.total_surcharge = total_surcharge
    logger.info(
        "Ordered %d visits: %.2f km, %.1f min",
        len(result.optimized_route),
        total_distance,
        total_duration,
    )
    return result
