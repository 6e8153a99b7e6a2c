"""Routing orchestration: price each visit, then order the day."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ...models.domain import Coordinate, RouteOptimizationResult, VisitStop
from ..geospatial import haversine_km
from ..service_areas.store import ServiceAreaStore
from ..travel.surcharge import calculate_surcharge
from .optimizer import optimize_route

logger = logging.getLogger(__name__)


def plan_visit_route(
    store: ServiceAreaStore,
    tenant_id: str,
    start: Coordinate,
    stops: Sequence[VisitStop],
    *,
    service_id: Optional[str] = None,
    reference_time: Optional[datetime] = None,
    average_speed_kmh: Optional[float] = None,
    leg_buffer_minutes: Optional[float] = None,
) -> RouteOptimizationResult:
    """Order ``stops`` and total the surcharge each booking would carry.

    Each stop is priced on its own, from ``start``, with straight-line
    distance. Stops outside every zone, or beyond their zone's maximum
    distance, add nothing to the total.
    """

    def surcharge_for(stop: VisitStop) -> Decimal:
        result = calculate_surcharge(
            store,
            tenant_id,
            stop.coordinate,
            haversine_km(start, stop.coordinate),
            service_id,
            is_estimate=True,
        )
        if not result.is_within_service_area:
            logger.info(
                "Booking %s not priced: %s",
                stop.booking_id,
                result.status.value,
            )
            return Decimal("0")
        return result.surcharge

    return optimize_route(
        start,
        stops,
        reference_time=reference_time,
        average_speed_kmh=average_speed_kmh,
        leg_buffer_minutes=leg_buffer_minutes,
        surcharge_for=surcharge_for,
    )
