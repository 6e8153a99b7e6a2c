"""Travel surcharge pricing for home-visit bookings."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Optional, Sequence

from ...config import settings
from ...errors import DistanceSourceUnavailable
from ...models.domain import Coordinate, ServiceArea, TravelCalculationResult, TravelStatus
from ..service_areas.matcher import find_matching_areas
from ..service_areas.store import ServiceAreaStore
from ..service_areas.validator import validate_coordinate
from .distance import DistanceSource, HaversineDistanceSource

logger = logging.getLogger(__name__)

ZoneSelection = Literal["first", "cheapest"]


def select_zone(matches: Sequence[ServiceArea], selection: ZoneSelection = "first") -> ServiceArea:
    """Pick the zone that prices a point covered by several areas.

    ``first`` keeps store order. ``cheapest`` takes the lowest base surcharge
    and falls back to store order on equal bases.
    """
    if not matches:
        raise ValueError("select_zone requires at least one matching area.")
    if selection == "cheapest":
        return min(matches, key=lambda area: area.base_travel_surcharge)
    return matches[0]


def surcharge_amount(area: ServiceArea, distance_km: float, places: int | None = None) -> Decimal:
    """``base + per_km * distance`` rounded half-up to ``places`` decimals."""
    places = settings.surcharge_decimal_places if places is None else places
    amount = Decimal(area.base_travel_surcharge)
    per_km = Decimal(area.per_km_surcharge or 0)
    if per_km and distance_km > 0:
        amount += per_km * Decimal(str(distance_km))
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def calculate_surcharge(
    store: ServiceAreaStore,
    tenant_id: str,
    point: Coordinate,
    distance_km: float,
    service_id: Optional[str] = None,
    *,
    selection: ZoneSelection | None = None,
    is_estimate: bool = False,
) -> TravelCalculationResult:
    """Price travel to ``point``.

    "No zone" and "too far" are reported through ``status`` and
    ``is_within_service_area``; neither raises.
    """
    if not isinstance(distance_km, (int, float)) or not math.isfinite(distance_km) or distance_km < 0:
        raise ValueError(f"distance_km must be a finite number >= 0, got {distance_km!r}.")

    matches = find_matching_areas(store, tenant_id, point, service_id)
    if not matches:
        return TravelCalculationResult(
            distance_km=distance_km,
            travel_time_minutes=0.0,
            surcharge=Decimal("0"),
            matched_service_area_id=None,
            is_within_service_area=False,
            status=TravelStatus.NO_MATCHING_ZONE,
            is_estimate=is_estimate,
        )

    area = select_zone(matches, selection or settings.zone_selection)
    if len(matches) > 1:
        logger.debug(
            "Point matched %d areas for tenant %s; pricing with %s",
            len(matches),
            tenant_id,
            area.id,
        )

    surcharge = surcharge_amount(area, distance_km)
    within = distance_km <= area.max_travel_distance_km
    if not within:
        logger.info(
            "Distance %.2f km exceeds max %.2f km of service area %s",
            distance_km,
            area.max_travel_distance_km,
            area.id,
        )

    return TravelCalculationResult(
        distance_km=distance_km,
        travel_time_minutes=float(area.estimated_travel_time_minutes),
        surcharge=surcharge,
        matched_service_area_id=area.id,
        is_within_service_area=within,
        status=TravelStatus.WITHIN_AREA if within else TravelStatus.OUTSIDE_MAX_DISTANCE,
        is_estimate=is_estimate,
    )


def business_location() -> Optional[Coordinate]:
    if settings.business_latitude is None or settings.business_longitude is None:
        return None
    return Coordinate(lat=settings.business_latitude, lng=settings.business_longitude)


def calculate_travel(
    store: ServiceAreaStore,
    tenant_id: str,
    destination: Coordinate,
    *,
    origin: Optional[Coordinate] = None,
    service_id: Optional[str] = None,
    distance_km: Optional[float] = None,
    distance_source: Optional[DistanceSource] = None,
    selection: ZoneSelection | None = None,
) -> TravelCalculationResult:
    """Measure (when needed) and price a trip from the business to ``destination``.

    A caller-supplied ``distance_km`` wins. Otherwise the distance source is
    asked; ``FallbackDistanceSource`` degrades to straight-line distance and
    the result is flagged ``is_estimate``. A source that fails outright is
    replaced by straight-line distance as well.
    """
    validate_coordinate(destination, label="destination")
    is_estimate = False
    if distance_km is None:
        origin = origin or business_location()
        if origin is None:
            raise ValueError("origin is required when no business location is configured.")
        validate_coordinate(origin, label="origin")
        source = distance_source or HaversineDistanceSource()
        try:
            estimate = source.distance(origin, destination)
        except DistanceSourceUnavailable as exc:
            logger.warning(f"Distance source unavailable ({exc}). Using straight-line distance.")
            estimate = HaversineDistanceSource().distance(origin, destination)
        distance_km = estimate.distance_km
        is_estimate = estimate.is_estimate

    return calculate_surcharge(
        store,
        tenant_id,
        destination,
        distance_km,
        service_id,
        selection=selection,
        is_estimate=is_estimate,
    )
