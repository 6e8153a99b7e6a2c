"""Travel surcharge endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.travel import SurchargeRequest, TravelCalculationModel
from ...services.service_areas.store import ServiceAreaStore
from ...services.travel.distance import DistanceSource
from ...services.travel.surcharge import calculate_travel
from ..dependencies import get_distance, get_store

router = APIRouter(prefix="/tenants/{tenant_id}/travel", tags=["travel"])


@router.post("/surcharge", response_model=TravelCalculationModel, status_code=status.HTTP_200_OK)
def surcharge(
    tenant_id: str,
    payload: SurchargeRequest,
    store: ServiceAreaStore = Depends(get_store),
    distance_source: DistanceSource = Depends(get_distance),
) -> TravelCalculationModel:
    """Price the travel leg of a home visit.

    Points outside every zone, or too far for their zone, still return 200
    with ``is_within_service_area`` false; the booking flow decides whether
    to block.
    """
    try:
        result = calculate_travel(
            store,
            tenant_id,
            payload.destination.to_domain(),
            origin=payload.origin.to_domain() if payload.origin else None,
            service_id=payload.service_id,
            distance_km=payload.distance_km,
            distance_source=distance_source,
        )
        return TravelCalculationModel.from_domain(result)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error calculating travel surcharge: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate travel surcharge: {str(exc)}",
        ) from exc
