"""Visit route endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.routing import RouteOptimizationRequest, RouteOptimizationResponse
from ...services.routing.service import plan_visit_route
from ...services.service_areas.store import ServiceAreaStore
from ..dependencies import get_store

router = APIRouter(prefix="/tenants/{tenant_id}/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(
    tenant_id: str,
    payload: RouteOptimizationRequest,
    store: ServiceAreaStore = Depends(get_store),
) -> RouteOptimizationResponse:
    try:
        result = plan_visit_route(
            store,
            tenant_id,
            payload.start_location.to_domain(),
            [stop.to_domain() for stop in payload.stops],
            service_id=payload.service_id,
            reference_time=payload.reference_time,
        )
        return RouteOptimizationResponse.from_domain(result)
    except (ValueError, TypeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        # Log the full error for debugging
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc
