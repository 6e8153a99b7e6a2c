"""Service-area administration and zone lookup endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...errors import Conflict, NotFound
from ...schemas.service_areas import (
    ServiceAreaCreate,
    ServiceAreaModel,
    ServiceAreaUpdate,
    ZoneMatchRequest,
    ZoneMatchResponse,
)
from ...services.service_areas.matcher import find_matching_areas
from ...services.service_areas.service import ServiceAreaService
from ...services.service_areas.store import ServiceAreaStore
from ..dependencies import get_store

router = APIRouter(prefix="/tenants/{tenant_id}/service-areas", tags=["service-areas"])


@router.get("", response_model=List[ServiceAreaModel], status_code=status.HTTP_200_OK)
def list_service_areas(
    tenant_id: str,
    include_inactive: bool = Query(default=False, description="Include soft-disabled areas"),
    service_id: Optional[str] = Query(default=None, description="Only areas offering this service"),
    store: ServiceAreaStore = Depends(get_store),
) -> List[ServiceAreaModel]:
    try:
        areas = ServiceAreaService(store).list_areas(
            tenant_id, include_inactive=include_inactive, service_id=service_id
        )
        return [ServiceAreaModel.from_domain(area) for area in areas]
    except Exception as exc:
        logging.exception(f"Error listing service areas for tenant {tenant_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list service areas: {str(exc)}",
        ) from exc


@router.post("", response_model=ServiceAreaModel, status_code=status.HTTP_201_CREATED)
def create_service_area(
    tenant_id: str,
    payload: ServiceAreaCreate,
    store: ServiceAreaStore = Depends(get_store),
) -> ServiceAreaModel:
    try:
        area = ServiceAreaService(store).create(tenant_id, payload.to_domain())
        return ServiceAreaModel.from_domain(area)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error creating service area: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create service area: {str(exc)}",
        ) from exc


@router.post("/match", response_model=ZoneMatchResponse, status_code=status.HTTP_200_OK)
def match_service_areas(
    tenant_id: str,
    payload: ZoneMatchRequest,
    store: ServiceAreaStore = Depends(get_store),
) -> ZoneMatchResponse:
    """Areas whose boundary contains the point, in store order."""
    try:
        areas = find_matching_areas(store, tenant_id, payload.point.to_domain(), payload.service_id)
        return ZoneMatchResponse(
            point=payload.point,
            areas=[ServiceAreaModel.from_domain(area) for area in areas],
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error matching service areas: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to match service areas: {str(exc)}",
        ) from exc


@router.get("/{area_id}", response_model=ServiceAreaModel, status_code=status.HTTP_200_OK)
def get_service_area(
    tenant_id: str,
    area_id: str,
    store: ServiceAreaStore = Depends(get_store),
) -> ServiceAreaModel:
    try:
        return ServiceAreaModel.from_domain(ServiceAreaService(store).get(tenant_id, area_id))
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error fetching service area {area_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch service area: {str(exc)}",
        ) from exc


@router.patch("/{area_id}", response_model=ServiceAreaModel, status_code=status.HTTP_200_OK)
def update_service_area(
    tenant_id: str,
    area_id: str,
    payload: ServiceAreaUpdate,
    store: ServiceAreaStore = Depends(get_store),
) -> ServiceAreaModel:
    try:
        area = ServiceAreaService(store).update(tenant_id, area_id, payload.to_domain())
        return ServiceAreaModel.from_domain(area)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error updating service area {area_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update service area: {str(exc)}",
        ) from exc


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service_area(
    tenant_id: str,
    area_id: str,
    store: ServiceAreaStore = Depends(get_store),
) -> Response:
    try:
        ServiceAreaService(store).delete(tenant_id, area_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Conflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error deleting service area {area_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete service area: {str(exc)}",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
