"""Service-area request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..models.domain import (
    CircleBoundary,
    Coordinate,
    PolygonBoundary,
    ServiceArea,
    ServiceAreaBoundary,
    ServiceAreaChanges,
    ServiceAreaDraft,
)


class CoordinateModel(BaseModel):
    # Range checks are done by the boundary validator so they surface as 400s.
    lat: float
    lng: float

    def to_domain(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "CoordinateModel":
        return cls(lat=coordinate.lat, lng=coordinate.lng)


class CircleBoundaryModel(BaseModel):
    type: Literal["circle"] = "circle"
    center: CoordinateModel
    radius: float = Field(..., description="Radius in kilometres.")

    def to_domain(self) -> CircleBoundary:
        return CircleBoundary(center=self.center.to_domain(), radius_km=self.radius)


class PolygonBoundaryModel(BaseModel):
    type: Literal["polygon"] = "polygon"
    coordinates: List[CoordinateModel]

    def to_domain(self) -> PolygonBoundary:
        return PolygonBoundary(vertices=tuple(point.to_domain() for point in self.coordinates))


BoundaryModel = Annotated[
    Union[CircleBoundaryModel, PolygonBoundaryModel],
    Field(discriminator="type"),
]


def boundary_model_from_domain(boundary: ServiceAreaBoundary) -> CircleBoundaryModel | PolygonBoundaryModel:
    match boundary:
        case CircleBoundary(center=center, radius_km=radius_km):
            return CircleBoundaryModel(center=CoordinateModel.from_domain(center), radius=radius_km)
        case PolygonBoundary(vertices=vertices):
            return PolygonBoundaryModel(coordinates=[CoordinateModel.from_domain(v) for v in vertices])
        case _:
            raise TypeError(f"Unsupported boundary type: {type(boundary).__name__}")


class ServiceAreaCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    boundaries: BoundaryModel
    base_travel_surcharge: Decimal = Field(..., ge=0)
    per_km_surcharge: Decimal = Field(default=Decimal("0"), ge=0)
    max_travel_distance_km: float = Field(..., gt=0)
    estimated_travel_time_minutes: int = Field(default=0, ge=0)
    available_service_ids: List[str] = Field(
        default_factory=list,
        description="Services offered in this area. Empty means every service.",
    )
    is_active: bool = True

    def to_domain(self) -> ServiceAreaDraft:
        return ServiceAreaDraft(
            name=self.name,
            description=self.description,
            boundary=self.boundaries.to_domain(),
            base_travel_surcharge=self.base_travel_surcharge,
            per_km_surcharge=self.per_km_surcharge,
            max_travel_distance_km=self.max_travel_distance_km,
            estimated_travel_time_minutes=self.estimated_travel_time_minutes,
            available_service_ids=frozenset(self.available_service_ids),
            is_active=self.is_active,
        )


class ServiceAreaUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    boundaries: Optional[BoundaryModel] = None
    base_travel_surcharge: Optional[Decimal] = Field(default=None, ge=0)
    per_km_surcharge: Optional[Decimal] = Field(default=None, ge=0)
    max_travel_distance_km: Optional[float] = Field(default=None, gt=0)
    estimated_travel_time_minutes: Optional[int] = Field(default=None, ge=0)
    available_service_ids: Optional[List[str]] = None
    is_active: Optional[bool] = None

    def to_domain(self) -> ServiceAreaChanges:
        return ServiceAreaChanges(
            name=self.name,
            description=self.description,
            boundary=self.boundaries.to_domain() if self.boundaries is not None else None,
            base_travel_surcharge=self.base_travel_surcharge,
            per_km_surcharge=self.per_km_surcharge,
            max_travel_distance_km=self.max_travel_distance_km,
            estimated_travel_time_minutes=self.estimated_travel_time_minutes,
            available_service_ids=(
                frozenset(self.available_service_ids) if self.available_service_ids is not None else None
            ),
            is_active=self.is_active,
        )


class ServiceAreaModel(BaseModel):
    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    boundaries: BoundaryModel
    base_travel_surcharge: Decimal
    per_km_surcharge: Decimal
    max_travel_distance_km: float
    estimated_travel_time_minutes: int
    available_service_ids: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, area: ServiceArea) -> "ServiceAreaModel":
        return cls(
            id=area.id,
            tenant_id=area.tenant_id,
            name=area.name,
            description=area.description,
            is_active=area.is_active,
            boundaries=boundary_model_from_domain(area.boundary),
            base_travel_surcharge=area.base_travel_surcharge,
            per_km_surcharge=area.per_km_surcharge,
            max_travel_distance_km=area.max_travel_distance_km,
            estimated_travel_time_minutes=area.estimated_travel_time_minutes,
            available_service_ids=sorted(area.available_service_ids),
            created_at=area.created_at,
            updated_at=area.updated_at,
        )


class ZoneMatchRequest(BaseModel):
    point: CoordinateModel
    service_id: Optional[str] = None


class ZoneMatchResponse(BaseModel):
    point: CoordinateModel
    areas: List[ServiceAreaModel]
