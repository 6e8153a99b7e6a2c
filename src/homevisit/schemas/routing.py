"""Visit route request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import RouteOptimizationResult, VisitStop
from .service_areas import CoordinateModel


class VisitStopModel(BaseModel):
    booking_id: str
    address: str = ""
    coordinates: CoordinateModel
    service_duration_minutes: int = Field(..., ge=0)
    scheduled_at: datetime

    def to_domain(self) -> VisitStop:
        return VisitStop(
            booking_id=self.booking_id,
            address=self.address,
            coordinate=self.coordinates.to_domain(),
            service_duration_minutes=self.service_duration_minutes,
            scheduled_at=self.scheduled_at,
        )


class RouteOptimizationRequest(BaseModel):
    start_location: CoordinateModel
    stops: List[VisitStopModel]
    reference_time: Optional[datetime] = Field(
        default=None,
        description="Departure time from the start location. Defaults to now.",
    )
    service_id: Optional[str] = Field(
        default=None,
        description="Restrict surcharge pricing to zones offering this service.",
    )


class RouteStepModel(BaseModel):
    booking_id: str
    address: str
    order: int
    coordinates: CoordinateModel
    estimated_arrival: datetime
    travel_time_from_previous_minutes: float
    distance_from_previous_km: float
    service_duration_minutes: int


class RouteOptimizationResponse(BaseModel):
    optimized_route: List[RouteStepModel]
    total_distance_km: float
    total_duration_minutes: float
    total_surcharge: Decimal

    @classmethod
    def from_domain(cls, result: RouteOptimizationResult) -> "RouteOptimizationResponse":
        return cls(
            optimized_route=[
                RouteStepModel(
                    booking_id=step.booking_id,
                    address=step.address,
                    order=step.order,
                    coordinates=CoordinateModel.from_domain(step.coordinate),
                    estimated_arrival=step.estimated_arrival,
                    travel_time_from_previous_minutes=step.travel_time_from_previous_minutes,
                    distance_from_previous_km=step.distance_from_previous_km,
                    service_duration_minutes=step.service_duration_minutes,
                )
                for step in result.optimized_route
            ],
            total_distance_km=result.total_distance_km,
            total_duration_minutes=result.total_duration_minutes,
            total_surcharge=result.total_surcharge,
        )
