"""Travel surcharge request/response schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import TravelCalculationResult, TravelStatus
from .service_areas import CoordinateModel


class SurchargeRequest(BaseModel):
    destination: CoordinateModel
    origin: Optional[CoordinateModel] = Field(
        default=None,
        description="Where the visit departs from. Defaults to the configured business location.",
    )
    distance_km: Optional[float] = Field(
        default=None,
        ge=0,
        description="Known travel distance. When omitted the distance source is asked.",
    )
    service_id: Optional[str] = None


class TravelCalculationModel(BaseModel):
    distance_km: float
    travel_time_minutes: float
    surcharge: Decimal
    matched_service_area_id: Optional[str] = None
    is_within_service_area: bool
    status: TravelStatus
    is_estimate: bool

    @classmethod
    def from_domain(cls, result: TravelCalculationResult) -> "TravelCalculationModel":
        return cls(
            distance_km=result.distance_km,
            travel_time_minutes=result.travel_time_minutes,
            surcharge=result.surcharge,
            matched_service_area_id=result.matched_service_area_id,
            is_within_service_area=result.is_within_service_area,
            status=result.status,
            is_estimate=result.is_estimate,
        )
