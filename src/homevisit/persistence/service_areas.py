"""Supabase persistence for service areas."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from ..config import settings
from ..errors import Conflict, InvalidBoundary, NotFound
from ..models.domain import (
    CircleBoundary,
    Coordinate,
    PolygonBoundary,
    ServiceArea,
    ServiceAreaBoundary,
    ServiceAreaChanges,
    ServiceAreaDraft,
)
from ..services.service_areas.store import ServiceAreaStore

logger = logging.getLogger(__name__)

# domain field -> serviceAreas column
_COLUMNS = {
    "name": "name",
    "description": "description",
    "is_active": "isActive",
    "boundary": "boundaries",
    "base_travel_surcharge": "baseTravelSurcharge",
    "per_km_surcharge": "perKmSurcharge",
    "max_travel_distance_km": "maxTravelDistance",
    "estimated_travel_time_minutes": "estimatedTravelTime",
    "available_service_ids": "availableServices",
}


def boundary_to_json(boundary: ServiceAreaBoundary) -> dict[str, Any]:
    match boundary:
        case CircleBoundary(center=center, radius_km=radius_km):
            return {
                "type": "circle",
                "center": {"lat": center.lat, "lng": center.lng},
                "radius": radius_km,
            }
        case PolygonBoundary(vertices=vertices):
            return {
                "type": "polygon",
                "coordinates": [{"lat": vertex.lat, "lng": vertex.lng} for vertex in vertices],
            }
        case _:
            raise InvalidBoundary(f"Unsupported boundary type: {type(boundary).__name__}.")


def boundary_from_json(payload: Any) -> ServiceAreaBoundary:
    """Decode the ``boundaries`` JSON column into a concrete boundary."""
    if not isinstance(payload, dict):
        raise InvalidBoundary("Boundary must be a JSON object.")
    kind = payload.get("type")
    try:
        if kind == "circle":
            center = payload["center"]
            return CircleBoundary(
                center=Coordinate(lat=float(center["lat"]), lng=float(center["lng"])),
                radius_km=float(payload["radius"]),
            )
        if kind == "polygon":
            return PolygonBoundary(
                vertices=tuple(
                    Coordinate(lat=float(point["lat"]), lng=float(point["lng"]))
                    for point in payload["coordinates"]
                )
            )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidBoundary(f"Malformed {kind} boundary: {exc}") from exc
    raise InvalidBoundary(f"Unknown boundary type {kind!r}.")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def row_to_area(row: dict[str, Any]) -> ServiceArea:
    per_km = row.get("perKmSurcharge")
    return ServiceArea(
        id=str(row["id"]),
        tenant_id=str(row["tenantId"]),
        name=row.get("name") or "",
        description=row.get("description"),
        is_active=bool(row.get("isActive", False)),
        boundary=boundary_from_json(row.get("boundaries")),
        base_travel_surcharge=Decimal(str(row.get("baseTravelSurcharge") or 0)),
        per_km_surcharge=Decimal(str(per_km)) if per_km is not None else Decimal("0"),
        max_travel_distance_km=float(row.get("maxTravelDistance") or 0),
        estimated_travel_time_minutes=int(row.get("estimatedTravelTime") or 0),
        available_service_ids=frozenset(row.get("availableServices") or ()),
        created_at=_parse_timestamp(row.get("createdAt")),
        updated_at=_parse_timestamp(row.get("updatedAt")),
    )


def _to_column_value(field_name: str, value: Any) -> Any:
    if field_name == "boundary":
        return boundary_to_json(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, frozenset):
        return sorted(value)
    return value


class SupabaseServiceAreaStore(ServiceAreaStore):
    """``serviceAreas`` table accessed through the supabase client.

    Areas are listed by name, matching how the admin screens order them, so
    that order is also the multi-zone tie-break order.
    """

    def __init__(self, client: Any, table: str | None = None, bookings_table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.service_areas_table
        self.bookings_table = bookings_table or settings.bookings_table

    def list_areas(self, tenant_id: str, *, include_inactive: bool = False) -> list[ServiceArea]:
        query = self.client.table(self.table).select("*").eq("tenantId", tenant_id)
        if not include_inactive:
            query = query.eq("isActive", True)
        response = query.order("name").execute()

        areas: list[ServiceArea] = []
        for row in response.data or []:
            try:
                areas.append(row_to_area(row))
            except InvalidBoundary as exc:
                # A corrupt row must not hide the tenant's other zones.
                logger.error(f"Skipping service area {row.get('id')} with unreadable boundary: {exc}")
        return areas

    def get_area(self, tenant_id: str, area_id: str) -> ServiceArea:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", area_id)
            .eq("tenantId", tenant_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            raise NotFound(f"Service area '{area_id}' not found.")
        return row_to_area(rows[0])

    def create_area(self, tenant_id: str, draft: ServiceAreaDraft) -> ServiceArea:
        record = {
            column: _to_column_value(field_name, getattr(draft, field_name))
            for field_name, column in _COLUMNS.items()
        }
        record["tenantId"] = tenant_id
        response = self.client.table(self.table).insert(record).execute()
        rows = response.data or []
        if not rows:
            raise RuntimeError("Supabase returned no row for the created service area.")
        return row_to_area(rows[0])

    def update_area(self, tenant_id: str, area_id: str, changes: ServiceAreaChanges) -> ServiceArea:
        self.get_area(tenant_id, area_id)
        record = {
            _COLUMNS[field_name]: _to_column_value(field_name, value)
            for field_name, value in changes.as_dict().items()
        }
        record["updatedAt"] = datetime.now(timezone.utc).isoformat()
        response = (
            self.client.table(self.table)
            .update(record)
            .eq("id", area_id)
            .eq("tenantId", tenant_id)
            .execute()
        )
        rows = response.data or []
        if not rows:
            raise NotFound(f"Service area '{area_id}' not found.")
        return row_to_area(rows[0])

    def delete_area(self, tenant_id: str, area_id: str) -> None:
        self.get_area(tenant_id, area_id)
        references = (
            self.client.table(self.bookings_table)
            .select("id")
            .eq(settings.bookings_service_area_column, area_id)
            .limit(1)
            .execute()
        )
        if references.data:
            raise Conflict(f"Service area '{area_id}' is referenced by existing bookings.")
        self.client.table(self.table).delete().eq("id", area_id).eq("tenantId", tenant_id).execute()
