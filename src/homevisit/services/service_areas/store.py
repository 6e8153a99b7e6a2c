"""Service-area storage contract and an in-process implementation."""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Optional

from ...errors import Conflict, NotFound
from ...models.domain import ServiceArea, ServiceAreaChanges, ServiceAreaDraft

logger = logging.getLogger(__name__)


class ServiceAreaStore(ABC):
    """Contract for service-area persistence backends.

    Every call is scoped by tenant. Implementations return areas in a stable
    order; the zone matcher and surcharge tie-break rely on it.
    """

    @abstractmethod
    def list_areas(self, tenant_id: str, *, include_inactive: bool = False) -> list[ServiceArea]:
        raise NotImplementedError

    def list_active_areas(self, tenant_id: str, service_id: Optional[str] = None) -> list[ServiceArea]:
        areas = self.list_areas(tenant_id, include_inactive=False)
        return [area for area in areas if area.is_active and area.offers(service_id)]

    @abstractmethod
    def get_area(self, tenant_id: str, area_id: str) -> ServiceArea:
        raise NotImplementedError

    @abstractmethod
    def create_area(self, tenant_id: str, draft: ServiceAreaDraft) -> ServiceArea:
        raise NotImplementedError

    @abstractmethod
    def update_area(self, tenant_id: str, area_id: str, changes: ServiceAreaChanges) -> ServiceArea:
        raise NotImplementedError

    @abstractmethod
    def delete_area(self, tenant_id: str, area_id: str) -> None:
        raise NotImplementedError


class InMemoryServiceAreaStore(ServiceAreaStore):
    """Dict-backed store that keeps insertion order.

    ``referenced_area_ids`` stands in for bookings that point at an area; a
    delete of one of those raises ``Conflict``.
    """

    def __init__(
        self,
        areas: Iterable[ServiceArea] = (),
        referenced_area_ids: Iterable[str] = (),
    ) -> None:
        self._areas: dict[str, ServiceArea] = {area.id: area for area in areas}
        self.referenced_area_ids: set[str] = set(referenced_area_ids)
        self._lock = threading.Lock()

    def list_areas(self, tenant_id: str, *, include_inactive: bool = False) -> list[ServiceArea]:
        with self._lock:
            return [
                area
                for area in self._areas.values()
                if area.tenant_id == tenant_id and (include_inactive or area.is_active)
            ]

    def get_area(self, tenant_id: str, area_id: str) -> ServiceArea:
        with self._lock:
            area = self._areas.get(area_id)
        if area is None or area.tenant_id != tenant_id:
            raise NotFound(f"Service area '{area_id}' not found.")
        return area

    def create_area(self, tenant_id: str, draft: ServiceAreaDraft) -> ServiceArea:
        now = datetime.now(timezone.utc)
        area = ServiceArea(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=draft.name,
            description=draft.description,
            boundary=draft.boundary,
            base_travel_surcharge=draft.base_travel_surcharge,
            per_km_surcharge=draft.per_km_surcharge,
            max_travel_distance_km=draft.max_travel_distance_km,
            estimated_travel_time_minutes=draft.estimated_travel_time_minutes,
            available_service_ids=frozenset(draft.available_service_ids),
            is_active=draft.is_active,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._areas[area.id] = area
        logger.debug("Created service area %s for tenant %s", area.id, tenant_id)
        return area

    def update_area(self, tenant_id: str, area_id: str, changes: ServiceAreaChanges) -> ServiceArea:
        current = self.get_area(tenant_id, area_id)
        values = changes.as_dict()
        if "available_service_ids" in values:
            values["available_service_ids"] = frozenset(values["available_service_ids"])
        updated = replace(current, **values, updated_at=datetime.now(timezone.utc))
        with self._lock:
            self._areas[area_id] = updated
        return updated

    def delete_area(self, tenant_id: str, area_id: str) -> None:
        self.get_area(tenant_id, area_id)
        if area_id in self.referenced_area_ids:
            raise Conflict(f"Service area '{area_id}' is referenced by existing bookings.")
        with self._lock:
            self._areas.pop(area_id, None)
