"""Service-area administration: validate, then delegate to the store."""

from __future__ import annotations

import logging
from typing import Optional

from ...models.domain import ServiceArea, ServiceAreaChanges, ServiceAreaDraft
from .store import ServiceAreaStore
from .validator import validate_changes, validate_draft

logger = logging.getLogger(__name__)


class ServiceAreaService:
    def __init__(self, store: ServiceAreaStore) -> None:
        self.store = store

    def create(self, tenant_id: str, draft: ServiceAreaDraft) -> ServiceArea:
        validate_draft(draft)
        area = self.store.create_area(tenant_id, draft)
        logger.info("Service area '%s' (%s) created for tenant %s", area.name, area.id, tenant_id)
        return area

    def update(self, tenant_id: str, area_id: str, changes: ServiceAreaChanges) -> ServiceArea:
        validate_changes(changes)
        area = self.store.update_area(tenant_id, area_id, changes)
        logger.info(
            "Service area %s updated for tenant %s (fields: %s)",
            area_id,
            tenant_id,
            ", ".join(sorted(changes.as_dict())) or "none",
        )
        return area

    def get(self, tenant_id: str, area_id: str) -> ServiceArea:
        return self.store.get_area(tenant_id, area_id)

    def list_areas(
        self,
        tenant_id: str,
        *,
        include_inactive: bool = False,
        service_id: Optional[str] = None,
    ) -> list[ServiceArea]:
        areas = self.store.list_areas(tenant_id, include_inactive=include_inactive)
        if service_id is not None:
            areas = [area for area in areas if area.offers(service_id)]
        return areas

    def delete(self, tenant_id: str, area_id: str) -> None:
        self.store.delete_area(tenant_id, area_id)
        logger.info("Service area %s deleted for tenant %s", area_id, tenant_id)
