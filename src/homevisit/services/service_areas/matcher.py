"""Find the service areas that cover a point."""

from __future__ import annotations

import logging
from typing import Optional

from ...models.domain import Coordinate, ServiceArea
from ..geospatial import boundary_contains
from .store import ServiceAreaStore
from .validator import validate_coordinate

logger = logging.getLogger(__name__)


def find_matching_areas(
    store: ServiceAreaStore,
    tenant_id: str,
    point: Coordinate,
    service_id: Optional[str] = None,
) -> list[ServiceArea]:
    """Return active areas containing ``point`` in the order the store lists them.

    An empty list is a normal outcome: the point lies outside every zone.
    """

    validate_coordinate(point, label="point")

    candidates = store.list_active_areas(tenant_id, service_id)
    matches = [
        area
        for area in candidates
        if area.is_active and area.offers(service_id) and boundary_contains(area.boundary, point)
    ]
    logger.debug(
        "Point (%.6f, %.6f) matched %d of %d active areas for tenant %s",
        point.lat,
        point.lng,
        len(matches),
        len(candidates),
        tenant_id,
    )
    return matches
