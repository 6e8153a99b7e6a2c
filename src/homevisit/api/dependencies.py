"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..db.supabase import get_supabase_client
from ..persistence.service_areas import SupabaseServiceAreaStore
from ..services.service_areas.store import InMemoryServiceAreaStore, ServiceAreaStore
from ..services.travel.distance import DistanceSource, get_distance_source


@lru_cache()
def get_store() -> ServiceAreaStore:
    client = get_supabase_client()
    if client is None:
        logging.warning("Supabase not configured - service areas are kept in memory only")
        return InMemoryServiceAreaStore()
    return SupabaseServiceAreaStore(client)


def get_distance() -> DistanceSource:
    return get_distance_source()
