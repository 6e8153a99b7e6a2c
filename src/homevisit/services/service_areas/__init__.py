"""Service-area storage, validation and matching."""

from .matcher import find_matching_areas
from .service import ServiceAreaService
from .store import InMemoryServiceAreaStore, ServiceAreaStore
from .validator import validate_boundary, validate_coordinate

__all__ = [
    "InMemoryServiceAreaStore",
    "ServiceAreaService",
    "ServiceAreaStore",
    "find_matching_areas",
    "validate_boundary",
    "validate_coordinate",
]
