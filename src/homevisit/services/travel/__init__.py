"""Travel distance and surcharge pricing."""

from .distance import (
    DistanceSource,
    FallbackDistanceSource,
    HaversineDistanceSource,
    OSRMDistanceSource,
    get_distance_source,
)
from .surcharge import calculate_surcharge, calculate_travel, select_zone

__all__ = [
    "DistanceSource",
    "FallbackDistanceSource",
    "HaversineDistanceSource",
    "OSRMDistanceSource",
    "calculate_surcharge",
    "calculate_travel",
    "get_distance_source",
    "select_zone",
]
