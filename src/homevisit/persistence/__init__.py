"""Persistence adapters."""

from .service_areas import SupabaseServiceAreaStore, boundary_from_json, boundary_to_json

__all__ = ["SupabaseServiceAreaStore", "boundary_from_json", "boundary_to_json"]
