"""Route group exports."""

from . import health, routes, service_areas, travel

__all__ = ["health", "routes", "service_areas", "travel"]
