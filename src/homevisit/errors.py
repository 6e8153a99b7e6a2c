"""Exception types raised by the home-visit logistics engine."""


class HomeVisitError(Exception):
    """Base class for engine errors."""


class ValidationError(HomeVisitError, ValueError):
    """Structurally invalid input."""


class InvalidCoordinate(ValidationError):
    """Latitude or longitude out of range or not a finite number."""


class InvalidBoundary(ValidationError):
    """Malformed circle or polygon service-area definition."""


class NotFound(HomeVisitError, LookupError):
    """Referenced tenant, service area or service does not exist."""


class Conflict(HomeVisitError):
    """Operation refused because other records still reference the target."""


class DistanceSourceUnavailable(HomeVisitError, ConnectionError):
    """The external distance provider could not answer."""
