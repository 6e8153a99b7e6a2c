"""Visit route ordering."""

from .optimizer import optimize_route
from .service import plan_visit_route

__all__ = ["optimize_route", "plan_visit_route"]
