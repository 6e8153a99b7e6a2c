"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_osrm_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.travel.osrm_client import check_health as osrm_health_check
    return osrm_health_check


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
def health_osrm() -> dict:
    """Check OSRM service health."""
    if not settings.osrm_base_url:
        return {
            "service": "osrm",
            "configured": False,
            "healthy": False,
            "message": "OSRM not configured; distances use the straight-line estimate.",
        }
    try:
        osrm_health_check = _get_osrm_health_check()
        return {"service": "osrm", "configured": True, "healthy": osrm_health_check()}
    except Exception as e:
        return {"service": "osrm", "configured": True, "healthy": False, "error": str(e)}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and service-area table status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set HOMEVISIT_SUPABASE_URL and HOMEVISIT_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table(settings.service_areas_table).select("id").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "message": f"Database connected. Table '{settings.service_areas_table}' is reachable.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
