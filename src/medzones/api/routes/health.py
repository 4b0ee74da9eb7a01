"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...db.supabase import get_supabase_client

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and zone table status."""
    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set MEDZONES_SUPABASE_URL and MEDZONES_SUPABASE_KEY environment variables.",
            "zones_count": 0,
        }

    try:
        response = supabase.table(settings.zones_table).select("id", count="exact").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "zones_count": response.count or 0,
            "message": f"Database connected. Found {response.count or 0} zones.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
