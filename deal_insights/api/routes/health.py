"""
Health check API routes.
"""

from fastapi import APIRouter

from deal_insights import __version__
from deal_insights.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": __version__,
        "deals_dir": str(settings.deals_dir),
        "deals_dir_exists": settings.deals_dir.exists(),
    }
