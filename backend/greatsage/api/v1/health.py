"""Liveness and readiness endpoints.

``/health`` answers without touching the database. ``/health/ready`` also
checks that the database responds and that the default user, which
requests without a ``userId`` act as, has been seeded.
"""

import structlog
from fastapi import APIRouter
from sqlalchemy import select, text

from greatsage.config import get_settings
from greatsage.db.session import DBSession
from greatsage.models.user import User

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Report that the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check(db: DBSession) -> dict[str, str | dict[str, str]]:
    """Report whether the API can serve data requests."""
    settings = get_settings()
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        logger.warning("readiness_database_failed", error=str(e))
        checks["database"] = f"unhealthy: {e}"

    if checks["database"] == "healthy":
        seeded = await db.scalar(select(User.id).where(User.id == settings.default_user_id))
        if seeded is None:
            logger.warning("readiness_default_user_missing", user_id=settings.default_user_id)
            checks["default_user"] = "missing"
        else:
            checks["default_user"] = "healthy"

    overall_status = "healthy" if all(v == "healthy" for v in checks.values()) else "unhealthy"

    return {
        "status": overall_status,
        "version": settings.app_version,
        "checks": checks,
    }
