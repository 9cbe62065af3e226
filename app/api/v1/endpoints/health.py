"""Health check endpoints for load balancers and monitoring."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.state_blob import StateBlob

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness. Includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok", "environment": settings.environment}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: state table reachable; reports whether a blob has been saved yet."""
    try:
        result = await db.execute(
            select(func.count()).select_from(StateBlob).where(StateBlob.key == settings.storage_key)
        )
        stored = bool(result.scalar())
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": str(e)},
        )
    return {"status": "ok", "database": "connected", "state_saved": stored}
