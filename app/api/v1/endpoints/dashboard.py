"""Dashboard endpoints: health status, today's macro budget, weight trend."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.constants import WEIGHT_TREND_RANGES
from app.db.session import get_db
from app.schemas.state import DashboardRead, StatusAlert, WeightPoint
from app.services.app_state import build_dashboard, weight_trend
from app.services.metrics import status_alert
from app.services.state_store import load_state

router = APIRouter()
settings = get_settings()


@router.get("", response_model=DashboardRead)
async def get_dashboard(db: AsyncSession = Depends(get_db)):
    """Status alert, budget and gram targets, and today's goal flags in one call."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return build_dashboard(state, settings.default_tdee)


@router.get("/status", response_model=StatusAlert)
async def get_status(db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return status_alert(state.daily_logs)


@router.get("/weight-trend", response_model=list[WeightPoint])
async def get_weight_trend(
    days: int = Query(7, description="Range in days (7 or 30)"),
    db: AsyncSession = Depends(get_db),
):
    """Morning weights for the chart, oldest first."""
    if days not in WEIGHT_TREND_RANGES:
        raise HTTPException(
            status_code=400,
            detail=f"days must be one of {', '.join(str(d) for d in WEIGHT_TREND_RANGES)}",
        )
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return weight_trend(state, days)
