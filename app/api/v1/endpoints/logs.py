"""Log endpoints: daily biometrics check-ins and weekly circumference check-ins."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.enums import MacroKey
from app.db.session import get_db
from app.schemas.state import DailyLog, DailyLogCreate, WeeklyCheckIn, WeeklyCheckInCreate
from app.services.app_state import (
    add_daily_log,
    add_weekly_checkin,
    delete_daily_log,
    delete_weekly_checkin,
    toggle_macro_goal,
)
from app.services.state_store import load_state, save_state

router = APIRouter()
settings = get_settings()


# ── Daily ────────────────────────────────────────────────────────────────

@router.get("/daily", response_model=list[DailyLog])
async def list_daily_logs(db: AsyncSession = Depends(get_db)):
    """Daily logs within the retention window, newest first."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return state.daily_logs


@router.post("/daily", response_model=DailyLog, status_code=201)
async def create_daily_log(payload: DailyLogCreate, db: AsyncSession = Depends(get_db)):
    """Morning check-in. Also moves the profile weight (and BMI) to the logged weight."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state, log = add_daily_log(state, payload.weight, payload.sleep, payload.rhr)
    await save_state(db, settings.storage_key, state)
    return log


@router.delete("/daily/{log_id}", status_code=204)
async def remove_daily_log(log_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    try:
        state = delete_daily_log(state, log_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Daily log not found")
    await save_state(db, settings.storage_key, state)


@router.post("/daily/latest/macros/{key}/toggle", response_model=DailyLog)
async def toggle_latest_macro_goal(key: MacroKey, db: AsyncSession = Depends(get_db)):
    """Flip today's 'goal reached' flag for one macro."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    if not state.daily_logs:
        raise HTTPException(status_code=409, detail="Log today's check-in first.")
    state = toggle_macro_goal(state, key)
    await save_state(db, settings.storage_key, state)
    return state.daily_logs[0]


# ── Weekly ───────────────────────────────────────────────────────────────

@router.get("/weekly", response_model=list[WeeklyCheckIn])
async def list_weekly_checkins(db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return state.weekly_logs


@router.post("/weekly", response_model=WeeklyCheckIn, status_code=201)
async def create_weekly_checkin(payload: WeeklyCheckInCreate, db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state, checkin = add_weekly_checkin(
        state,
        waist=payload.waist,
        left_arm=payload.left_arm,
        right_arm=payload.right_arm,
        photos=payload.photos,
    )
    await save_state(db, settings.storage_key, state)
    return checkin


@router.delete("/weekly/{checkin_id}", status_code=204)
async def remove_weekly_checkin(checkin_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    try:
        state = delete_weekly_checkin(state, checkin_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Weekly check-in not found")
    await save_state(db, settings.storage_key, state)
