"""Whole-state endpoints: export, import, reset."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.state import AppState
from app.services.app_state import prune_state
from app.services.state_store import load_state, reset_state, save_state

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


@router.get("", response_model=AppState)
async def export_state(db: AsyncSession = Depends(get_db)):
    return await load_state(db, settings.storage_key, settings.retention_days)


@router.put("", response_model=AppState)
async def import_state(payload: AppState, db: AsyncSession = Depends(get_db)):
    """Replace the stored blob. Logs already past retention are dropped on the way in."""
    state = prune_state(payload, settings.retention_days)
    logger.info(
        "Importing state: %d daily log(s), %d weekly check-in(s)",
        len(state.daily_logs), len(state.weekly_logs),
    )
    return await save_state(db, settings.storage_key, state)


@router.delete("", response_model=AppState)
async def delete_state(db: AsyncSession = Depends(get_db)):
    """Reset to first-launch defaults."""
    return await reset_state(db, settings.storage_key)
