"""Load and save the AppState blob.

The whole state lives in one row under the configured storage key and is
rewritten wholesale on every change. Expired logs are pruned on every load.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import MAX_HISTORY_DAYS
from app.models.state_blob import StateBlob
from app.schemas.state import AppState
from app.services.app_state import initial_state, prune_state

logger = logging.getLogger(__name__)


async def _get_row(db: AsyncSession, key: str) -> StateBlob | None:
    result = await db.execute(select(StateBlob).where(StateBlob.key == key))
    return result.scalar_one_or_none()


async def load_state(
    db: AsyncSession,
    key: str,
    retention_days: int = MAX_HISTORY_DAYS,
) -> AppState:
    """Stored state with expired logs dropped; initial state when nothing usable is stored."""
    row = await _get_row(db, key)
    if row is None:
        return initial_state()
    try:
        state = AppState.model_validate_json(row.data)
    except ValidationError:
        logger.exception("Stored state under %r is unreadable; falling back to defaults", key)
        return initial_state()
    return prune_state(state, retention_days)


async def save_state(db: AsyncSession, key: str, state: AppState) -> AppState:
    """Upsert the blob. Session is committed by get_db after the request."""
    data = state.model_dump_json()
    row = await _get_row(db, key)
    if row:
        row.data = data
    else:
        db.add(StateBlob(key=key, data=data))
    await db.flush()
    return state


async def reset_state(db: AsyncSession, key: str) -> AppState:
    return await save_state(db, key, initial_state())
