"""Profile & budget endpoints: body data, scenario modes, calorie budget, macro split."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.state import (
    MacroAdjust,
    MacroGrams,
    MacroGramsTarget,
    ManualTdee,
    ProfileUpdate,
    ScenarioMode,
    ScenarioModeSelect,
    UserProfile,
)
from app.services.app_state import (
    adjust_macros,
    effective_tdee,
    recalculate_tdee,
    select_scenario_mode,
    set_macro_grams,
    set_manual_tdee,
    update_profile,
)
from app.services.metrics import list_scenario_modes, macro_grams
from app.services.state_store import load_state, save_state

router = APIRouter()
settings = get_settings()


@router.get("", response_model=UserProfile)
async def get_profile(db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    return state.profile


@router.patch("", response_model=UserProfile)
async def patch_profile(payload: ProfileUpdate, db: AsyncSession = Depends(get_db)):
    """Partial update of body data. BMI is recomputed; the calorie budget is left alone."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state = update_profile(state, payload.model_dump(exclude_unset=True, exclude_none=True))
    await save_state(db, settings.storage_key, state)
    return state.profile


# ── Scenario modes / calorie budget ──────────────────────────────────────

@router.get("/modes", response_model=list[ScenarioMode])
async def get_modes():
    """Preset calorie budgets."""
    return list_scenario_modes()


@router.put("/mode", response_model=UserProfile)
async def put_mode(payload: ScenarioModeSelect, db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    try:
        state = select_scenario_mode(state, payload.name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown scenario mode: {payload.name}")
    await save_state(db, settings.storage_key, state)
    return state.profile


@router.put("/tdee", response_model=UserProfile)
async def put_tdee(payload: ManualTdee, db: AsyncSession = Depends(get_db)):
    """Manual budget. Switches the mode label to 'custom' unless it matches a preset."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state = set_manual_tdee(state, payload.calories)
    await save_state(db, settings.storage_key, state)
    return state.profile


@router.post("/tdee/recalculate", response_model=UserProfile)
async def post_recalculate_tdee(db: AsyncSession = Depends(get_db)):
    """Budget from Mifflin-St Jeor BMR x activity level."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state = recalculate_tdee(state)
    await save_state(db, settings.storage_key, state)
    return state.profile


# ── Macro split ──────────────────────────────────────────────────────────

@router.put("/macros", response_model=UserProfile)
async def put_macros(payload: MacroAdjust, db: AsyncSession = Depends(get_db)):
    """Set one macro percentage; lower-priority macros absorb the difference."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state = adjust_macros(state, payload.key, payload.pct)
    await save_state(db, settings.storage_key, state)
    return state.profile


@router.put("/macros/grams", response_model=UserProfile)
async def put_macro_grams(payload: MacroGramsTarget, db: AsyncSession = Depends(get_db)):
    """Set one macro by gram target; converted to a percentage of the current budget."""
    state = await load_state(db, settings.storage_key, settings.retention_days)
    state = set_macro_grams(state, payload.key, payload.grams, settings.default_tdee)
    await save_state(db, settings.storage_key, state)
    return state.profile


@router.get("/macros/grams", response_model=MacroGrams)
async def get_macro_grams(db: AsyncSession = Depends(get_db)):
    state = await load_state(db, settings.storage_key, settings.retention_days)
    tdee = effective_tdee(state.profile, settings.default_tdee)
    return macro_grams(tdee, state.profile.macros)
