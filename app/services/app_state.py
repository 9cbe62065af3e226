"""State-container operations.

Every function takes an AppState and returns a new one; inputs are never mutated.
The API layer loads the blob, applies one of these and saves the result.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

from app.core.constants import CUSTOM_MODE, DEFAULT_TDEE, MAX_HISTORY_DAYS, SCENARIO_MODES
from app.core.enums import Gender, MacroKey
from app.schemas.state import (
    AppState,
    DailyLog,
    DashboardRead,
    MacroReached,
    MacroSplit,
    UserProfile,
    WeeklyCheckIn,
    WeightPoint,
)
from app.services.metrics import (
    adjust_macro_split,
    as_utc,
    calc_bmi,
    calc_tdee,
    find_scenario_mode,
    macro_grams,
    pct_from_grams,
    prune_expired_logs,
    resolve_scenario_mode,
    status_alert,
)

logger = logging.getLogger(__name__)


def initial_state() -> AppState:
    """Fresh state for a first launch (or after a reset)."""
    return AppState(
        profile=UserProfile(
            height=175,
            weight=75,
            age=28,
            gender=Gender.MALE,
            activity_level=1.55,
            bmi=24.5,
            tdee=DEFAULT_TDEE,
            selected_mode=SCENARIO_MODES[0][0],
            macros=MacroSplit(carbs=45, fat=25, protein=30),
        ),
        daily_logs=[],
        weekly_logs=[],
    )


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


# ── Profile & budget ─────────────────────────────────────────────────────

def update_profile(state: AppState, updates: dict[str, Any]) -> AppState:
    """Merge profile fields and recompute BMI from the merged height/weight.

    The merged profile is re-validated: out-of-range or unknown fields raise ValidationError.
    """
    profile = UserProfile.model_validate({**state.profile.model_dump(), **updates})
    profile = profile.model_copy(update={"bmi": calc_bmi(profile.weight, profile.height)})
    return state.model_copy(update={"profile": profile})


def effective_tdee(profile: UserProfile, default: int = DEFAULT_TDEE) -> int:
    return profile.tdee or default


def select_scenario_mode(state: AppState, name: str) -> AppState:
    """Take the budget from a catalog mode. KeyError if the name is not in the catalog."""
    mode = find_scenario_mode(name)
    if mode is None:
        raise KeyError(name)
    return update_profile(state, {"selected_mode": mode.name, "tdee": mode.calories})


def set_manual_tdee(state: AppState, calories: int) -> AppState:
    """Set the budget directly; the mode label follows the catalog or becomes 'custom'."""
    mode = resolve_scenario_mode(calories)
    label = mode.name if mode else CUSTOM_MODE
    return update_profile(state, {"selected_mode": label, "tdee": calories})


def recalculate_tdee(state: AppState) -> AppState:
    """Replace the budget with the Mifflin-St Jeor estimate for the current profile."""
    return set_manual_tdee(state, calc_tdee(state.profile))


def adjust_macros(state: AppState, key: MacroKey, pct: int) -> AppState:
    macros = adjust_macro_split(key, pct, state.profile.macros)
    return update_profile(state, {"macros": macros})


def set_macro_grams(state: AppState, key: MacroKey, grams: int, default_tdee: int = DEFAULT_TDEE) -> AppState:
    """Like adjust_macros, but the target is given in grams of the current budget."""
    pct = pct_from_grams(key, grams, effective_tdee(state.profile, default_tdee))
    return adjust_macros(state, key, pct)


# ── Daily logs ───────────────────────────────────────────────────────────

def add_daily_log(
    state: AppState,
    weight: float,
    sleep: float,
    rhr: float,
    now: Optional[datetime] = None,
) -> tuple[AppState, DailyLog]:
    """Prepend a new check-in. The profile weight (and BMI) follow the logged weight."""
    log = DailyLog(date=_now(now), weight=weight, sleep=sleep, rhr=rhr)
    state = state.model_copy(update={"daily_logs": [log, *state.daily_logs]})
    return update_profile(state, {"weight": weight}), log


def delete_daily_log(state: AppState, log_id: UUID) -> AppState:
    remaining = [log for log in state.daily_logs if log.id != log_id]
    if len(remaining) == len(state.daily_logs):
        raise LookupError(f"Daily log {log_id} not found")
    return state.model_copy(update={"daily_logs": remaining})


def _flip(reached: MacroReached, key: MacroKey) -> MacroReached:
    match MacroKey(key):
        case MacroKey.CARBS:
            return reached.model_copy(update={"carbs": not reached.carbs})
        case MacroKey.FAT:
            return reached.model_copy(update={"fat": not reached.fat})
        case MacroKey.PROTEIN:
            return reached.model_copy(update={"protein": not reached.protein})


def toggle_macro_goal(state: AppState, key: MacroKey) -> AppState:
    """Flip one 'goal reached' flag on the newest daily log. No-op without logs."""
    if not state.daily_logs:
        return state
    latest, *rest = state.daily_logs
    latest = latest.model_copy(update={"macros_reached": _flip(latest.macros_reached, key)})
    return state.model_copy(update={"daily_logs": [latest, *rest]})


# ── Weekly check-ins ─────────────────────────────────────────────────────

def add_weekly_checkin(
    state: AppState,
    waist: float,
    left_arm: float,
    right_arm: float,
    photos: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> tuple[AppState, WeeklyCheckIn]:
    checkin = WeeklyCheckIn(
        date=_now(now),
        waist=waist,
        left_arm=left_arm,
        right_arm=right_arm,
        photos=list(photos or []),
    )
    return state.model_copy(update={"weekly_logs": [checkin, *state.weekly_logs]}), checkin


def delete_weekly_checkin(state: AppState, checkin_id: UUID) -> AppState:
    remaining = [c for c in state.weekly_logs if c.id != checkin_id]
    if len(remaining) == len(state.weekly_logs):
        raise LookupError(f"Weekly check-in {checkin_id} not found")
    return state.model_copy(update={"weekly_logs": remaining})


# ── Retention & read models ──────────────────────────────────────────────

def prune_state(
    state: AppState,
    retention_days: int = MAX_HISTORY_DAYS,
    now: Optional[datetime] = None,
) -> AppState:
    """Drop daily logs and weekly check-ins past the retention window."""
    daily = prune_expired_logs(state.daily_logs, retention_days, now)
    weekly = prune_expired_logs(state.weekly_logs, retention_days, now)
    dropped = len(state.daily_logs) - len(daily) + len(state.weekly_logs) - len(weekly)
    if not dropped:
        return state
    logger.info("Pruned %d log(s) older than %d days", dropped, retention_days)
    return state.model_copy(update={"daily_logs": daily, "weekly_logs": weekly})


def weight_trend(state: AppState, days: int, now: Optional[datetime] = None) -> list[WeightPoint]:
    """Morning weights from the last `days` days, oldest first (chart order)."""
    cutoff = as_utc(_now(now)) - timedelta(days=days)
    points = [
        WeightPoint(date=log.date, weight=log.weight)
        for log in state.daily_logs
        if as_utc(log.date) >= cutoff
    ]
    points.reverse()
    return points


def build_dashboard(state: AppState, default_tdee: int = DEFAULT_TDEE) -> DashboardRead:
    profile = state.profile
    tdee = effective_tdee(profile, default_tdee)
    latest = state.daily_logs[0] if state.daily_logs else None
    return DashboardRead(
        status=status_alert(state.daily_logs),
        selected_mode=profile.selected_mode,
        bmi=profile.bmi,
        tdee=tdee,
        macros=profile.macros,
        macro_grams=macro_grams(tdee, profile.macros),
        macros_reached=latest.macros_reached if latest else None,
    )
