"""Metrics & budget engine.

Pure functions over the profile / log model: BMI, BMR, TDEE, macro budget,
macro re-balancing, and the resting-heart-rate status alert.
Nothing here touches storage; callers apply the returned values to their own state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, TypeVar

from app.core.constants import (
    MACRO_CALORIES,
    MAX_HISTORY_DAYS,
    RHR_MODERATE_RATIO,
    RHR_SEVERE_RATIO,
    SCENARIO_MODES,
    SLEEP_DEFICIT_HOURS,
)
from app.core.enums import Gender, MacroKey, WarningLevel
from app.schemas.state import DailyLog, MacroGrams, MacroSplit, ScenarioMode, StatusAlert, UserProfile

logger = logging.getLogger(__name__)

MSG_FIRST_CHECK_IN = "Collecting data: please complete your first check-in."
MSG_SLEEP_DEFICIT = "Severe sleep deficit: stop training today and rest."
MSG_RHR_SEVERE = "Resting heart rate severely elevated: rest today or drastically reduce intensity."
MSG_RHR_MODERATE = "Resting heart rate elevated: halve today's training intensity."
MSG_NORMAL = "Good to train: all indicators are within normal range."


def _round_half_up(value: float) -> int:
    """Round .5 upwards (built-in round() goes to the even neighbour)."""
    return math.floor(value + 0.5)


# ── Body metrics ─────────────────────────────────────────────────────────

def calc_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> float:
    """BMI = kg / m^2, one decimal (ties round up). 0 when either input is missing or zero."""
    if not height_cm or not weight_kg:
        return 0.0
    height_m = height_cm / 100
    return math.floor(weight_kg / (height_m * height_m) * 10 + 0.5) / 10


def calc_bmr(profile: UserProfile) -> float:
    """Mifflin-St Jeor BMR equation (kcal/day). Not floored; tiny/old profiles go negative."""
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    return base + 5 if profile.gender == Gender.MALE else base - 161


def calc_tdee(profile: UserProfile) -> int:
    """BMR scaled by the activity multiplier, rounded to whole kcal."""
    return _round_half_up(calc_bmr(profile) * profile.activity_level)


# ── Macro budget ─────────────────────────────────────────────────────────

def _grams(tdee: float, pct: int, key: MacroKey) -> int:
    return _round_half_up(tdee * (pct / 100) / MACRO_CALORIES[key])


def macro_grams(tdee: float, split: MacroSplit) -> MacroGrams:
    """Gram target per macro. Each is rounded on its own, so they need not add back to tdee."""
    return MacroGrams(
        protein=_grams(tdee, split.protein, MacroKey.PROTEIN),
        fat=_grams(tdee, split.fat, MacroKey.FAT),
        carbs=_grams(tdee, split.carbs, MacroKey.CARBS),
    )


def pct_from_grams(key: MacroKey, grams: float, tdee: float) -> int:
    """Share of tdee (whole percent) that `grams` of the macro represents."""
    if tdee <= 0:
        return 0
    return _round_half_up(grams * MACRO_CALORIES[MacroKey(key)] / tdee * 100)


def _clamp_pct(value: float) -> int:
    return max(0, min(100, _round_half_up(value)))


def _normalize_split(split: MacroSplit) -> tuple[int, int, int]:
    """Return (carbs, fat, protein) in range with carbs + fat <= 100.

    A stored split can only break this if it was written outside the engine;
    fat gives way first, same priority as the re-balance itself.
    """
    carbs = _clamp_pct(split.carbs)
    fat = _clamp_pct(split.fat)
    protein = _clamp_pct(split.protein)
    if carbs + fat > 100:
        shortfall = carbs + fat - 100
        logger.warning(
            "Macro split carbs=%d fat=%d exceeds 100%%; trimming fat by %d",
            carbs, fat, shortfall,
        )
        fat -= shortfall
    return carbs, fat, protein


def adjust_macro_split(key: MacroKey, new_pct: float, split: MacroSplit) -> MacroSplit:
    """Set one macro's percentage and re-balance the others.

    Priority is carbs > fat > protein: changing carbs may squeeze fat,
    changing fat never touches carbs, and protein always takes the remainder.
    The result sums to exactly 100 with every value in [0, 100].
    """
    key = MacroKey(key)
    safe_pct = _clamp_pct(new_pct)
    carbs, fat, protein = _normalize_split(split)

    match key:
        case MacroKey.CARBS:
            carbs = safe_pct
            fat = min(fat, 100 - carbs)
            protein = 100 - carbs - fat
        case MacroKey.FAT:
            fat = min(safe_pct, 100 - carbs)
            protein = 100 - carbs - fat
        case MacroKey.PROTEIN:
            protein = min(safe_pct, 100 - carbs - fat)
            if carbs + fat + protein < 100:
                protein = 100 - carbs - fat

    return MacroSplit(protein=protein, fat=fat, carbs=carbs)


# ── Scenario modes ───────────────────────────────────────────────────────

def list_scenario_modes() -> list[ScenarioMode]:
    return [ScenarioMode(name=name, calories=calories) for name, calories in SCENARIO_MODES]


def find_scenario_mode(name: str) -> Optional[ScenarioMode]:
    for mode in list_scenario_modes():
        if mode.name == name:
            return mode
    return None


def resolve_scenario_mode(calories: int) -> Optional[ScenarioMode]:
    """Catalog entry with exactly this calorie target, if any."""
    for mode in list_scenario_modes():
        if mode.calories == calories:
            return mode
    return None


# ── Recovery status ──────────────────────────────────────────────────────

def average_rhr(logs: Sequence[DailyLog]) -> float:
    """Mean resting heart rate over every log given. 0 for none."""
    if not logs:
        return 0.0
    return sum(log.rhr for log in logs) / len(logs)


def status_alert(logs: Sequence[DailyLog]) -> StatusAlert:
    """Classify today's readiness from the newest log against the rest of the history.

    `logs` is newest first. Sleep is checked before heart rate; the 15%
    RHR deviation wins over the 10% one.
    """
    if not logs:
        return StatusAlert(level=WarningLevel.GREEN, message=MSG_FIRST_CHECK_IN)

    today = logs[0]
    if today.sleep < SLEEP_DEFICIT_HOURS:
        return StatusAlert(level=WarningLevel.RED, message=MSG_SLEEP_DEFICIT)

    history = logs[1:]
    if history:
        avg_rhr = average_rhr(history)
        if today.rhr > avg_rhr * RHR_SEVERE_RATIO:
            return StatusAlert(level=WarningLevel.YELLOW, message=MSG_RHR_SEVERE)
        if today.rhr > avg_rhr * RHR_MODERATE_RATIO:
            return StatusAlert(level=WarningLevel.YELLOW, message=MSG_RHR_MODERATE)

    return StatusAlert(level=WarningLevel.GREEN, message=MSG_NORMAL)


# ── Retention ────────────────────────────────────────────────────────────

class _Dated(Protocol):
    date: datetime


T = TypeVar("T", bound=_Dated)


def as_utc(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def prune_expired_logs(
    logs: Sequence[T],
    retention_days: int = MAX_HISTORY_DAYS,
    now: Optional[datetime] = None,
) -> list[T]:
    """Drop entries at least `retention_days` old. Order is preserved.

    Relative to the wall clock unless `now` is given, so the same input can
    shrink between two calls on different days.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    max_age = timedelta(days=retention_days)
    return [log for log in logs if now - as_utc(log.date) < max_age]
