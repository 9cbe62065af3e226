"""App state Pydantic schemas: profile, daily logs, weekly check-ins and the root blob."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.enums import Gender, MacroKey, WarningLevel

# Stored-state models also read the camelCase keys written by the browser client
# (`dailyLogs`, `activityLevel`, ...); responses stay snake_case. Unknown keys are rejected.
STORED_STATE_CONFIG = ConfigDict(
    alias_generator=AliasGenerator(validation_alias=to_camel),
    populate_by_name=True,
    extra="forbid",
)


# ── Macros ───────────────────────────────────────────────────────────────

class MacroSplit(BaseModel):
    """Percent of the calorie budget per macro. Kept summing to 100 by the engine."""

    model_config = ConfigDict(frozen=True, **STORED_STATE_CONFIG)

    protein: int = Field(30, ge=0, le=100)
    fat: int = Field(25, ge=0, le=100)
    carbs: int = Field(45, ge=0, le=100)


class MacroReached(BaseModel):
    model_config = ConfigDict(frozen=True, **STORED_STATE_CONFIG)

    carbs: bool = False
    fat: bool = False
    protein: bool = False


class MacroGrams(BaseModel):
    protein: int
    fat: int
    carbs: int


# ── Profile ──────────────────────────────────────────────────────────────

class UserProfile(BaseModel):
    model_config = ConfigDict(**STORED_STATE_CONFIG)

    height: float = Field(175, gt=0, le=300, description="Height in centimetres")
    weight: float = Field(75, gt=0, le=500, description="Body weight in kg")
    age: int = Field(28, gt=0, le=120, description="Age in years")
    gender: Gender = Gender.MALE
    activity_level: float = Field(1.55, gt=1.0, le=2.5, description="TDEE activity multiplier")
    bmi: Optional[float] = None
    tdee: Optional[int] = Field(None, description="Total daily calorie budget (kcal)")
    selected_mode: Optional[str] = None
    macros: MacroSplit = Field(default_factory=MacroSplit)

    @field_validator("macros")
    @classmethod
    def split_sums_to_100(cls, v: MacroSplit) -> MacroSplit:
        total = v.protein + v.fat + v.carbs
        if total != 100:
            raise ValueError(f"macro split must sum to 100, got {total}")
        return v


class ProfileUpdate(BaseModel):
    height: Optional[float] = Field(None, gt=0, le=300)
    weight: Optional[float] = Field(None, gt=0, le=500)
    age: Optional[int] = Field(None, gt=0, le=120)
    gender: Optional[Gender] = None
    activity_level: Optional[float] = Field(None, gt=1.0, le=2.5)


class ScenarioMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    calories: int


class ScenarioModeSelect(BaseModel):
    name: str


class ManualTdee(BaseModel):
    calories: int = Field(..., gt=0, le=10000, description="Daily calorie budget (kcal)")


class MacroAdjust(BaseModel):
    key: MacroKey
    pct: int = Field(..., ge=0, le=100)


class MacroGramsTarget(BaseModel):
    key: MacroKey
    grams: int = Field(..., ge=0, le=2000)


# ── Logs ─────────────────────────────────────────────────────────────────

class DailyLog(BaseModel):
    model_config = ConfigDict(frozen=True, **STORED_STATE_CONFIG)

    id: UUID = Field(default_factory=uuid4)
    date: datetime
    weight: float
    sleep: float
    rhr: float
    # Placeholders kept for blob compatibility; nothing scores them yet
    fatigue: int = 0
    performance: int = 0
    is_editable: bool = True
    macros_reached: MacroReached = Field(default_factory=MacroReached)


class DailyLogCreate(BaseModel):
    weight: float = Field(..., gt=0, le=500, description="Morning weight in kg")
    sleep: float = Field(..., ge=0, le=24, description="Hours slept")
    rhr: float = Field(..., gt=0, le=250, description="Morning resting heart rate (bpm)")


class WeeklyCheckIn(BaseModel):
    model_config = ConfigDict(frozen=True, **STORED_STATE_CONFIG)

    id: UUID = Field(default_factory=uuid4)
    date: datetime
    waist: float
    left_arm: float
    right_arm: float
    photos: list[str] = Field(default_factory=list, description="Base64 encoded images")
    is_editable: bool = True


class WeeklyCheckInCreate(BaseModel):
    waist: float = Field(..., gt=0, lt=300, description="Waist circumference in cm")
    left_arm: float = Field(..., gt=0, lt=100)
    right_arm: float = Field(..., gt=0, lt=100)
    photos: list[str] = Field(default_factory=list)


# ── Root blob ────────────────────────────────────────────────────────────

class AppState(BaseModel):
    """Everything the client persists, stored as one blob under the storage key."""

    model_config = ConfigDict(**STORED_STATE_CONFIG)

    profile: UserProfile = Field(default_factory=UserProfile)
    daily_logs: list[DailyLog] = Field(default_factory=list, description="Newest first")
    weekly_logs: list[WeeklyCheckIn] = Field(default_factory=list, description="Newest first")


# ── Read models ──────────────────────────────────────────────────────────

class StatusAlert(BaseModel):
    level: WarningLevel
    message: str


class WeightPoint(BaseModel):
    date: datetime
    weight: float


class DashboardRead(BaseModel):
    status: StatusAlert
    selected_mode: Optional[str] = None
    bmi: Optional[float] = None
    tdee: int
    macros: MacroSplit
    macro_grams: MacroGrams
    macros_reached: Optional[MacroReached] = None
