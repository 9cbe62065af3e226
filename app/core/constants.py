"""Application constants."""

from app.core.enums import MacroKey

# kcal per gram
MACRO_CALORIES: dict[MacroKey, int] = {
    MacroKey.PROTEIN: 4,
    MacroKey.CARBS: 4,
    MacroKey.FAT: 9,
}

# Logs older than this are pruned on every load
MAX_HISTORY_DAYS = 365

DEFAULT_TDEE = 1850

# Scenario modes: (name, fixed daily calories)
SCENARIO_MODES: tuple[tuple[str, int], ...] = (
    ("Work + Training", 1850),
    ("Work + Rest", 1750),
    ("Holiday + Training", 1700),
    ("Holiday + Rest", 1550),
)
CUSTOM_MODE = "custom"

# Status alert thresholds
SLEEP_DEFICIT_HOURS = 5.0
RHR_SEVERE_RATIO = 1.15
RHR_MODERATE_RATIO = 1.10

# Weight trend ranges offered by the dashboard
WEIGHT_TREND_RANGES = (7, 30)
