"""Shared enums for schemas and services."""

from enum import Enum


class Gender(str, Enum):
    """Selects the Mifflin-St Jeor constant."""

    MALE = "male"
    FEMALE = "female"


class MacroKey(str, Enum):
    """Macronutrient slot. Declaration order is the re-balance priority."""

    CARBS = "carbs"  # L1
    FAT = "fat"  # L2
    PROTEIN = "protein"  # L3 - always absorbs the remainder


class WarningLevel(str, Enum):
    """Health status traffic light."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"
