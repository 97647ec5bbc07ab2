"""Biometric profile and nutrition target models."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Physical activity tiers, ordered from least to most active."""

    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class Goal(StrEnum):
    """Dietary goal."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_MAINTENANCE = "weight_maintenance"


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily calories per macronutrient."""

    fats: float
    protein: float
    carbs: float


class MacroRatio(StrEnum):
    """Fat/protein/carb percentage triples, named fats_protein_carbs."""

    R_70_25_5 = "70_25_5"
    R_60_35_5 = "60_35_5"
    R_60_30_10 = "60_30_10"
    R_60_25_15 = "60_25_15"
    R_50_30_20 = "50_30_20"
    R_45_30_25 = "45_30_25"
    R_35_40_25 = "35_40_25"

    @property
    def split(self) -> MacroSplit:
        fats, protein, carbs = (int(part) for part in self.value.split("_"))
        return MacroSplit(fats=fats / 100, protein=protein / 100, carbs=carbs / 100)


DEFAULT_MACRO_RATIO = MacroRatio.R_60_25_15

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.VERY_LOW: 1.2,
    ActivityLevel.LOW: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.HIGH: 1.725,
    ActivityLevel.VERY_HIGH: 1.9,
}

# 1 kg of body fat is roughly 7700 kcal.
KCAL_PER_KG_FAT = 7700
DAILY_DEFICIT_PER_KG_WEEK = KCAL_PER_KG_FAT / 7

MIN_CALORIES: dict[Gender, int] = {
    Gender.FEMALE: 1400,
    Gender.MALE: 1600,
}

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FATS = 9

WEIGHT_LOSS_RATES: tuple[float, ...] = (0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class BiometricProfile:
    """Inputs for target calculation."""

    gender: Gender
    age: int
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel
    goal: Goal
    weight_loss_rate_kg_week: float | None = None
    macro_ratio: MacroRatio = DEFAULT_MACRO_RATIO


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    target_calories: int
    target_protein_g: int
    target_carbs_g: int
    target_fats_g: int


@dataclass(frozen=True)
class WeightLossOption:
    """A selectable weight-loss rate and whether it stays above the floor."""

    rate_kg_week: float
    daily_deficit: int
    target_calories: int
    is_disabled: bool
    reason_disabled: str | None = None
