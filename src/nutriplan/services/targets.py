"""Daily calorie and macro targets from biometrics.

Pipeline: BMR (Mifflin-St Jeor) -> TDEE (activity multiplier) -> goal
adjustment -> safety floor check -> macro split.
"""

from nutriplan.domain.errors import (
    BelowMinimumCaloriesError,
    MissingWeightLossRateError,
)
from nutriplan.domain.profile import (
    ACTIVITY_MULTIPLIERS,
    DAILY_DEFICIT_PER_KG_WEEK,
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FATS,
    KCAL_PER_GRAM_PROTEIN,
    MIN_CALORIES,
    WEIGHT_LOSS_RATES,
    ActivityLevel,
    BiometricProfile,
    Gender,
    Goal,
    MacroRatio,
    NutritionTargets,
    WeightLossOption,
)
from nutriplan.services.macros import round_half_up

_MALE_OFFSET = 5
_FEMALE_OFFSET = -161


def calculate_bmr(
    gender: Gender, age: int, weight_kg: float, height_cm: float
) -> float:
    """Return basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + _MALE_OFFSET
    return base + _FEMALE_OFFSET


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Return total daily energy expenditure."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def apply_goal_adjustment(
    tdee: float, goal: Goal, weight_loss_rate_kg_week: float | None = None
) -> float:
    """Subtract the daily deficit for weight loss; maintenance is unchanged."""
    if goal == Goal.WEIGHT_MAINTENANCE:
        return tdee
    if not weight_loss_rate_kg_week or weight_loss_rate_kg_week <= 0:
        raise MissingWeightLossRateError
    return tdee - weight_loss_rate_kg_week * DAILY_DEFICIT_PER_KG_WEEK


def validate_minimum_calories(calories: float, gender: Gender) -> None:
    """Raise when calories are below the gender-specific floor."""
    minimum = MIN_CALORIES[gender]
    rounded = int(round_half_up(calories))
    if rounded < minimum:
        raise BelowMinimumCaloriesError(
            gender=gender,
            calculated_calories=rounded,
            minimum_calories=minimum,
        )


def calculate_macros(target_calories: float, macro_ratio: MacroRatio) -> dict[str, int]:
    """Split calories into gram targets, rounding each macro independently."""
    split = macro_ratio.split
    carbs = target_calories * split.carbs / KCAL_PER_GRAM_CARBS
    protein = target_calories * split.protein / KCAL_PER_GRAM_PROTEIN
    fats = target_calories * split.fats / KCAL_PER_GRAM_FATS
    return {
        "carbs_g": int(round_half_up(carbs)),
        "protein_g": int(round_half_up(protein)),
        "fats_g": int(round_half_up(fats)),
    }


def compute(profile: BiometricProfile) -> NutritionTargets:
    """Compute daily targets for a profile."""
    bmr = calculate_bmr(
        profile.gender, profile.age, profile.weight_kg, profile.height_cm
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    target_calories = apply_goal_adjustment(
        tdee, profile.goal, profile.weight_loss_rate_kg_week
    )
    validate_minimum_calories(target_calories, profile.gender)
    macros = calculate_macros(target_calories, profile.macro_ratio)
    return NutritionTargets(
        target_calories=int(round_half_up(target_calories)),
        target_protein_g=macros["protein_g"],
        target_carbs_g=macros["carbs_g"],
        target_fats_g=macros["fats_g"],
    )


def weight_loss_options(profile: BiometricProfile) -> list[WeightLossOption]:
    """Return the standard weight-loss rates, disabling unsafe ones."""
    bmr = calculate_bmr(
        profile.gender, profile.age, profile.weight_kg, profile.height_cm
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    minimum = MIN_CALORIES[profile.gender]
    options: list[WeightLossOption] = []
    for rate in WEIGHT_LOSS_RATES:
        deficit = rate * DAILY_DEFICIT_PER_KG_WEEK
        target = tdee - deficit
        disabled = round_half_up(target) < minimum
        options.append(
            WeightLossOption(
                rate_kg_week=rate,
                daily_deficit=int(round_half_up(deficit)),
                target_calories=int(round_half_up(target)),
                is_disabled=disabled,
                reason_disabled=(
                    f"This rate leads to a diet below the safe minimum ({minimum} kcal)"
                    if disabled
                    else None
                ),
            )
        )
    return options
