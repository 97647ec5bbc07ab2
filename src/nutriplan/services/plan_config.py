"""Meal plan layouts and per-slot calorie shares."""

from collections.abc import Sequence

from nutriplan.domain.errors import InvalidPlanConfigurationError
from nutriplan.domain.plans import CalorieRange, MealPlanConfig, MealPlanType, MealSlot
from nutriplan.domain.recipes import MealType

CALORIE_TOLERANCE = 0.15

MEAL_PLAN_CONFIGS: dict[MealPlanType, MealPlanConfig] = {
    MealPlanType.THREE_MAIN_TWO_SNACKS: MealPlanConfig(
        slots=[
            MealSlot(MealType.BREAKFAST, 0.25),
            MealSlot(MealType.SNACK_MORNING, 0.1),
            MealSlot(MealType.LUNCH, 0.3),
            MealSlot(MealType.SNACK_AFTERNOON, 0.1),
            MealSlot(MealType.DINNER, 0.25),
        ]
    ),
    MealPlanType.THREE_MAIN_ONE_SNACK: MealPlanConfig(
        slots=[
            MealSlot(MealType.BREAKFAST, 0.25),
            MealSlot(MealType.LUNCH, 0.3),
            MealSlot(MealType.SNACK_AFTERNOON, 0.15),
            MealSlot(MealType.DINNER, 0.3),
        ]
    ),
    MealPlanType.THREE_MAIN: MealPlanConfig(
        slots=[
            MealSlot(MealType.BREAKFAST, 0.3),
            MealSlot(MealType.LUNCH, 0.35),
            MealSlot(MealType.DINNER, 0.35),
        ]
    ),
    # Used when no pair of meals was chosen.
    MealPlanType.TWO_MAIN: MealPlanConfig(
        slots=[
            MealSlot(MealType.LUNCH, 0.45),
            MealSlot(MealType.DINNER, 0.55),
        ]
    ),
}

MAIN_MEAL_ORDER: tuple[MealType, ...] = (
    MealType.BREAKFAST,
    MealType.LUNCH,
    MealType.DINNER,
)
EARLIER_MEAL_SHARE = 0.45
LATER_MEAL_SHARE = 0.55

_SNACK_TYPES = {MealType.SNACK_MORNING, MealType.SNACK_AFTERNOON}


def resolve(
    plan_type: MealPlanType | str,
    selected_meals: Sequence[MealType | str] | None = None,
) -> MealPlanConfig:
    """Return the slot layout for a plan type.

    For ``2_main`` with exactly two chosen meals, the meals are put in day
    order and the later one receives the larger share.
    """
    try:
        resolved_type = MealPlanType(plan_type)
    except ValueError as exc:
        raise InvalidPlanConfigurationError(
            f"Unknown meal plan type: {plan_type!r}"
        ) from exc

    if resolved_type == MealPlanType.TWO_MAIN and selected_meals:
        return _two_main_config(selected_meals)
    return MEAL_PLAN_CONFIGS[resolved_type]


def _two_main_config(selected_meals: Sequence[MealType | str]) -> MealPlanConfig:
    if len(selected_meals) != 2:  # noqa: PLR2004
        raise InvalidPlanConfigurationError(
            f"2_main plan needs exactly two meals, got {len(selected_meals)}"
        )
    try:
        meals = [MealType(meal) for meal in selected_meals]
    except ValueError as exc:
        raise InvalidPlanConfigurationError(str(exc)) from exc
    if any(meal not in MAIN_MEAL_ORDER for meal in meals) or meals[0] == meals[1]:
        raise InvalidPlanConfigurationError(
            "2_main plan needs two different meals from breakfast, lunch, dinner"
        )
    first, second = sorted(meals, key=MAIN_MEAL_ORDER.index)
    return MealPlanConfig(
        slots=[
            MealSlot(first, EARLIER_MEAL_SHARE),
            MealSlot(second, LATER_MEAL_SHARE),
        ]
    )


def search_meal_type(meal_type: MealType) -> MealType:
    """Map slot-specific snacks to the generic catalog category."""
    if meal_type in _SNACK_TYPES:
        return MealType.SNACK
    return meal_type


def meal_calorie_range(
    daily_calories: float, slot: MealSlot, tolerance: float = CALORIE_TOLERANCE
) -> CalorieRange:
    """Return the calorie band for one slot."""
    target = daily_calories * slot.calorie_share
    return CalorieRange(
        min=target * (1 - tolerance),
        max=target * (1 + tolerance),
        target=target,
    )
