"""Tests for meal plan configuration."""

import pytest

from nutriplan.domain.errors import InvalidPlanConfigurationError
from nutriplan.domain.plans import MealPlanType, MealSlot
from nutriplan.domain.recipes import MealType
from nutriplan.services.plan_config import (
    meal_calorie_range,
    resolve,
    search_meal_type,
)


@pytest.mark.parametrize(
    ("plan_type", "expected"),
    [
        (
            MealPlanType.THREE_MAIN_TWO_SNACKS,
            [
                MealType.BREAKFAST,
                MealType.SNACK_MORNING,
                MealType.LUNCH,
                MealType.SNACK_AFTERNOON,
                MealType.DINNER,
            ],
        ),
        (
            MealPlanType.THREE_MAIN_ONE_SNACK,
            [
                MealType.BREAKFAST,
                MealType.LUNCH,
                MealType.SNACK_AFTERNOON,
                MealType.DINNER,
            ],
        ),
        (
            MealPlanType.THREE_MAIN,
            [MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER],
        ),
        (MealPlanType.TWO_MAIN, [MealType.LUNCH, MealType.DINNER]),
    ],
)
def test_fixed_configurations(
    plan_type: MealPlanType, expected: list[MealType]
) -> None:
    config = resolve(plan_type)

    assert config.meal_types == expected
    assert sum(slot.calorie_share for slot in config.slots) == pytest.approx(1.0)


def test_resolve_accepts_raw_strings() -> None:
    config = resolve("3_main")

    assert config.meal_types == [MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER]


@pytest.mark.parametrize(
    "selected",
    [
        ["dinner", "breakfast"],
        ["lunch", "breakfast"],
        ["dinner", "lunch"],
        [MealType.BREAKFAST, MealType.DINNER],
    ],
)
def test_two_main_sorts_and_weights_later_meal(selected: list[str]) -> None:
    config = resolve(MealPlanType.TWO_MAIN, selected)

    first, second = config.slots
    order = [MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER]
    assert order.index(first.meal_type) < order.index(second.meal_type)
    assert first.calorie_share == pytest.approx(0.45)
    assert second.calorie_share == pytest.approx(0.55)
    assert first.calorie_share + second.calorie_share == pytest.approx(1.0)


def test_selected_meals_ignored_for_other_plans() -> None:
    config = resolve(MealPlanType.THREE_MAIN, ["lunch", "dinner"])

    assert len(config.slots) == 3


def test_unknown_plan_type_raises() -> None:
    with pytest.raises(InvalidPlanConfigurationError):
        resolve("4_main")


@pytest.mark.parametrize(
    "selected",
    [
        ["lunch"],
        ["breakfast", "lunch", "dinner"],
        ["lunch", "lunch"],
        ["snack", "dinner"],
        ["brunch", "dinner"],
    ],
)
def test_two_main_rejects_malformed_selection(selected: list[str]) -> None:
    with pytest.raises(InvalidPlanConfigurationError):
        resolve(MealPlanType.TWO_MAIN, selected)


def test_snack_slots_search_generic_snack() -> None:
    assert search_meal_type(MealType.SNACK_MORNING) == MealType.SNACK
    assert search_meal_type(MealType.SNACK_AFTERNOON) == MealType.SNACK
    assert search_meal_type(MealType.LUNCH) == MealType.LUNCH
    assert search_meal_type(MealType.SNACK) == MealType.SNACK


def test_meal_calorie_range_applies_tolerance() -> None:
    calorie_range = meal_calorie_range(2000, MealSlot(MealType.BREAKFAST, 0.3))

    assert calorie_range.target == pytest.approx(600)
    assert calorie_range.min == pytest.approx(510)
    assert calorie_range.max == pytest.approx(690)
