"""Errors raised by the planning engine."""

from datetime import date

from nutriplan.domain.profile import Gender


class MealPlanError(Exception):
    """Base class for planning failures."""

    code = "MEAL_PLAN_ERROR"


class BelowMinimumCaloriesError(MealPlanError):
    """Goal-adjusted calories fall under the safe floor for the gender."""

    code = "BELOW_MINIMUM_CALORIES"

    def __init__(
        self, gender: Gender, calculated_calories: int, minimum_calories: int
    ) -> None:
        self.gender = gender
        self.calculated_calories = calculated_calories
        self.minimum_calories = minimum_calories
        group = "women" if gender == Gender.FEMALE else "men"
        super().__init__(
            f"Calculated calories ({calculated_calories} kcal) are below the safe "
            f"minimum for {group} ({minimum_calories} kcal). "
            "Choose a gentler weight-loss rate."
        )


class MissingWeightLossRateError(MealPlanError, ValueError):
    """Weight-loss goal without a positive weekly rate."""

    code = "MISSING_WEIGHT_LOSS_RATE"

    def __init__(self) -> None:
        super().__init__("weight_loss_rate_kg_week is required for weight_loss")


class InvalidPlanConfigurationError(MealPlanError):
    """Unknown plan type or malformed slot selection."""

    code = "INVALID_PLAN_CONFIGURATION"


class NoCandidateRecipeError(MealPlanError):
    """No recipe matched a slot's calorie band."""

    code = "MEAL_GENERATOR_ERROR"

    def __init__(self, meal_type: str, min_calories: int, max_calories: int) -> None:
        self.meal_type = meal_type
        self.min_calories = min_calories
        self.max_calories = max_calories
        super().__init__(
            f"No recipe found for {meal_type} in range "
            f"{min_calories}-{max_calories} kcal"
        )


class IncompletePlanError(MealPlanError):
    """Generated plan does not hold the expected number of meals."""

    code = "MEAL_GENERATOR_ERROR"

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid number of meals in plan: {actual}, expected {expected}"
        )


class MealPlanExistsError(MealPlanError):
    """Every requested day already has a complete plan."""

    code = "MEAL_PLAN_EXISTS"

    def __init__(self, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"Meal plan from {start.isoformat()} to {end.isoformat()} "
            "already exists and is complete"
        )


class ProfileNotFoundError(MealPlanError):
    """No stored profile for the user."""

    code = "PROFILE_NOT_FOUND"
