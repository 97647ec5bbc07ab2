"""Weekly plan generation across consecutive dates."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutriplan.domain.errors import IncompletePlanError
from nutriplan.domain.plans import MealPlanConfig, PlannedMeal
from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import MealType
from nutriplan.services.day_plan import DayPlanAssembler
from nutriplan.services.optimizer import MacroOptimizer

DAYS_TO_GENERATE = 7

_logger = logging.getLogger(__name__)


class PlannedMealRepository(Protocol):
    """Persistence interface for planned meals."""

    def insert_planned_meals(self, user_id: UUID, meals: list[PlannedMeal]) -> None:
        """Insert planned meals as one batch."""

    def count_planned_meals(self, user_id: UUID, start: date, end: date) -> int:
        """Return the number of planned meals dated within [start, end]."""

    def count_meals_by_date(
        self, user_id: UUID, dates: Sequence[date]
    ) -> dict[date, int]:
        """Return planned meal counts for the given dates."""

    def list_planned_slots(
        self, user_id: UUID, dates: Sequence[date]
    ) -> set[tuple[date, MealType]]:
        """Return the (date, meal type) pairs already planned on the given dates."""

    def delete_meals_before(self, user_id: UUID, before: date) -> int:
        """Delete planned meals dated before ``before`` and return the count."""


def plan_dates(start_date: date, days: int = DAYS_TO_GENERATE) -> list[date]:
    """Return ``days`` consecutive dates starting at ``start_date``."""
    return [start_date + timedelta(days=offset) for offset in range(days)]


@dataclass
class WeeklyPlanGenerator:
    """Runs day assembly and optimization for each date of a plan."""

    assembler: DayPlanAssembler
    optimizer: MacroOptimizer
    repository: PlannedMealRepository
    days_to_generate: int = DAYS_TO_GENERATE
    debug: bool = False

    def generate_week(
        self, targets: NutritionTargets, config: MealPlanConfig, start_date: date
    ) -> list[PlannedMeal]:
        """Generate meals for the week starting at ``start_date``."""
        return self.generate_days(
            targets, config, plan_dates(start_date, self.days_to_generate)
        )

    def generate_days(
        self,
        targets: NutritionTargets,
        config: MealPlanConfig,
        dates: Sequence[date],
    ) -> list[PlannedMeal]:
        """Generate and optimize meals for each date.

        Each day starts with an empty set of used recipes. Raises
        IncompletePlanError when the result is not one meal per slot per date.
        """
        meals: list[PlannedMeal] = []
        for meal_date in dates:
            day = self.assembler.assemble_day(meal_date, config, targets)
            meals.extend(self.optimizer.optimize(day.meals, day.recipes, targets))
            if self.debug:
                _logger.info("Planned %s meals for %s", len(day.meals), meal_date)

        expected = len(dates) * len(config.slots)
        if len(meals) != expected:
            raise IncompletePlanError(expected=expected, actual=len(meals))
        return meals

    def check_existing_plan(self, user_id: UUID, start: date, end: date) -> int:
        """Return how many meals are already planned in the range."""
        return self.repository.count_planned_meals(user_id, start, end)

    def find_missing_days(
        self, user_id: UUID, dates: Sequence[date], meals_per_day: int
    ) -> list[date]:
        """Return dates that hold fewer than ``meals_per_day`` planned meals."""
        counts = self.repository.count_meals_by_date(user_id, dates)
        return [day for day in dates if counts.get(day, 0) < meals_per_day]
