"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutriplan.api.models import (
    BiometricProfileIn,
    GeneratePlanOut,
    NutritionTargetsOut,
    WeightLossOptionOut,
)
from nutriplan.app_logging import configure_logging
from nutriplan.containers import AppContainer
from nutriplan.domain.errors import (
    BelowMinimumCaloriesError,
    InvalidPlanConfigurationError,
    MealPlanError,
    MealPlanExistsError,
    MissingWeightLossRateError,
    ProfileNotFoundError,
)
from nutriplan.services import targets

_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[MealPlanError], int] = {
    BelowMinimumCaloriesError: _UNPROCESSABLE,
    MissingWeightLossRateError: _UNPROCESSABLE,
    InvalidPlanConfigurationError: _UNPROCESSABLE,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    MealPlanExistsError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(MealPlanError)
    async def meal_plan_error_handler(
        request: Request, exc: MealPlanError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Plan generation failed on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content=_error_body(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/targets")
    async def calculate_targets(profile: BiometricProfileIn) -> NutritionTargetsOut:
        """Compute daily calorie and macro targets."""
        result = targets.compute(profile.to_domain())
        return NutritionTargetsOut(**asdict(result))

    @app.post("/targets/weight-loss-options")
    async def list_weight_loss_options(
        profile: BiometricProfileIn,
    ) -> list[WeightLossOptionOut]:
        """Return weight-loss rates flagged against the calorie floor."""
        return [
            WeightLossOptionOut(**asdict(option))
            for option in targets.weight_loss_options(profile.to_domain())
        ]

    @app.post("/users/{user_id}/plan")
    def generate_plan(
        user_id: UUID, request: Request, start: date | None = None
    ) -> GeneratePlanOut:
        """Generate the missing days of a user's weekly plan."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.plan_service.generate_plan(user_id, start)
        days = len(plan.generated_days)
        return GeneratePlanOut(
            message=f"Meal plan generated for {days} {'day' if days == 1 else 'days'}",
            generated_days=days,
            dates=[day.isoformat() for day in plan.generated_days],
        )

    return app


def _error_body(exc: MealPlanError) -> dict[str, object]:
    error: dict[str, object] = {"message": str(exc), "code": exc.code}
    if isinstance(exc, BelowMinimumCaloriesError):
        error["minimum_calories"] = exc.minimum_calories
        error["calculated_calories"] = exc.calculated_calories
    return {"error": error}
