"""Pydantic models for the planning API."""

from pydantic import BaseModel, Field

from nutriplan.domain.profile import (
    DEFAULT_MACRO_RATIO,
    ActivityLevel,
    BiometricProfile,
    Gender,
    Goal,
    MacroRatio,
)


class BiometricProfileIn(BaseModel):
    """Biometric inputs for target calculation."""

    gender: Gender
    age: int = Field(gt=0)
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: Goal
    weight_loss_rate_kg_week: float | None = Field(default=None, gt=0)
    macro_ratio: MacroRatio = DEFAULT_MACRO_RATIO

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(
            gender=self.gender,
            age=self.age,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            activity_level=self.activity_level,
            goal=self.goal,
            weight_loss_rate_kg_week=self.weight_loss_rate_kg_week,
            macro_ratio=self.macro_ratio,
        )


class NutritionTargetsOut(BaseModel):
    """Calculated daily targets."""

    target_calories: int
    target_protein_g: int
    target_carbs_g: int
    target_fats_g: int


class WeightLossOptionOut(BaseModel):
    """Selectable weight-loss rate."""

    rate_kg_week: float
    daily_deficit: int
    target_calories: int
    is_disabled: bool
    reason_disabled: str | None = None


class GeneratePlanOut(BaseModel):
    """Result of a plan generation request."""

    status: str = "success"
    message: str
    generated_days: int
    dates: list[str]
