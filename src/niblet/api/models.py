"""Request and response models for the HTTP API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from niblet.domain.recommendations import BiometricInput, GoalInput


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class CalculateCaloriesRequest(CamelModel):
    """Biometrics and an optional goal for a calorie recommendation."""

    current_weight: float | None = None
    height: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = None
    goal_weight: float | None = None
    target_date: datetime | None = None
    weekly_weight_change: float | None = None

    def biometrics(self) -> BiometricInput:
        """Return the biometric part of the request."""
        return BiometricInput(
            current_weight=self.current_weight,
            height=self.height,
            age=self.age,
            gender=self.gender,
            activity_level=self.activity_level,
        )

    def goal(self) -> GoalInput:
        """Return the goal part of the request."""
        return GoalInput(
            weekly_weight_change=self.weekly_weight_change,
            goal_weight=self.goal_weight,
            target_date=self.target_date,
        )


class MacronutrientsOut(CamelModel):
    """Daily macronutrient targets in grams."""

    protein: int
    fat: int
    carbs: int


class RecommendationOut(CamelModel):
    """Calorie recommendation payload."""

    bmr: float
    maintenance_calories: int
    recommended_calories: int
    macronutrients: MacronutrientsOut


class AnalyzeTextRequest(CamelModel):
    """Free-text meal description to analyze."""

    text: str | None = None


class AnalyzeImageRequest(CamelModel):
    """Base64-encoded meal photo to analyze."""

    image_base64: str | None = None


class NutritionEstimateOut(CamelModel):
    """Estimated nutrition of a meal."""

    calories: int
    protein: int
    carbs: int
    fat: int
    description: str


class WeightStatsOut(CamelModel):
    """Aggregate statistics over weight entries."""

    current: float
    starting: float
    lowest: float
    highest: float
    total_entries: int
    first_date: datetime
    last_date: datetime
    net_change: float


class GoalProgressOut(CamelModel):
    """Progress toward the current weight goal."""

    current: float
    starting: float
    target: float
    target_date: datetime
    progress_percentage: float
    projected_completion_date: datetime | None


class WeightProgressOut(CamelModel):
    """Weight statistics and goal progress payload."""

    stats: WeightStatsOut | None
    goal: GoalProgressOut | None


class DailyMealSummaryOut(CamelModel):
    """Meal totals for a single day."""

    day: date = Field(alias="date")
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    meal_count: int
