"""Domain models for calorie and macro recommendations."""

from dataclasses import dataclass
from datetime import datetime

GENDERS = ("male", "female", "other", "prefer-not-to-say")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very-active")


@dataclass(frozen=True)
class BiometricInput:
    """Body measurements used for the BMR calculation.

    Weight is in pounds and height in inches. Any field may be ``None`` when a
    caller could not supply it; the recommender rejects such input.
    """

    current_weight: float | None
    height: float | None
    age: int | None
    gender: str | None
    activity_level: str | None


@dataclass(frozen=True)
class GoalInput:
    """Weight goal expressed as a weekly rate or as a target weight and date."""

    weekly_weight_change: float | None = None
    goal_weight: float | None = None
    target_date: datetime | None = None


@dataclass(frozen=True)
class Macronutrients:
    """Daily macro targets in grams."""

    protein: int
    fat: int
    carbs: int


@dataclass(frozen=True)
class RecommendationResult:
    """Calorie recommendation with its intermediate values."""

    bmr: float
    maintenance_calories: int
    recommended_calories: int
    macronutrients: Macronutrients
