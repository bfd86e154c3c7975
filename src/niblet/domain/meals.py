"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class MealRecord:
    """Logged meal with its nutrition totals."""

    date: datetime
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class DailyMealSummary:
    """Nutrition totals of all meals logged on one UTC day."""

    day: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    meal_count: int
