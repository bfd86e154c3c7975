"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodEntry:
    """Per-unit nutrition for a food recognised by keyword."""

    keyword: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class NutritionEstimate:
    """Estimated nutrition for a single meal."""

    calories: int
    protein: int
    carbs: int
    fat: int
    description: str
