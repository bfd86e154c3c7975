"""Heuristic nutrition estimates from free-text meal descriptions."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from niblet.domain.nutrition import FoodEntry, NutritionEstimate
from niblet.rounding import round_half_up

_NUMERIC_TOKEN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?$")

_WORD_QUANTITIES: Mapping[str, float] = MappingProxyType(
    {
        "half": 0.5,
        "a-half": 0.5,
        "quarter": 0.25,
        "double": 2,
        "two": 2,
        "triple": 3,
        "three": 3,
    }
)

_logger = logging.getLogger(__name__)


def _food(
    keyword: str, calories: float, protein: float, carbs: float, fat: float
) -> FoodEntry:
    return FoodEntry(
        keyword=keyword, calories=calories, protein=protein, carbs=carbs, fat=fat
    )


DEFAULT_FOODS: tuple[FoodEntry, ...] = (
    _food("apple", 95, 0.5, 25, 0.3),
    _food("banana", 105, 1.3, 27, 0.4),
    _food("orange", 62, 1.2, 15, 0.2),
    _food("chicken breast", 165, 31, 0, 3.6),
    _food("salmon", 206, 22, 0, 13),
    _food("rice", 130, 2.7, 28, 0.3),
    _food("pasta", 131, 5, 25, 1.1),
    _food("bread", 79, 3, 15, 1),
    _food("egg", 78, 6, 0.6, 5),
    _food("milk", 42, 3.4, 5, 1),
    _food("coffee", 2, 0.1, 0, 0),
    _food("tea", 1, 0, 0.2, 0),
    _food("yogurt", 59, 3.5, 5, 3.3),
    _food("cheese", 110, 7, 0.4, 9),
    _food("salad", 20, 1, 3, 0.2),
    _food("pizza", 285, 12, 36, 10),
    _food("burger", 354, 20, 31, 17),
    _food("fries", 312, 3.4, 41, 15),
    _food("soda", 140, 0, 39, 0),
    _food("ice cream", 137, 2.5, 16, 7),
    _food("chocolate", 155, 2, 15, 9),
    _food("nuts", 184, 7, 6, 16),
    _food("avocado", 160, 2, 8.5, 14.7),
    _food("potato", 77, 2, 17, 0.1),
    _food("cereal", 110, 3, 22, 1),
    _food("bagel", 245, 10, 48, 1.5),
    _food("oatmeal", 150, 5, 27, 2.5),
    _food("sandwich", 300, 15, 35, 10),
    _food("wrap", 245, 10, 36, 8),
    _food("turkey", 165, 24, 0, 7),
    _food("steak", 271, 26, 0, 19),
    _food("fish", 136, 22, 0, 5),
    _food("shrimp", 99, 24, 0, 0.3),
    _food("tofu", 76, 8, 2, 4),
    _food("beans", 127, 8, 23, 0.5),
    _food("lentils", 116, 9, 20, 0.4),
    _food("peanut butter", 188, 8, 6, 16),
    _food("olive oil", 119, 0, 0, 14),
    _food("butter", 102, 0.1, 0, 11.5),
    _food("tomato", 18, 0.9, 3.9, 0.2),
    _food("lettuce", 5, 0.5, 1, 0.1),
    _food("cucumber", 8, 0.3, 1.9, 0.1),
    _food("carrot", 25, 0.6, 6, 0.1),
)


def _default_meal_types() -> Mapping[str, int]:
    return MappingProxyType(
        {"breakfast": 400, "lunch": 600, "dinner": 700, "snack": 200}
    )


def default_estimate(description: str) -> NutritionEstimate:
    """Return the fixed estimate used when nothing in a meal is recognised."""
    return NutritionEstimate(
        calories=350, protein=15, carbs=35, fat=12, description=description
    )


@dataclass(frozen=True)
class EstimatorConfig:
    """Reference tables for the meal-text estimator."""

    foods: tuple[FoodEntry, ...] = DEFAULT_FOODS
    meal_type_calories: Mapping[str, int] = field(default_factory=_default_meal_types)


@dataclass(frozen=True)
class MealTextEstimator:
    """Estimates meal nutrition from keywords and quantity words in text.

    Tiers are tried in order: known foods, then the average of a mentioned meal
    type, then a fixed default. Every known keyword found in the text counts,
    so overlapping keywords such as "butter" and "peanut butter" both add up.
    """

    config: EstimatorConfig = field(default_factory=EstimatorConfig)

    def estimate(self, text: str) -> NutritionEstimate:
        """Estimate nutrition for a meal description."""
        found = self._sum_known_foods(text)
        if found is not None:
            return found
        return self.estimate_without_foods(text)

    def estimate_without_foods(self, text: str) -> NutritionEstimate:
        """Estimate from the meal type named in the text, or the default."""
        lower_text = text.lower()
        for meal_type, average in self.config.meal_type_calories.items():
            if meal_type in lower_text:
                return NutritionEstimate(
                    calories=average,
                    protein=round_half_up(average * 0.25 / 4),
                    carbs=round_half_up(average * 0.5 / 4),
                    fat=round_half_up(average * 0.25 / 9),
                    description=text,
                )
        return default_estimate(text)

    def _sum_known_foods(self, text: str) -> NutritionEstimate | None:
        lower_text = text.lower()
        words = lower_text.split()
        calories = protein = carbs = fat = 0.0
        matched = []
        for food in self.config.foods:
            if food.keyword not in lower_text:
                continue
            quantity = _quantity_before(words, food.keyword)
            matched.append((food.keyword, quantity))
            calories += food.calories * quantity
            protein += food.protein * quantity
            carbs += food.carbs * quantity
            fat += food.fat * quantity

        if not matched:
            return None
        _logger.debug("Matched foods in meal text: %s", matched)
        return NutritionEstimate(
            calories=round_half_up(calories),
            protein=round_half_up(protein),
            carbs=round_half_up(carbs),
            fat=round_half_up(fat),
            description=text,
        )


def _quantity_before(words: list[str], keyword: str) -> float:
    """Read the quantity from the word preceding the first word with keyword."""
    index = next((i for i, word in enumerate(words) if keyword in word), -1)
    if index <= 0:
        return 1
    previous = words[index - 1]
    if _NUMERIC_TOKEN.match(previous):
        return float(previous)
    return _WORD_QUANTITIES.get(previous, 1)
