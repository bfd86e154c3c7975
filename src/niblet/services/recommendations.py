"""Calorie and macro recommendations."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from types import MappingProxyType

from niblet.dates import as_utc
from niblet.domain.recommendations import (
    GENDERS,
    BiometricInput,
    GoalInput,
    Macronutrients,
    RecommendationResult,
)
from niblet.errors import InvalidInputError
from niblet.rounding import round_half_up

CALORIES_PER_POUND = 3500
DAYS_PER_WEEK = 7

_logger = logging.getLogger(__name__)


def _default_multipliers() -> Mapping[str, float]:
    return MappingProxyType(
        {
            "sedentary": 1.2,
            "light": 1.375,
            "moderate": 1.55,
            "active": 1.725,
            "very-active": 1.9,
        }
    )


@dataclass(frozen=True)
class RecommenderConfig:
    """Fixed constants used by the recommender."""

    activity_multipliers: Mapping[str, float] = field(
        default_factory=_default_multipliers
    )
    male_minimum_calories: int = 1500
    female_minimum_calories: int = 1200
    protein_share: float = 0.30
    fat_share: float = 0.25
    carbs_share: float = 0.45
    protein_kcal_per_gram: int = 4
    fat_kcal_per_gram: int = 9
    carbs_kcal_per_gram: int = 4


@dataclass(frozen=True)
class CalorieRecommender:
    """Computes BMR, maintenance calories and a daily calorie target."""

    config: RecommenderConfig = field(default_factory=RecommenderConfig)

    def recommend(
        self,
        biometrics: BiometricInput,
        goal: GoalInput | None = None,
        now: datetime | None = None,
    ) -> RecommendationResult:
        """Return the recommendation for the given biometrics and goal."""
        weight, height, age = _validate_biometrics(biometrics)
        multiplier = self.config.activity_multipliers.get(
            biometrics.activity_level or ""
        )
        if multiplier is None:
            raise InvalidInputError(
                f"Unknown activity level: {biometrics.activity_level}"
            )
        is_male = biometrics.gender == "male"

        # Pounds and inches go straight into the metric form of the equation.
        bmr = 10 * weight + 6.25 * height - 5 * age
        bmr += 5 if is_male else -161

        maintenance = round_half_up(bmr * multiplier)
        recommended = maintenance + self._daily_adjustment(weight, goal, now)

        minimum = (
            self.config.male_minimum_calories
            if is_male
            else self.config.female_minimum_calories
        )
        if recommended < minimum:
            _logger.debug(
                "Recommended calories %s below floor, clamping to %s",
                recommended,
                minimum,
            )
            recommended = minimum

        return RecommendationResult(
            bmr=bmr,
            maintenance_calories=maintenance,
            recommended_calories=recommended,
            macronutrients=self._macros(recommended),
        )

    def _daily_adjustment(
        self, current_weight: float, goal: GoalInput | None, now: datetime | None
    ) -> int:
        if goal is None:
            return 0
        if goal.weekly_weight_change is not None:
            weekly = _require_number(goal.weekly_weight_change, "weeklyWeightChange")
            return round_half_up(weekly * CALORIES_PER_POUND / DAYS_PER_WEEK)
        if goal.goal_weight is not None and goal.target_date is not None:
            goal_weight = _require_positive(goal.goal_weight, "goalWeight")
            reference = as_utc(now or datetime.now(tz=UTC))
            delta = as_utc(goal.target_date) - reference
            days = max(1, round_half_up(delta / timedelta(days=1)))
            total = (goal_weight - current_weight) * CALORIES_PER_POUND
            return round_half_up(total / days)
        return 0

    def _macros(self, calories: int) -> Macronutrients:
        cfg = self.config
        return Macronutrients(
            protein=round_half_up(
                calories * cfg.protein_share / cfg.protein_kcal_per_gram
            ),
            fat=round_half_up(calories * cfg.fat_share / cfg.fat_kcal_per_gram),
            carbs=round_half_up(calories * cfg.carbs_share / cfg.carbs_kcal_per_gram),
        )


def _validate_biometrics(biometrics: BiometricInput) -> tuple[float, float, int]:
    """Return weight, height and age after checking every required field."""
    required = (
        biometrics.current_weight,
        biometrics.height,
        biometrics.age,
        biometrics.gender,
        biometrics.activity_level,
    )
    if any(value is None or value == "" for value in required):
        raise InvalidInputError("Please provide all required fields")
    weight = _require_positive(biometrics.current_weight, "currentWeight")
    height = _require_positive(biometrics.height, "height")
    age = _require_positive(biometrics.age, "age")
    if int(age) != age:
        raise InvalidInputError("age must be a whole number of years")
    if biometrics.gender not in GENDERS:
        raise InvalidInputError(f"Unknown gender: {biometrics.gender}")
    return weight, height, int(age)


def _require_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(f"{name} must be a number")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number")
    return float(value)


def _require_positive(value: object, name: str) -> float:
    number = _require_number(value, name)
    if number <= 0:
        raise InvalidInputError(f"{name} must be positive")
    return number
