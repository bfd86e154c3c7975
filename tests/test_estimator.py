"""Tests for the meal-text estimator."""

import pytest

from niblet.domain.nutrition import FoodEntry, NutritionEstimate
from niblet.services.estimator import (
    DEFAULT_FOODS,
    EstimatorConfig,
    MealTextEstimator,
)


def test_known_food_with_numeric_quantity_beats_meal_type() -> None:
    result = MealTextEstimator().estimate("2 apples for breakfast")

    assert result == NutritionEstimate(
        calories=190,
        protein=1,
        carbs=50,
        fat=1,
        description="2 apples for breakfast",
    )


def test_meal_type_average_when_no_food_matches() -> None:
    result = MealTextEstimator().estimate("just had lunch")

    assert (result.calories, result.protein, result.carbs, result.fat) == (
        600,
        38,
        75,
        17,
    )
    assert result.description == "just had lunch"


def test_default_estimate_for_unrecognised_text() -> None:
    result = MealTextEstimator().estimate("xyzzy plugh")

    assert (result.calories, result.protein, result.carbs, result.fat) == (
        350,
        15,
        35,
        12,
    )


def test_word_quantities_and_half_up_rounding() -> None:
    result = MealTextEstimator().estimate("half banana and two eggs")

    # 52.5 + 156 = 208.5 kcal
    assert result.calories == 209
    assert result.protein == 13
    assert result.carbs == 15
    assert result.fat == 10


@pytest.mark.parametrize(
    ("word", "calories"),
    [
        ("a-half", 53),
        ("quarter", 26),
        ("double", 210),
        ("triple", 315),
        ("three", 315),
        ("some", 105),
        ("0.5", 53),
    ],
)
def test_quantity_words(word: str, calories: int) -> None:
    result = MealTextEstimator().estimate(f"{word} banana")

    assert result.calories == calories


def test_decimal_quantity() -> None:
    result = MealTextEstimator().estimate("1.5 bagel")

    assert result.calories == 368
    assert result.carbs == 72


def test_matching_is_case_insensitive_and_echoes_original_text() -> None:
    result = MealTextEstimator().estimate("Two BANANAS")

    assert result.calories == 210
    assert result.description == "Two BANANAS"


def test_overlapping_keywords_both_count() -> None:
    result = MealTextEstimator().estimate("peanut butter toast")

    # "peanut butter" and "butter" both match.
    assert result.calories == 290
    assert result.fat == 28


def test_keywords_match_inside_other_words() -> None:
    result = MealTextEstimator().estimate("steak dinner")

    # "tea" is found inside "steak".
    assert result.calories == 272
    assert result.protein == 26


def test_multi_word_keyword_ignores_quantity() -> None:
    result = MealTextEstimator().estimate("2 chicken breast")

    assert result.calories == 165


def test_meal_types_checked_in_declaration_order() -> None:
    result = MealTextEstimator().estimate("late night snack before dinner")

    assert result.calories == 700
    assert result.protein == 44
    assert result.carbs == 88
    assert result.fat == 19


def test_estimate_without_foods_skips_keywords() -> None:
    result = MealTextEstimator().estimate_without_foods("2 apples for breakfast")

    assert result.calories == 400
    assert result.fat == 11


def test_custom_food_table() -> None:
    estimator = MealTextEstimator(
        EstimatorConfig(foods=(FoodEntry("kimchi", 23, 1.1, 4, 0.8),))
    )

    assert estimator.estimate("3 kimchi").calories == 69
    assert estimator.estimate("apple").calories == 350


def test_reference_tables_are_read_only() -> None:
    config = EstimatorConfig()

    assert len(DEFAULT_FOODS) == 43
    with pytest.raises(TypeError):
        config.meal_type_calories["brunch"] = 500  # type: ignore[index]


def test_estimate_is_deterministic() -> None:
    estimator = MealTextEstimator()

    assert estimator.estimate("salmon and rice") == estimator.estimate(
        "salmon and rice"
    )
