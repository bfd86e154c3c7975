"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from niblet.adapters.nutrition_api_client import HttpxNutritionApiClient
from niblet.adapters.openai_vision_client import OpenAIFoodImageClient
from niblet.adapters.supabase_goal_repository import SupabaseGoalRepository
from niblet.adapters.supabase_meal_repository import SupabaseMealRepository
from niblet.adapters.supabase_weight_repository import SupabaseWeightRepository
from niblet.config import Settings
from niblet.services.analysis import MealAnalysisService
from niblet.services.estimator import MealTextEstimator
from niblet.services.meals import MealSummaryService
from niblet.services.recommendations import CalorieRecommender
from niblet.services.vision import FoodImageService
from niblet.services.weight import WeightProgressService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recommender: CalorieRecommender
    meal_analysis_service: MealAnalysisService
    food_image_service: FoodImageService
    weight_progress_service: WeightProgressService
    meal_summary_service: MealSummaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    weight_progress_service = WeightProgressService(
        weight_repository=SupabaseWeightRepository(supabase_client),
        goal_repository=SupabaseGoalRepository(supabase_client),
    )

    nutrition_client = None
    if resolved_settings.nutrition_api_key:
        nutrition_client = HttpxNutritionApiClient.create(
            api_key=resolved_settings.nutrition_api_key,
            base_url=resolved_settings.nutrition_api_base_url,
        )
    meal_analysis_service = MealAnalysisService(
        estimator=MealTextEstimator(),
        client=nutrition_client,
    )

    image_client = None
    if resolved_settings.openai_api_key:
        image_client = OpenAIFoodImageClient.create(resolved_settings.openai_api_key)
    food_image_service = FoodImageService(
        client=image_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        if nutrition_client is not None:
            await nutrition_client.close()
        if image_client is not None:
            await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        recommender=CalorieRecommender(),
        meal_analysis_service=meal_analysis_service,
        food_image_service=food_image_service,
        weight_progress_service=weight_progress_service,
        meal_summary_service=MealSummaryService(
            SupabaseMealRepository(supabase_client)
        ),
        close_resources=close_resources,
    )
