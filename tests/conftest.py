"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from niblet.config import Settings
from niblet.containers import AppContainer
from niblet.domain.meals import MealRecord
from niblet.domain.weight import GoalRecord, WeightEntry
from niblet.services.analysis import MealAnalysisService, NutritionAnalysisClient
from niblet.services.estimator import MealTextEstimator
from niblet.services.meals import MealRepository, MealSummaryService
from niblet.services.recommendations import CalorieRecommender
from niblet.services.vision import FoodImageClient, FoodImageService
from niblet.services.weight import (
    GoalRepository,
    WeightProgressService,
    WeightRepository,
)


@dataclass
class FakeNutritionClient(NutritionAnalysisClient):
    """Fake analysis client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "calories": 512.4,
            "protein": 30.5,
            "carbs": 60.2,
            "fat": 14.8,
            "description": "Grilled chicken bowl",
        }
    )
    calls: list[str] = field(default_factory=list)

    async def analyze_text(self, text: str) -> dict[str, object]:
        self.calls.append(text)
        return self.payload


@dataclass
class FailingNutritionClient(NutritionAnalysisClient):
    """Analysis client that always raises."""

    calls: int = 0

    async def analyze_text(self, text: str) -> dict[str, object]:
        self.calls += 1
        raise RuntimeError("nutrition API unavailable")


@dataclass
class FakeFoodImageClient(FoodImageClient):
    """Fake image client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "calories": 640,
            "protein": 28,
            "carbs": 70,
            "fat": 24,
            "description": "Cheeseburger with fries",
        }
    )
    data_urls: list[str] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.data_urls.append(image_data_url)
        return self.payload


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    entries: dict[UUID, list[WeightEntry]] = field(default_factory=dict)

    def list_entries(self, user_id: UUID) -> list[WeightEntry]:
        return list(self.entries.get(user_id, []))


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, GoalRecord] = field(default_factory=dict)

    def get_current_goal(self, user_id: UUID) -> GoalRecord | None:
        return self.goals.get(user_id)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, list[MealRecord]] = field(default_factory=dict)
    windows: list[tuple[datetime, datetime]] = field(default_factory=list)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        self.windows.append((start, end))
        return list(self.meals.get(user_id, []))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_token="api-token",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def container(
    settings: Settings,
    weight_repository: InMemoryWeightRepository,
    goal_repository: InMemoryGoalRepository,
    meal_repository: InMemoryMealRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        recommender=CalorieRecommender(),
        meal_analysis_service=MealAnalysisService(estimator=MealTextEstimator()),
        food_image_service=FoodImageService(
            client=FakeFoodImageClient(),
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        weight_progress_service=WeightProgressService(
            weight_repository=weight_repository,
            goal_repository=goal_repository,
        ),
        meal_summary_service=MealSummaryService(meal_repository),
        close_resources=close_resources,
    )
