"""Meal text analysis backed by an optional external nutrition API."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel, Field

from niblet.domain.nutrition import NutritionEstimate
from niblet.errors import InvalidInputError
from niblet.rounding import round_half_up
from niblet.services.estimator import MealTextEstimator

_logger = logging.getLogger(__name__)


class NutritionAnalysisClient(Protocol):
    """Interface for third-party meal text analysis."""

    async def analyze_text(self, text: str) -> dict[str, object]:
        """Return raw nutrition data for a meal description."""


class NutritionPayload(BaseModel):
    """Nutrition values returned by an analysis backend."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    description: str | None = None

    def to_estimate(self, fallback_description: str) -> NutritionEstimate:
        """Convert to the estimate shape produced by the heuristic."""
        return NutritionEstimate(
            calories=round_half_up(self.calories),
            protein=round_half_up(self.protein),
            carbs=round_half_up(self.carbs),
            fat=round_half_up(self.fat),
            description=self.description or fallback_description,
        )


@dataclass
class MealAnalysisService:
    """Analyzes meal text, degrading to the heuristic when the API fails."""

    estimator: MealTextEstimator
    client: NutritionAnalysisClient | None = None
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def analyze_text(self, text: str | None) -> NutritionEstimate:
        """Return a nutrition estimate for a meal description."""
        if text is None or not text.strip():
            raise InvalidInputError("Please provide meal text to analyze")
        if self.client is None:
            return self.estimator.estimate(text)

        try:
            raw = await self._call_with_retry(text)
            return NutritionPayload.model_validate(raw).to_estimate(text)
        except Exception:
            _logger.exception("External meal analysis failed, using estimate")
            return self.estimator.estimate_without_foods(text)

    async def _call_with_retry(self, text: str) -> dict[str, object]:
        """Call the analysis client with a short retry."""
        attempt = 0
        while True:
            try:
                return await self.client.analyze_text(text)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Meal analysis failed (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)
