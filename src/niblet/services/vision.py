"""Food image recognition with a placeholder fallback."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from niblet.domain.nutrition import NutritionEstimate
from niblet.errors import InvalidInputError
from niblet.services.analysis import NutritionPayload

_logger = logging.getLogger(__name__)

FOOD_IMAGE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "description": {"type": "string"},
    },
    "required": ["calories", "protein", "carbs", "fat", "description"],
    "additionalProperties": False,
}

_PROMPT = (
    "Identify the meal in the image and estimate its total nutrition. "
    "Return calories (kcal), protein, carbs and fat in grams, "
    "and a short description of the food."
)


class FoodImageClient(Protocol):
    """Interface for LLM food image recognition."""

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
        """Return structured nutrition data for an image."""


def placeholder_estimate(description: str = "Food from image") -> NutritionEstimate:
    """Return the fixed estimate used when no recognition is available."""
    return NutritionEstimate(
        calories=350, protein=15, carbs=35, fat=12, description=description
    )


@dataclass
class FoodImageService:
    """Estimates meal nutrition from a photo."""

    client: FoodImageClient | None
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_image(self, image_bytes: bytes) -> NutritionEstimate:
        """Return a nutrition estimate for a meal photo."""
        if not image_bytes:
            raise InvalidInputError("Please provide a meal image to analyze")
        if self.client is None:
            return placeholder_estimate()

        try:
            raw = await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=_to_data_url(image_bytes),
                schema=FOOD_IMAGE_SCHEMA,
                prompt=_PROMPT,
            )
            return NutritionPayload.model_validate(raw).to_estimate("Food from image")
        except Exception:
            _logger.exception("Food image recognition failed")
            return placeholder_estimate("Food from image (estimate)")


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
