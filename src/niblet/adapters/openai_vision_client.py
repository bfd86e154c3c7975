"""OpenAI Responses API client for food image recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from niblet.services.vision import FoodImageClient

MEAL_RESPONSE_FORMAT = "meal_nutrition_estimate"


@dataclass
class OpenAIFoodImageClient(FoodImageClient):
    """Food image client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIFoodImageClient":
        """Create an OpenAI food image client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Ask the model for a structured nutrition estimate of the image."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": MEAL_RESPONSE_FORMAT,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty response")
        estimate = json.loads(response.output_text)
        if not isinstance(estimate, dict):
            raise RuntimeError("OpenAI returned a non-object meal estimate")
        missing = [key for key in schema.get("required", []) if key not in estimate]
        if missing:
            raise RuntimeError(f"Meal estimate is missing {', '.join(missing)}")
        return estimate

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
