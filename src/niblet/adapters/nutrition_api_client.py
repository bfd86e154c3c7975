"""Third-party nutrition analysis API client."""

from dataclasses import dataclass

import httpx

from niblet.services.analysis import NutritionAnalysisClient


@dataclass
class HttpxNutritionApiClient(NutritionAnalysisClient):
    """HTTPX-backed client for a text nutrition analysis API."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxNutritionApiClient":
        """Create a client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def analyze_text(self, text: str) -> dict[str, object]:
        """Analyze a meal description."""
        response = await self.http_client.post(
            f"{self.base_url}/analyze",
            json={"text": text, "apiKey": self.api_key},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
