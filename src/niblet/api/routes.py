"""API endpoints protected by a shared API token."""

from __future__ import annotations

import base64
import binascii
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    status,
)

from niblet.api.models import (
    AnalyzeImageRequest,
    AnalyzeTextRequest,
    CalculateCaloriesRequest,
    DailyMealSummaryOut,
    NutritionEstimateOut,
    RecommendationOut,
    WeightProgressOut,
)
from niblet.errors import InvalidInputError

if TYPE_CHECKING:
    from pydantic import BaseModel

    from niblet.containers import AppContainer

router = APIRouter(prefix="/api")


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to access this route",
        )


def _success(model: BaseModel) -> dict[str, object]:
    return {"success": True, "data": model.model_dump(by_alias=True, mode="json")}


@router.post(
    "/goals/calculate-calories", tags=["goals"], dependencies=[Depends(require_token)]
)
async def calculate_calories(
    body: CalculateCaloriesRequest, request: Request
) -> dict[str, object]:
    """Calculate recommended daily calories and macros."""
    container: AppContainer = request.app.state.container
    result = container.recommender.recommend(body.biometrics(), body.goal())
    return _success(RecommendationOut.model_validate(result))


@router.post(
    "/meals/analyze-text", tags=["meals"], dependencies=[Depends(require_token)]
)
async def analyze_meal_text(
    body: AnalyzeTextRequest, request: Request
) -> dict[str, object]:
    """Estimate nutrition for a meal description."""
    container: AppContainer = request.app.state.container
    estimate = await container.meal_analysis_service.analyze_text(body.text)
    return _success(NutritionEstimateOut.model_validate(estimate))


@router.post(
    "/meals/analyze-image", tags=["meals"], dependencies=[Depends(require_token)]
)
async def analyze_meal_image(
    body: AnalyzeImageRequest, request: Request
) -> dict[str, object]:
    """Estimate nutrition for a base64-encoded meal photo."""
    container: AppContainer = request.app.state.container
    image_bytes = _decode_image(
        body.image_base64, container.settings.max_image_bytes
    )
    estimate = await container.food_image_service.analyze_image(image_bytes)
    return _success(NutritionEstimateOut.model_validate(estimate))


@router.get(
    "/users/{user_id}/weight/progress",
    tags=["weight"],
    dependencies=[Depends(require_token)],
)
async def weight_progress(user_id: UUID, request: Request) -> dict[str, object]:
    """Return weight statistics and progress toward the current goal."""
    container: AppContainer = request.app.state.container
    report = container.weight_progress_service.get_progress(user_id)
    return _success(WeightProgressOut.model_validate(report))


@router.get(
    "/users/{user_id}/meals/summary",
    tags=["meals"],
    dependencies=[Depends(require_token)],
)
async def meal_summary(
    user_id: UUID,
    request: Request,
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
) -> dict[str, object]:
    """Return per-day meal totals, by default for the last seven days."""
    container: AppContainer = request.app.state.container
    summary = container.meal_summary_service.get_summary(
        user_id, start_date, end_date
    )
    return {
        "success": True,
        "count": len(summary),
        "data": [
            DailyMealSummaryOut.model_validate(day).model_dump(
                by_alias=True, mode="json"
            )
            for day in summary
        ],
    }

def _decode_image(image_base64: str | None, max_bytes: int) -> bytes:
    if not image_base64:
        raise InvalidInputError("Please provide a meal image to analyze")
    try:
        data = base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise InvalidInputError(f"Image too large: {len(data)} bytes > {max_bytes}")
    return data
