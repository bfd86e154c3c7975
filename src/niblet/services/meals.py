"""Daily meal summaries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from niblet.dates import as_utc
from niblet.domain.meals import DailyMealSummary, MealRecord

DEFAULT_SUMMARY_DAYS = 7


class MealRepository(Protocol):
    """Read-only persistence interface for logged meals."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged between ``start`` and ``end`` inclusive."""


@dataclass
class MealSummaryService:
    """Service summarising logged meals per day."""

    repository: MealRepository

    def get_summary(
        self,
        user_id: UUID,
        start_date: date | None = None,
        end_date: date | None = None,
        now: datetime | None = None,
    ) -> list[DailyMealSummary]:
        """Return per-day totals, defaulting to the last seven days.

        An explicit range applies only when both dates are given.
        """
        if start_date is not None and end_date is not None:
            start, end = day_window(start_date, end_date)
        else:
            start, end = default_window(now or datetime.now(tz=UTC))
        meals = self.repository.list_meals(user_id, start, end)
        return compute_daily_summary(meals, start, end)


def day_window(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """Expand a date range to the first and last instant of its days in UTC."""
    start = datetime.combine(start_date, time.min, tzinfo=UTC)
    end = datetime.combine(end_date, time.max, tzinfo=UTC)
    return start, end


def default_window(now: datetime) -> tuple[datetime, datetime]:
    """Return the window covering today and the six days before it."""
    today = as_utc(now).astimezone(UTC).date()
    return day_window(today - timedelta(days=DEFAULT_SUMMARY_DAYS - 1), today)


def compute_daily_summary(
    meals: list[MealRecord], start: datetime, end: datetime
) -> list[DailyMealSummary]:
    """Group meals inside ``[start, end]`` by UTC day, oldest day first.

    Days without meals are omitted.
    """
    start = as_utc(start)
    end = as_utc(end)
    totals: dict[date, DailyMealSummary] = {}
    for meal in meals:
        logged_at = as_utc(meal.date)
        if not start <= logged_at <= end:
            continue
        day = logged_at.astimezone(UTC).date()
        current = totals.get(day) or DailyMealSummary(
            day=day,
            total_calories=0,
            total_protein=0,
            total_carbs=0,
            total_fat=0,
            meal_count=0,
        )
        totals[day] = DailyMealSummary(
            day=day,
            total_calories=current.total_calories + meal.calories,
            total_protein=current.total_protein + meal.protein,
            total_carbs=current.total_carbs + meal.carbs,
            total_fat=current.total_fat + meal.fat,
            meal_count=current.meal_count + 1,
        )
    return [totals[day] for day in sorted(totals)]
