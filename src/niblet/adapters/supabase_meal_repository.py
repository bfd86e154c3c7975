"""Supabase-backed meal repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from niblet.dates import as_utc
from niblet.domain.meals import MealRecord
from niblet.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for reading logged meals."""

    client: Client

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged in the time range, oldest first."""
        response = (
            self.client.table("meals")
            .select("date, calories, protein, carbs, fat")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date")
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        date=as_utc(datetime.fromisoformat(str(row["date"]))),
        calories=float(row.get("calories") or 0),
        protein=float(row.get("protein") or 0),
        carbs=float(row.get("carbs") or 0),
        fat=float(row.get("fat") or 0),
    )
