"""Supabase-backed weight entry repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from niblet.dates import as_utc
from niblet.domain.weight import WeightEntry
from niblet.services.weight import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for reading weight entries."""

    client: Client

    def list_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return all weight entries of a user, oldest first."""
        response = (
            self.client.table("weight_entries")
            .select("date, weight, unit, notes")
            .eq("user_id", str(user_id))
            .order("date")
            .execute()
        )
        return [
            WeightEntry(
                date=as_utc(datetime.fromisoformat(row["date"])),
                weight=float(row["weight"]),
                unit=row.get("unit") or "lbs",
                notes=row.get("notes"),
            )
            for row in response.data or []
        ]
