"""Supabase-backed goal repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from niblet.dates import as_utc
from niblet.domain.weight import GoalRecord
from niblet.services.weight import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for reading weight goals."""

    client: Client

    def get_current_goal(self, user_id: UUID) -> GoalRecord | None:
        """Return the most recently created goal of a user."""
        response = (
            self.client.table("goals")
            .select("goal_weight, current_weight, target_date, created_at")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return GoalRecord(
            goal_weight=float(row["goal_weight"]),
            current_weight=float(row["current_weight"]),
            target_date=as_utc(datetime.fromisoformat(row["target_date"])),
            created_at=as_utc(datetime.fromisoformat(row["created_at"])),
        )
