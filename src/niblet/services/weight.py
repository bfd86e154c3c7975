"""Weight statistics and goal progress."""

import math
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from niblet.dates import as_utc
from niblet.domain.weight import (
    GoalProgress,
    GoalRecord,
    WeightEntry,
    WeightProgressReport,
    WeightStats,
)


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def list_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return all weight entries of a user."""


class GoalRepository(Protocol):
    """Persistence interface for weight goals."""

    def get_current_goal(self, user_id: UUID) -> GoalRecord | None:
        """Return the most recently created goal, if any."""


@dataclass
class WeightProgressService:
    """Service computing weight stats and goal projections."""

    weight_repository: WeightRepository
    goal_repository: GoalRepository

    def get_stats(self, user_id: UUID) -> WeightStats | None:
        """Return statistics over all weight entries of a user."""
        return compute_stats(self.weight_repository.list_entries(user_id))

    def get_progress(
        self, user_id: UUID, now: datetime | None = None
    ) -> WeightProgressReport:
        """Return weight stats and progress toward the current goal."""
        stats = self.get_stats(user_id)
        goal = self.goal_repository.get_current_goal(user_id)
        if goal is None:
            return WeightProgressReport(stats=stats, goal=None)
        return WeightProgressReport(
            stats=stats,
            goal=compute_goal_progress(goal, stats, now or datetime.now(tz=UTC)),
        )


def compute_stats(entries: list[WeightEntry]) -> WeightStats | None:
    """Aggregate weight entries, oldest first.

    Naive entry dates are read as UTC.
    """
    if not entries:
        return None
    ordered = sorted(
        (replace(entry, date=as_utc(entry.date)) for entry in entries),
        key=lambda entry: entry.date,
    )
    weights = [entry.weight for entry in ordered]
    return WeightStats(
        current=weights[-1],
        starting=weights[0],
        lowest=min(weights),
        highest=max(weights),
        total_entries=len(ordered),
        first_date=ordered[0].date,
        last_date=ordered[-1].date,
        net_change=weights[-1] - weights[0],
    )


def compute_goal_progress(
    goal: GoalRecord, stats: WeightStats | None, now: datetime
) -> GoalProgress:
    """Project goal completion from the average daily change since the goal."""
    now = as_utc(now)
    current = stats.current if stats else goal.current_weight
    total_to_lose = goal.current_weight - goal.goal_weight
    lost_so_far = goal.current_weight - current
    progress = lost_so_far / total_to_lose * 100 if total_to_lose > 0 else 0.0

    days_elapsed = math.floor((now - as_utc(goal.created_at)) / timedelta(days=1))
    rate = lost_so_far / days_elapsed if days_elapsed > 0 else 0.0
    remaining = current - goal.goal_weight
    projected_days = math.ceil(remaining / rate) if rate > 0 else None

    projected_date = None
    if projected_days:
        projected_date = now + timedelta(days=projected_days)

    return GoalProgress(
        current=current,
        starting=goal.current_weight,
        target=goal.goal_weight,
        target_date=as_utc(goal.target_date),
        progress_percentage=progress,
        projected_completion_date=projected_date,
    )
