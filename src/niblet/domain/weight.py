"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeightEntry:
    """Single body-weight measurement."""

    date: datetime
    weight: float
    unit: str = "lbs"
    notes: str | None = None


@dataclass(frozen=True)
class GoalRecord:
    """Most recent weight goal of a user."""

    goal_weight: float
    current_weight: float
    target_date: datetime
    created_at: datetime


@dataclass(frozen=True)
class WeightStats:
    """Aggregate statistics over all weight entries of a user."""

    current: float
    starting: float
    lowest: float
    highest: float
    total_entries: int
    first_date: datetime
    last_date: datetime
    net_change: float


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward a weight goal."""

    current: float
    starting: float
    target: float
    target_date: datetime
    progress_percentage: float
    projected_completion_date: datetime | None


@dataclass(frozen=True)
class WeightProgressReport:
    """Weight statistics together with goal progress, when a goal exists."""

    stats: WeightStats | None
    goal: GoalProgress | None
