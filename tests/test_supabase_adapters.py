"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from niblet.adapters.supabase_goal_repository import SupabaseGoalRepository
from niblet.adapters.supabase_meal_repository import SupabaseMealRepository
from niblet.adapters.supabase_weight_repository import SupabaseWeightRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: list[dict[str, object]] = field(default_factory=list)
    filters: list[tuple[str, object]] = field(default_factory=list)
    orders: list[tuple[str, bool]] = field(default_factory=list)
    limit_count: int | None = None

    def select(self, *_args) -> "FakeTable":
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append((f"{column}>=", value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append((f"{column}<=", value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.limit_count = count
        return self

    def execute(self) -> FakeResponse:
        return FakeResponse(data=self.rows)


@dataclass
class FakeClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable(name))


def test_weight_repository_maps_rows() -> None:
    client = FakeClient()
    client.table("weight_entries").rows = [
        {"date": "2026-01-01T08:00:00+00:00", "weight": 201.5, "unit": "lbs"},
        {"date": "2026-01-02T08:00:00+00:00", "weight": "200", "notes": "gym"},
    ]
    user_id = uuid4()

    entries = SupabaseWeightRepository(client).list_entries(user_id)

    table = client.tables["weight_entries"]
    assert table.filters == [("user_id", str(user_id))]
    assert table.orders == [("date", False)]
    assert entries[0].date == datetime(2026, 1, 1, 8, tzinfo=UTC)
    assert entries[0].weight == 201.5
    assert entries[1].weight == 200.0
    assert entries[1].unit == "lbs"
    assert entries[1].notes == "gym"


def test_goal_repository_returns_latest_goal() -> None:
    client = FakeClient()
    client.table("goals").rows = [
        {
            "goal_weight": 180,
            "current_weight": 200,
            "target_date": "2026-06-01T00:00:00+00:00",
            "created_at": "2026-01-01T00:00:00+00:00",
        }
    ]

    goal = SupabaseGoalRepository(client).get_current_goal(uuid4())

    table = client.tables["goals"]
    assert table.orders == [("created_at", True)]
    assert table.limit_count == 1
    assert goal is not None
    assert goal.goal_weight == 180.0
    assert goal.created_at == datetime(2026, 1, 1, tzinfo=UTC)


def test_goal_repository_reads_naive_timestamps_as_utc() -> None:
    client = FakeClient()
    client.table("goals").rows = [
        {
            "goal_weight": 180,
            "current_weight": 200,
            "target_date": "2026-06-01T00:00:00",
            "created_at": "2026-01-01T09:30:00",
        }
    ]

    goal = SupabaseGoalRepository(client).get_current_goal(uuid4())

    assert goal is not None
    assert goal.target_date == datetime(2026, 6, 1, tzinfo=UTC)
    assert goal.created_at == datetime(2026, 1, 1, 9, 30, tzinfo=UTC)


def test_goal_repository_without_rows() -> None:
    client = FakeClient()

    assert SupabaseGoalRepository(client).get_current_goal(uuid4()) is None


def test_meal_repository_filters_by_range() -> None:
    client = FakeClient()
    client.table("meals").rows = [
        {
            "date": "2026-03-09T08:00:00+00:00",
            "calories": 350,
            "protein": 15,
            "carbs": "35",
            "fat": None,
        },
        {"date": "2026-03-10T12:00:00", "calories": 600},
    ]
    user_id = uuid4()
    start = datetime(2026, 3, 4, tzinfo=UTC)
    end = datetime(2026, 3, 10, 23, 59, 59, tzinfo=UTC)

    meals = SupabaseMealRepository(client).list_meals(user_id, start, end)

    table = client.tables["meals"]
    assert table.filters == [
        ("user_id", str(user_id)),
        ("date>=", start.isoformat()),
        ("date<=", end.isoformat()),
    ]
    assert table.orders == [("date", False)]
    assert meals[0].calories == 350.0
    assert meals[0].carbs == 35.0
    assert meals[0].fat == 0.0
    assert meals[1].date == datetime(2026, 3, 10, 12, tzinfo=UTC)
    assert meals[1].protein == 0.0
