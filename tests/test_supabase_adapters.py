"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from bp_tracker.adapters.supabase_progress_repository import (
    PROGRESS_ROW_ID,
    SupabaseProgressRepository,
)
from bp_tracker.adapters.supabase_reading_repository import (
    SupabaseReadingRepository,
)
from bp_tracker.domain.readings import Reading, ReadingSource


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    @property
    def not_(self) -> "FakeTable":
        self._negate = True
        return self

    def is_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        prefix = "not." if getattr(self, "_negate", False) else ""
        self._negate = False
        self.last_filters.append((f"{prefix}{column}", f"is.{value}"))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_reading_repository_add_and_list() -> None:
    client = FakeSupabaseClient()
    table = client.table("bp_readings")
    row = {
        "id": 7,
        "systolic": 128,
        "diastolic": 84,
        "timestamp_ms": 1_700_000_000_000,
        "source": "manual",
        "note": None,
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseReadingRepository(client)
    saved = repository.add_reading(
        Reading(systolic=128, diastolic=84, timestamp=1_700_000_000_000)
    )
    listed = repository.list_readings(ReadingSource.MANUAL)

    assert saved.id == "7"
    assert table.last_filters == [("source", "manual")]
    assert listed == [saved]


def test_supabase_reading_repository_insert_failure() -> None:
    repository = SupabaseReadingRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.add_reading(Reading(systolic=120, diastolic=80, timestamp=0))


def test_supabase_reading_repository_bulk_insert_and_clear() -> None:
    client = FakeSupabaseClient()
    table = client.table("bp_readings")
    repository = SupabaseReadingRepository(client)

    repository.add_readings(
        [
            Reading(
                systolic=118,
                diastolic=76,
                timestamp=1_000,
                source=ReadingSource.HEALTH_CONNECT,
            )
        ]
    )
    payload = table.last_payload
    repository.clear_readings()

    assert isinstance(payload, list)
    assert payload[0]["source"] == "health_connect"
    assert payload[0]["timestamp_ms"] == 1_000
    assert table.actions == ["insert", "delete"]


def test_supabase_reading_repository_clear_matches_every_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("bp_readings")

    SupabaseReadingRepository(client).clear_readings()

    assert table.actions == ["delete"]
    assert table.last_filters == [("not.id", "is.null")]


def test_supabase_progress_repository_xp() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_progress")
    table.queue("select", [{"xp": 100, "last_congratulated_at": None}])

    repository = SupabaseProgressRepository(client)
    total = repository.add_xp(50)

    assert total == 150
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["id"] == PROGRESS_ROW_ID
    assert table.last_payload["xp"] == 150


def test_supabase_progress_repository_congratulation_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_progress")
    moment = datetime(2024, 3, 14, 18, 30, tzinfo=UTC)
    table.queue(
        "select", [{"xp": 0, "last_congratulated_at": moment.isoformat()}]
    )

    repository = SupabaseProgressRepository(client)

    assert repository.get_last_congratulated_at() == moment
    assert repository.get_last_congratulated_at() is None
    assert repository.get_xp() == 0


def test_supabase_progress_repository_clear() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_progress")

    SupabaseProgressRepository(client).clear_progress()

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["xp"] == 0
    assert table.last_payload["last_congratulated_at"] is None
