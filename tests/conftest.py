"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

import pytest

from bp_tracker.config import Settings
from bp_tracker.containers import AppContainer
from bp_tracker.domain.readings import Reading, ReadingSource
from bp_tracker.services.readings import (
    ProgressRepository,
    ReadingRepository,
    ReadingService,
)
from bp_tracker.services.reminders import ReminderService
from bp_tracker.services.stats import StatsService

NOW = datetime(2024, 3, 14, 18, 30, tzinfo=UTC)


def make_reading(  # noqa: PLR0913
    days_ago: int,
    systolic: int = 115,
    diastolic: int = 75,
    *,
    hour: int = 12,
    now: datetime = NOW,
    source: ReadingSource = ReadingSource.MANUAL,
) -> Reading:
    """Build a reading ``days_ago`` local days before ``now`` at ``hour``."""
    moment = (now - timedelta(days=days_ago)).replace(
        hour=hour, minute=0, second=0, microsecond=0
    )
    return Reading(
        systolic=systolic,
        diastolic=diastolic,
        timestamp=int(moment.timestamp() * 1000),
        source=source,
    )


@dataclass
class InMemoryReadingRepository(ReadingRepository):
    """In-memory reading repository for tests."""

    readings: list[Reading] = field(default_factory=list)

    def list_readings(self, source: ReadingSource | None = None) -> list[Reading]:
        return [
            reading
            for reading in self.readings
            if source is None or reading.source == source
        ]

    def add_reading(self, reading: Reading) -> Reading:
        saved = replace(reading, id=str(len(self.readings) + 1))
        self.readings.append(saved)
        return saved

    def add_readings(self, readings: list[Reading]) -> None:
        for reading in readings:
            self.add_reading(reading)

    def clear_readings(self) -> None:
        self.readings.clear()


@dataclass
class InMemoryProgressRepository(ProgressRepository):
    """In-memory progress repository for tests."""

    xp: int = 0
    last_congratulated_at: datetime | None = None

    def get_xp(self) -> int:
        return self.xp

    def add_xp(self, amount: int) -> int:
        self.xp += amount
        return self.xp

    def get_last_congratulated_at(self) -> datetime | None:
        return self.last_congratulated_at

    def set_last_congratulated_at(self, moment: datetime) -> None:
        self.last_congratulated_at = moment

    def clear_progress(self) -> None:
        self.xp = 0
        self.last_congratulated_at = None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def reading_repository() -> InMemoryReadingRepository:
    return InMemoryReadingRepository()


@pytest.fixture
def progress_repository() -> InMemoryProgressRepository:
    return InMemoryProgressRepository()


@pytest.fixture
def reading_service(
    reading_repository: InMemoryReadingRepository,
    progress_repository: InMemoryProgressRepository,
) -> ReadingService:
    return ReadingService(
        reading_repository=reading_repository,
        progress_repository=progress_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    reading_service: ReadingService,
    progress_repository: InMemoryProgressRepository,
) -> AppContainer:
    stats_service = StatsService(
        reading_service=reading_service,
        timezone_name=settings.timezone,
        thresholds=settings.thresholds(),
    )
    reminder_service = ReminderService(
        stats_service=stats_service,
        progress_repository=progress_repository,
    )
    return AppContainer(
        settings=settings,
        reading_service=reading_service,
        stats_service=stats_service,
        reminder_service=reminder_service,
    )
