"""Reading storage and merging of manual and synced readings."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from bp_tracker.domain.gamification import XP_PER_READING
from bp_tracker.domain.readings import Reading, ReadingSource
from bp_tracker.domain.streaks import local_day

# Readings closer than this are the same measurement.
DUPLICATE_WINDOW_MS = 1000

logger = logging.getLogger(__name__)


class ReadingRepository(Protocol):
    """Persistence interface for readings."""

    def list_readings(self, source: ReadingSource | None = None) -> list[Reading]:
        """Return stored readings, optionally for a single source."""

    def add_reading(self, reading: Reading) -> Reading:
        """Store a reading and return it with its id."""

    def add_readings(self, readings: list[Reading]) -> None:
        """Store several readings at once."""

    def clear_readings(self) -> None:
        """Delete all readings."""


class ProgressRepository(Protocol):
    """Persistence interface for XP and reminder state."""

    def get_xp(self) -> int:
        """Return the accumulated XP."""

    def add_xp(self, amount: int) -> int:
        """Add XP and return the new total."""

    def get_last_congratulated_at(self) -> datetime | None:
        """Return when the user was last congratulated on a streak."""

    def set_last_congratulated_at(self, moment: datetime) -> None:
        """Record a streak congratulation."""

    def clear_progress(self) -> None:
        """Reset XP and reminder state."""


def merge_readings(
    local: Iterable[Reading], synced: Iterable[Reading]
) -> list[Reading]:
    """Merge local and synced readings, preferring local ones.

    Returns readings sorted oldest first.
    """
    local_list = list(local)
    local_timestamps = [reading.timestamp for reading in local_list]
    unique_synced = [
        reading
        for reading in synced
        if not _is_duplicate(reading.timestamp, local_timestamps)
    ]
    return sorted(local_list + unique_synced, key=lambda reading: reading.timestamp)


def _is_duplicate(timestamp: int, known: Iterable[int]) -> bool:
    return any(abs(other - timestamp) < DUPLICATE_WINDOW_MS for other in known)


@dataclass
class ReadingService:
    """Service for logging and listing readings."""

    reading_repository: ReadingRepository
    progress_repository: ProgressRepository

    def add_reading(
        self,
        systolic: int,
        diastolic: int,
        timestamp: int,
        note: str | None = None,
    ) -> Reading:
        """Store a manual reading and award XP.

        Raises InvalidReadingError when the timestamp has no calendar day.
        """
        local_day(timestamp, UTC)
        saved = self.reading_repository.add_reading(
            Reading(
                systolic=systolic,
                diastolic=diastolic,
                timestamp=timestamp,
                source=ReadingSource.MANUAL,
                note=note,
            )
        )
        xp = self.progress_repository.add_xp(XP_PER_READING)
        logger.info("Reading logged", extra={"reading_id": saved.id, "xp": xp})
        return saved

    def import_synced_readings(self, readings: Iterable[Reading]) -> int:
        """Store new readings from the health-data provider and award XP.

        Readings within ``DUPLICATE_WINDOW_MS`` of a stored reading or of an
        earlier one in the batch are skipped, so re-importing a sync batch
        adds nothing. The whole batch is rejected with InvalidReadingError
        when any timestamp has no calendar day. Returns the number stored.
        """
        batch = list(readings)
        for reading in batch:
            local_day(reading.timestamp, UTC)

        known = [
            reading.timestamp for reading in self.reading_repository.list_readings()
        ]
        imported: list[Reading] = []
        for reading in batch:
            if _is_duplicate(reading.timestamp, known):
                continue
            imported.append(replace(reading, source=ReadingSource.HEALTH_CONNECT))
            known.append(reading.timestamp)

        skipped = len(batch) - len(imported)
        if not imported:
            logger.info("No new synced readings", extra={"skipped": skipped})
            return 0
        self.reading_repository.add_readings(imported)
        self.progress_repository.add_xp(XP_PER_READING * len(imported))
        logger.info(
            "Imported synced readings",
            extra={"count": len(imported), "skipped": skipped},
        )
        return len(imported)

    def list_readings(self) -> list[Reading]:
        """Return manual and synced readings merged, oldest first."""
        local = self.reading_repository.list_readings(ReadingSource.MANUAL)
        synced = self.reading_repository.list_readings(ReadingSource.HEALTH_CONNECT)
        return merge_readings(local, synced)

    def get_xp(self) -> int:
        return self.progress_repository.get_xp()

    def clear_all(self) -> None:
        """Delete all readings, XP and reminder state."""
        self.reading_repository.clear_readings()
        self.progress_repository.clear_progress()
        logger.info("Cleared all readings and progress")
