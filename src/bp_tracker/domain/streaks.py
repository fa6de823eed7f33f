"""Day aggregation and streak computation for reading histories.

All functions are pure. The caller captures ``now`` once and passes it in;
an aware ``now`` defines the local time zone used for calendar days, a naive
``now`` means system local time.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from itertools import pairwise

from bp_tracker.domain.classification import (
    DEFAULT_THRESHOLDS,
    BPStatus,
    Thresholds,
    classify_status,
    is_healthy,
)
from bp_tracker.domain.readings import Reading

# Two days form a run when they are exactly this many calendar days apart.
CONSECUTIVE_GAP_DAYS = 1
# A run is still current when its latest day is at most this far before today.
MAX_ACTIVE_GAP_DAYS = 1


class InvalidReadingError(ValueError):
    """Raised when a reading timestamp cannot be mapped to a calendar day."""


@dataclass(frozen=True)
class DayAggregate:
    """Averaged readings for one local calendar day."""

    day: date
    average_systolic: float
    average_diastolic: float
    count: int
    status: BPStatus

    @property
    def is_healthy(self) -> bool:
        return is_healthy(self.status)


@dataclass(frozen=True)
class StreakResult:
    """Activity and healthy streaks, in days."""

    current_streak: int = 0
    best_streak: int = 0
    current_healthy_streak: int = 0
    best_healthy_streak: int = 0


def local_day(timestamp_ms: float, tz: tzinfo | None) -> date:
    """Return the local calendar day of a millisecond timestamp.

    ``tz=None`` uses the system local time zone.
    """
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=tz).date()
    except (ValueError, OverflowError, OSError) as exc:
        raise InvalidReadingError(
            f"Invalid reading timestamp: {timestamp_ms!r}"
        ) from exc


def aggregate_days(
    readings: Iterable[Reading],
    tz: tzinfo | None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> list[DayAggregate]:
    """Group readings by local day and classify each day's average.

    Returns days sorted most recent first.
    """
    totals: dict[date, tuple[float, float, int]] = {}
    for reading in readings:
        day = local_day(reading.timestamp, tz)
        systolic, diastolic, count = totals.get(day, (0, 0, 0))
        totals[day] = (
            systolic + reading.systolic,
            diastolic + reading.diastolic,
            count + 1,
        )

    days = []
    for day, (systolic, diastolic, count) in totals.items():
        average_systolic = systolic / count
        average_diastolic = diastolic / count
        days.append(
            DayAggregate(
                day=day,
                average_systolic=average_systolic,
                average_diastolic=average_diastolic,
                count=count,
                status=classify_status(
                    average_systolic, average_diastolic, thresholds
                ),
            )
        )
    days.sort(key=lambda entry: entry.day, reverse=True)
    return days


def compute_stats(
    readings: Iterable[Reading],
    now: datetime,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> StreakResult:
    """Compute activity and healthy streaks for a reading history."""
    days = aggregate_days(readings, now.tzinfo, thresholds)
    if not days:
        return StreakResult()

    today = now.date()
    dates = [entry.day for entry in days]
    return StreakResult(
        current_streak=_current_streak(dates, today),
        best_streak=_best_streak(dates),
        current_healthy_streak=_current_healthy_streak(days, today),
        best_healthy_streak=_best_healthy_streak(days),
    )


def compute_simple_streak(readings: Iterable[Reading], now: datetime) -> int:
    """Return only the current activity streak, skipping classification."""
    dates = sorted(
        {local_day(reading.timestamp, now.tzinfo) for reading in readings},
        reverse=True,
    )
    if not dates:
        return 0
    return _current_streak(dates, now.date())


def _is_consecutive(newer: date, older: date) -> bool:
    return (newer - older).days == CONSECUTIVE_GAP_DAYS


def _is_active(latest: date, today: date) -> bool:
    return (today - latest).days <= MAX_ACTIVE_GAP_DAYS


def _best_streak(dates: Sequence[date]) -> int:
    best = run = 1
    for newer, older in pairwise(dates):
        run = run + 1 if _is_consecutive(newer, older) else 1
        best = max(best, run)
    return best


def _current_streak(dates: Sequence[date], today: date) -> int:
    if not _is_active(dates[0], today):
        return 0
    streak = 1
    for newer, older in pairwise(dates):
        if not _is_consecutive(newer, older):
            break
        streak += 1
    return streak


def _best_healthy_streak(days: Sequence[DayAggregate]) -> int:
    best = run = 0
    newer: DayAggregate | None = None
    for entry in days:
        if not entry.is_healthy:
            run = 0
        elif (
            newer is not None
            and newer.is_healthy
            and _is_consecutive(newer.day, entry.day)
        ):
            run += 1
        else:
            run = 1
        best = max(best, run)
        newer = entry
    return best


def _current_healthy_streak(days: Sequence[DayAggregate], today: date) -> int:
    latest = days[0]
    if not _is_active(latest.day, today) or not latest.is_healthy:
        return 0
    streak = 1
    for newer, older in pairwise(days):
        if not (_is_consecutive(newer.day, older.day) and older.is_healthy):
            break
        streak += 1
    return streak
