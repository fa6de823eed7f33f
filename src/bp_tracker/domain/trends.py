"""Weekly trend of averaged daily readings."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from bp_tracker.domain.classification import (
    DEFAULT_THRESHOLDS,
    STATUS_COLORS,
    BPStatus,
    Thresholds,
)
from bp_tracker.domain.readings import Reading
from bp_tracker.domain.streaks import aggregate_days, local_day

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class TrendDay:
    """One day of the weekly trend; values are None when nothing was logged."""

    day: date
    label: str
    systolic: float | None = None
    diastolic: float | None = None
    status: BPStatus | None = None
    color: str | None = None

    @property
    def has_reading(self) -> bool:
        return self.status is not None


@dataclass(frozen=True)
class WeeklyTrend:
    """Seven days starting on Sunday."""

    start: date
    end: date
    label: str
    days: list[TrendDay]

    @property
    def has_data(self) -> bool:
        return any(entry.has_reading for entry in self.days)


def week_start(day: date, week_offset: int = 0) -> date:
    """Return the Sunday starting the week ``week_offset`` weeks before ``day``."""
    days_since_sunday = (day.weekday() + 1) % DAYS_IN_WEEK
    return day - timedelta(days=days_since_sunday + DAYS_IN_WEEK * week_offset)


def weekly_trend(
    readings: Iterable[Reading],
    now: datetime,
    week_offset: int = 0,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> WeeklyTrend:
    """Build the daily averages for one week.

    Day statuses use the same aggregation and thresholds as the streak
    engine.
    """
    start = week_start(now.date(), max(week_offset, 0))
    end = start + timedelta(days=DAYS_IN_WEEK - 1)
    in_week = [
        reading
        for reading in readings
        if start <= local_day(reading.timestamp, now.tzinfo) <= end
    ]
    by_day = {
        entry.day: entry for entry in aggregate_days(in_week, now.tzinfo, thresholds)
    }

    days = []
    for offset in range(DAYS_IN_WEEK):
        day = start + timedelta(days=offset)
        aggregate = by_day.get(day)
        if aggregate is None:
            days.append(TrendDay(day=day, label=_format_day(day)))
            continue
        days.append(
            TrendDay(
                day=day,
                label=_format_day(day),
                systolic=aggregate.average_systolic,
                diastolic=aggregate.average_diastolic,
                status=aggregate.status,
                color=STATUS_COLORS[aggregate.status],
            )
        )

    return WeeklyTrend(
        start=start,
        end=end,
        label=f"{_format_day(start)} - {_format_day(end)}",
        days=days,
    )


def _format_day(day: date) -> str:
    return f"{day:%b} {day.day}"
