"""Statistics service for reading histories."""

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from bp_tracker.domain.classification import (
    DEFAULT_THRESHOLDS,
    ClassificationResult,
    Thresholds,
    classify,
)
from bp_tracker.domain.gamification import LevelProgress, level_progress
from bp_tracker.domain.streaks import (
    StreakResult,
    compute_simple_streak,
    compute_stats,
)
from bp_tracker.domain.trends import WeeklyTrend, weekly_trend
from bp_tracker.services.readings import ReadingService


@dataclass
class StatsService:
    """Service for computing streaks and trends in the user's timezone."""

    reading_service: ReadingService
    timezone_name: str = "UTC"
    thresholds: Thresholds = DEFAULT_THRESHOLDS

    def now(self) -> datetime:
        """Return the current moment in the user's timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def classify(self, systolic: float, diastolic: float) -> ClassificationResult:
        """Classify a single reading with the configured thresholds."""
        return classify(systolic, diastolic, self.thresholds)

    def get_stats(self, now: datetime | None = None) -> StreakResult:
        """Return activity and healthy streaks."""
        readings = self.reading_service.list_readings()
        return compute_stats(readings, now or self.now(), self.thresholds)

    def get_streak(self, now: datetime | None = None) -> int:
        """Return the current activity streak."""
        readings = self.reading_service.list_readings()
        return compute_simple_streak(readings, now or self.now())

    def get_weekly_trend(
        self, week_offset: int = 0, now: datetime | None = None
    ) -> WeeklyTrend:
        """Return daily averages for a week, counting back from this week."""
        readings = self.reading_service.list_readings()
        return weekly_trend(readings, now or self.now(), week_offset, self.thresholds)

    def get_progress(self) -> LevelProgress:
        """Return XP level progress."""
        return level_progress(self.reading_service.get_xp())
