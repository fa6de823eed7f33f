"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from bp_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from bp_tracker.adapters.supabase_reading_repository import (
    SupabaseReadingRepository,
)
from bp_tracker.config import Settings
from bp_tracker.services.readings import ReadingService
from bp_tracker.services.reminders import ReminderService
from bp_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    reading_service: ReadingService
    stats_service: StatsService
    reminder_service: ReminderService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    progress_repository = SupabaseProgressRepository(supabase_client)
    reading_service = ReadingService(
        reading_repository=SupabaseReadingRepository(supabase_client),
        progress_repository=progress_repository,
    )
    stats_service = StatsService(
        reading_service=reading_service,
        timezone_name=resolved_settings.timezone,
        thresholds=resolved_settings.thresholds(),
    )
    reminder_service = ReminderService(
        stats_service=stats_service,
        progress_repository=progress_repository,
    )
    return AppContainer(
        settings=resolved_settings,
        reading_service=reading_service,
        stats_service=stats_service,
        reminder_service=reminder_service,
    )
