"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bp_tracker.api.admin import router as admin_router
from bp_tracker.api.schemas import ImportRequest, ReadingCreate
from bp_tracker.app_logging import configure_logging
from bp_tracker.containers import AppContainer
from bp_tracker.domain.classification import ClassificationResult
from bp_tracker.domain.gamification import LevelProgress
from bp_tracker.domain.notifications import ReminderPlan
from bp_tracker.domain.readings import Reading
from bp_tracker.domain.streaks import InvalidReadingError, StreakResult
from bp_tracker.domain.trends import WeeklyTrend


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting blood pressure tracker",
            extra={"environment": container.settings.environment},
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(InvalidReadingError)
    async def invalid_reading_handler(
        request: Request, exc: InvalidReadingError
    ) -> JSONResponse:
        logger.warning("Rejected invalid reading data: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/classify")
    async def classify_reading(
        systolic: float, diastolic: float, request: Request
    ) -> dict[str, object]:
        """Classify a single systolic/diastolic pair."""
        state_container: AppContainer = request.app.state.container
        result = state_container.stats_service.classify(systolic, diastolic)
        return _format_classification(result)

    @app.get("/readings")
    async def list_readings(request: Request) -> dict[str, object]:
        """Return merged manual and synced readings, oldest first."""
        state_container: AppContainer = request.app.state.container
        readings = state_container.reading_service.list_readings()
        return {"readings": [_format_reading(reading) for reading in readings]}

    @app.post("/readings", status_code=status.HTTP_201_CREATED)
    async def add_reading(
        payload: ReadingCreate, request: Request
    ) -> dict[str, object]:
        """Log a manual reading."""
        state_container: AppContainer = request.app.state.container
        timestamp = payload.timestamp
        if timestamp is None:
            timestamp = int(datetime.now(tz=UTC).timestamp() * 1000)
        saved = state_container.reading_service.add_reading(
            systolic=payload.systolic,
            diastolic=payload.diastolic,
            timestamp=timestamp,
            note=payload.note,
        )
        return {
            "reading": _format_reading(saved),
            "classification": _format_classification(
                state_container.stats_service.classify(saved.systolic, saved.diastolic)
            ),
        }

    @app.post("/readings/import")
    async def import_readings(
        payload: ImportRequest, request: Request
    ) -> dict[str, int]:
        """Store readings synced from the health-data provider."""
        state_container: AppContainer = request.app.state.container
        imported = state_container.reading_service.import_synced_readings(
            Reading(
                systolic=entry.systolic,
                diastolic=entry.diastolic,
                timestamp=entry.timestamp,
                note=entry.note,
            )
            for entry in payload.readings
        )
        return {"imported": imported}

    @app.get("/stats")
    async def stats(request: Request) -> dict[str, int]:
        """Return activity and healthy streaks."""
        state_container: AppContainer = request.app.state.container
        return _format_streaks(state_container.stats_service.get_stats())

    @app.get("/stats/streak")
    async def streak(request: Request) -> dict[str, int]:
        """Return the current activity streak only."""
        state_container: AppContainer = request.app.state.container
        return {"current_streak": state_container.stats_service.get_streak()}

    @app.get("/stats/weekly")
    async def weekly(request: Request, offset: int = 0) -> dict[str, object]:
        """Return the weekly trend, ``offset`` weeks back from this week."""
        state_container: AppContainer = request.app.state.container
        trend = state_container.stats_service.get_weekly_trend(week_offset=offset)
        return _format_trend(trend)

    @app.get("/progress")
    async def progress(request: Request) -> dict[str, object]:
        """Return XP and level progress."""
        state_container: AppContainer = request.app.state.container
        return _format_progress(state_container.stats_service.get_progress())

    @app.post("/reminders/plan")
    async def plan_reminders(request: Request) -> dict[str, object]:
        """Plan reminders for the current streak."""
        state_container: AppContainer = request.app.state.container
        return _format_plan(state_container.reminder_service.plan())

    return app


def _format_reading(reading: Reading) -> dict[str, object]:
    return {
        "id": reading.id,
        "systolic": reading.systolic,
        "diastolic": reading.diastolic,
        "timestamp": reading.timestamp,
        "source": reading.source.value,
        "note": reading.note,
    }


def _format_classification(result: ClassificationResult) -> dict[str, object]:
    return {
        "status": result.status.value,
        "color": result.color,
        "is_healthy": result.is_healthy,
    }


def _format_streaks(result: StreakResult) -> dict[str, int]:
    return {
        "current_streak": result.current_streak,
        "best_streak": result.best_streak,
        "current_healthy_streak": result.current_healthy_streak,
        "best_healthy_streak": result.best_healthy_streak,
    }


def _format_trend(trend: WeeklyTrend) -> dict[str, object]:
    return {
        "label": trend.label,
        "start": trend.start.isoformat(),
        "end": trend.end.isoformat(),
        "has_data": trend.has_data,
        "days": [
            {
                "day": entry.day.isoformat(),
                "label": entry.label,
                "systolic": entry.systolic,
                "diastolic": entry.diastolic,
                "status": entry.status.value if entry.status else None,
                "color": entry.color,
            }
            for entry in trend.days
        ],
    }


def _format_progress(progress: LevelProgress) -> dict[str, object]:
    return {
        "xp": progress.xp,
        "level": progress.level,
        "next_level_xp": progress.next_level_xp,
        "progress": progress.progress,
    }


def _format_plan(plan: ReminderPlan) -> dict[str, object]:
    return {
        "congratulated": plan.congratulated,
        "reminders": [
            {
                "title": reminder.title,
                "body": reminder.body,
                "daily_at": (
                    reminder.daily_at.strftime("%H:%M") if reminder.daily_at else None
                ),
            }
            for reminder in plan.reminders
        ],
    }
