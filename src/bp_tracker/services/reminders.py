"""Reminder planning service."""

import logging
from dataclasses import dataclass
from datetime import datetime

from bp_tracker.domain.notifications import ReminderPlan, plan_reminders
from bp_tracker.services.readings import ProgressRepository
from bp_tracker.services.stats import StatsService

logger = logging.getLogger(__name__)


@dataclass
class ReminderService:
    """Plans reminders from the activity streak and stored reminder state."""

    stats_service: StatsService
    progress_repository: ProgressRepository

    def plan(self, now: datetime | None = None) -> ReminderPlan:
        """Plan reminders and record a congratulation when one is included."""
        moment = now or self.stats_service.now()
        streak = self.stats_service.get_streak(moment)
        plan = plan_reminders(
            current_streak=streak,
            last_congratulated_at=self.progress_repository.get_last_congratulated_at(),
            now=moment,
        )
        if plan.congratulated:
            self.progress_repository.set_last_congratulated_at(moment)
            logger.info("Streak congratulation planned", extra={"streak": streak})
        return plan
