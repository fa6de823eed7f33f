"""Reminder planning driven by the activity streak."""

from dataclasses import dataclass, field
from datetime import datetime, time

DAILY_CHECK_IN_TIME = time(hour=9, minute=0)
MOTIVATION_MIN_STREAK = 3


@dataclass(frozen=True)
class Reminder:
    """A notification to schedule; ``daily_at=None`` means send now."""

    title: str
    body: str
    daily_at: time | None = None


@dataclass(frozen=True)
class ReminderPlan:
    """Reminders to schedule and whether a congratulation was included."""

    reminders: list[Reminder] = field(default_factory=list)
    congratulated: bool = False


def daily_check_in() -> Reminder:
    return Reminder(
        title="Hypertension Check-in",
        body="Take a moment to measure your blood pressure. Consistency is key!",
        daily_at=DAILY_CHECK_IN_TIME,
    )


def motivational_reminder(current_streak: int) -> Reminder:
    return Reminder(
        title="Keep it up!",
        body=f"You've been tracking for {current_streak} days in a row!",
    )


def plan_reminders(
    current_streak: int, last_congratulated_at: datetime | None, now: datetime
) -> ReminderPlan:
    """Plan reminders for the current streak.

    A congratulation is sent at most once per local calendar day and only
    once the streak reaches ``MOTIVATION_MIN_STREAK`` days.
    """
    reminders = [daily_check_in()]
    congratulate = current_streak >= MOTIVATION_MIN_STREAK and not _same_local_day(
        last_congratulated_at, now
    )
    if congratulate:
        reminders.append(motivational_reminder(current_streak))
    return ReminderPlan(reminders=reminders, congratulated=congratulate)


def _same_local_day(moment: datetime | None, now: datetime) -> bool:
    if moment is None:
        return False
    if moment.tzinfo is not None and now.tzinfo is not None:
        moment = moment.astimezone(now.tzinfo)
    return moment.date() == now.date()
