"""Deadline classification and time formatting."""

import math
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from typing import Optional

from ..models.task import Task
from ..utils.datetime_utils import ensure_aware, hours_between, now_utc, to_local


DANGER_HOURS = 6
WARNING_HOURS = 24
REALISTIC_BUFFER = 0.2


class DeadlineStatus(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    OVERDUE = "overdue"


def get_deadline_status(
    deadline: datetime,
    now: Optional[datetime] = None,
    danger_hours: float = DANGER_HOURS,
    warning_hours: float = WARNING_HOURS,
) -> DeadlineStatus:
    """Map a deadline to its urgency tier."""
    hours_until_deadline = hours_between(now or now_utc(), deadline)

    if hours_until_deadline < 0:
        return DeadlineStatus.OVERDUE
    if hours_until_deadline < danger_hours:
        return DeadlineStatus.DANGER
    if hours_until_deadline < warning_hours:
        return DeadlineStatus.WARNING
    return DeadlineStatus.SAFE


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    """Overdue is derived: not completed and past the deadline."""
    if task.is_completed:
        return False
    return get_deadline_status(task.deadline, now) == DeadlineStatus.OVERDUE


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_deadline(
    deadline: datetime,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Human-readable time remaining until (or elapsed since) a deadline."""
    seconds_left = (ensure_aware(deadline) - ensure_aware(now or now_utc())).total_seconds()
    hours_left = seconds_left / 3600

    if hours_left < 0:
        overdue_days = math.floor(-hours_left / 24)
        if overdue_days == 0:
            return "Overdue by hours"
        return f"Overdue by {_plural(overdue_days, 'day')}"

    if hours_left < 1:
        return f"{_plural(math.floor(seconds_left / 60), 'minute')} left"

    if hours_left < 24:
        return f"{_plural(math.floor(hours_left), 'hour')} left"

    days_left = math.floor(hours_left / 24)
    if days_left < 7:
        return f"{_plural(days_left, 'day')} left"

    local = to_local(deadline, tz)
    return f"{local.strftime('%b')} {local.day}"


def format_time_estimate(minutes: int) -> str:
    """Format a duration in minutes as e.g. '45m', '2h' or '1h 30m'."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


def calculate_realistic_start(
    deadline: datetime,
    estimated_minutes: int,
    procrastination_factor: float = 1.0,
    buffer_ratio: float = REALISTIC_BUFFER,
) -> datetime:
    """Latest start time that still meets the deadline at the user's real pace."""
    realistic_minutes = estimated_minutes * procrastination_factor
    total_minutes = realistic_minutes * (1 + buffer_ratio)
    return ensure_aware(deadline) - timedelta(minutes=total_minutes)
