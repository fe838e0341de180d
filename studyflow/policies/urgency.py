"""Urgency ordering policy for focus mode."""

from datetime import datetime
from typing import List, Optional

from ..engine.deadline import is_overdue
from ..models.task import Task
from ..utils.datetime_utils import now_utc
from .base import OrderingPolicy


class UrgencyPolicy(OrderingPolicy):
    """Overdue first, then priority, then nearest deadline."""

    def order_tasks(self, tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
        """Order tasks by urgency without mutating the input."""
        now = now or now_utc()

        def sort_key(task: Task):
            # Primary: overdue before everything else
            overdue_key = 0 if is_overdue(task, now) else 1

            # Secondary: priority (higher first, so negate)
            priority_key = -task.priority.rank

            # Tertiary: deadline (earlier first)
            deadline_key = task.deadline

            return (overdue_key, priority_key, deadline_key)

        return sorted(tasks, key=sort_key)

    def get_policy_name(self) -> str:
        """Return policy name."""
        return "URGENCY"


def sort_tasks_by_urgency(tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
    return UrgencyPolicy().order_tasks(tasks, now)
