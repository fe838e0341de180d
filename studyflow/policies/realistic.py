"""Realistic-start ordering policy."""

from datetime import datetime
from typing import List, Optional

from ..engine.deadline import REALISTIC_BUFFER, calculate_realistic_start
from ..models.task import Task
from .base import OrderingPolicy


class RealisticStartPolicy(OrderingPolicy):
    """Orders tasks by the latest time they can start at the user's real pace."""

    def __init__(self, config: Optional[dict] = None, procrastination_factor: float = 1.0):
        """Initialize policy with the user's current procrastination factor."""
        super().__init__(config)
        self.procrastination_factor = procrastination_factor
        self.buffer_ratio = self.config.get('deadlines', {}).get('realistic_buffer', REALISTIC_BUFFER)

    def latest_start(self, task: Task) -> datetime:
        return calculate_realistic_start(
            task.deadline,
            task.estimated_minutes,
            self.procrastination_factor,
            self.buffer_ratio,
        )

    def order_tasks(self, tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
        """Order by latest realistic start, then priority."""
        def sort_key(task: Task):
            return (self.latest_start(task), -task.priority.rank)

        return sorted(tasks, key=sort_key)

    def get_policy_name(self) -> str:
        """Return policy name."""
        return "REALISTIC-START"
