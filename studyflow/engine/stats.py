"""Statistics aggregation over the task collection."""

import logging
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional

from ..models.stats import HourProductivity, TaskStats
from ..models.task import Task
from ..utils.config import DEFAULT_CATEGORIES
from ..utils.datetime_utils import ensure_aware, now_utc, to_local
from .procrastination import average_procrastination

logger = logging.getLogger(__name__)


BEST_HOURS_COUNT = 5


class StatisticsAggregator:
    """Recomputes TaskStats from a snapshot of the full task collection."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize aggregator with configuration."""
        config = config or {}
        self.categories = list(config.get('categories') or DEFAULT_CATEGORIES)
        self.best_hours_count = config.get('stats', {}).get('best_hours_count', BEST_HOURS_COUNT)

    def compute(
        self,
        tasks: Iterable[Task],
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> TaskStats:
        """Compute summary statistics for the given tasks."""
        tasks = list(tasks)
        now = ensure_aware(now or now_utc())

        completed = [t for t in tasks if t.is_completed]
        overdue = [t for t in tasks if not t.is_completed and t.deadline < now]

        stats = TaskStats(
            total_tasks=len(tasks),
            completed_tasks=len(completed),
            overdue_tasks=len(overdue),
            average_procrastination=average_procrastination(completed),
            best_working_hours=self._compute_best_working_hours(completed, tz),
            category_breakdown=self._compute_category_breakdown(tasks),
        )
        logger.debug(
            f"Stats recomputed: {stats.total_tasks} total, "
            f"{stats.completed_tasks} completed, {stats.overdue_tasks} overdue"
        )
        return stats

    def _compute_best_working_hours(
        self,
        completed: List[Task],
        tz: Optional[tzinfo],
    ) -> List[HourProductivity]:
        """Top hours of the day by number of completions."""
        hour_counts: Dict[int, int] = {}
        for task in completed:
            if task.completed_at is None:
                continue
            hour = to_local(task.completed_at, tz).hour
            hour_counts[hour] = hour_counts.get(hour, 0) + 1

        # Ties broken by earlier hour
        ranked = sorted(hour_counts.items(), key=lambda item: (-item[1], item[0]))
        return [
            HourProductivity(hour=hour, productivity=count)
            for hour, count in ranked[:self.best_hours_count]
        ]

    def _compute_category_breakdown(self, tasks: List[Task]) -> Dict[str, int]:
        """Task count per category, zero-filled over the configured set."""
        breakdown = {category: 0 for category in self.categories}
        for task in tasks:
            breakdown[task.category] = breakdown.get(task.category, 0) + 1
        return breakdown


def compute_stats(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
    categories: Optional[List[str]] = None,
    tz: Optional[tzinfo] = None,
) -> TaskStats:
    """Convenience wrapper around StatisticsAggregator."""
    config = {'categories': categories} if categories else {}
    return StatisticsAggregator(config).compute(tasks, now=now, tz=tz)
