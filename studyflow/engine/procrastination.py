"""Procrastination factor estimation."""

import logging
from typing import Iterable, Optional

from ..models.task import Task

logger = logging.getLogger(__name__)


CURRENT_WEIGHT = 0.3
NEW_WEIGHT = 0.7


def completion_ratio(task: Task) -> Optional[float]:
    """Actual/estimated ratio, or None when it is undefined."""
    if task.actual_minutes is None or task.actual_minutes < 0:
        return None
    if not task.estimated_minutes or task.estimated_minutes <= 0:
        return None
    return task.actual_minutes / task.estimated_minutes


def average_procrastination(tasks: Iterable[Task]) -> float:
    """Mean actual/estimated ratio over completed tasks (1.0 without data)."""
    ratios = []
    for task in tasks:
        if not task.is_completed:
            continue
        # A zero actual time carries no signal
        if not task.actual_minutes:
            continue
        ratio = completion_ratio(task)
        if ratio is not None:
            ratios.append(ratio)

    if not ratios:
        return 1.0
    return sum(ratios) / len(ratios)


class ProcrastinationEstimator:
    """Per-user exponentially-weighted estimate of actual vs estimated time."""

    def __init__(
        self,
        factor: float = 1.0,
        current_weight: float = CURRENT_WEIGHT,
        new_weight: float = NEW_WEIGHT,
    ):
        """Initialize estimator with a starting factor and blend weights."""
        self.factor = max(0.0, float(factor))
        self.current_weight = current_weight
        self.new_weight = new_weight

    @classmethod
    def from_config(cls, config: dict, factor: float = 1.0) -> "ProcrastinationEstimator":
        settings = config.get('procrastination', {})
        return cls(
            factor=factor,
            current_weight=settings.get('current_weight', CURRENT_WEIGHT),
            new_weight=settings.get('new_weight', NEW_WEIGHT),
        )

    @classmethod
    def from_history(cls, tasks: Iterable[Task], config: Optional[dict] = None) -> "ProcrastinationEstimator":
        """Resume from the factor snapshot of the most recently completed task."""
        latest = None
        for task in tasks:
            if not task.is_completed or task.completed_at is None:
                continue
            if task.procrastination_factor is None:
                continue
            # Later entries win ties
            if latest is None or task.completed_at >= latest.completed_at:
                latest = task

        factor = latest.procrastination_factor if latest else 1.0
        return cls.from_config(config or {}, factor=factor)

    def observe(self, estimated_minutes: int, actual_minutes: Optional[int]) -> float:
        """Blend one completed task into the factor and return the new value."""
        if not actual_minutes or actual_minutes < 0 or estimated_minutes <= 0:
            logger.debug(
                f"Skipping degenerate observation (estimated={estimated_minutes}, actual={actual_minutes})"
            )
            return self.factor

        ratio = actual_minutes / estimated_minutes
        self.factor = self.factor * self.current_weight + ratio * self.new_weight
        logger.debug(f"Procrastination factor updated to {self.factor:.3f} (ratio {ratio:.3f})")
        return self.factor

    def realistic_minutes(self, estimated_minutes: int) -> int:
        """Estimate scaled by the current factor."""
        return round(estimated_minutes * self.factor)
