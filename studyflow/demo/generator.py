"""Sample task history generator."""

import random
from datetime import datetime, timedelta
from typing import List

from ..engine.procrastination import ProcrastinationEstimator
from ..models.task import Task, TaskPriority, TaskStatus
from ..utils.config import DEFAULT_CATEGORIES
from ..utils.datetime_utils import ensure_aware


TAG_CHOICES = ['study', 'assignment', 'coding', 'meeting', 'must-do', 'morning', 'evening']


class TaskGenerator:
    """Generates deterministic task collections for demos and tests."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.categories = list(self.config.get('categories') or DEFAULT_CATEGORIES)

    def generate_tasks(
        self,
        count: int,
        now: datetime,
        completed_share: float = 0.5,
        overrun_mean: float = 1.3,
        overrun_std: float = 0.3,
    ) -> List[Task]:
        """Generate a mix of completed, in-progress and open tasks around `now`."""
        now = ensure_aware(now)
        priorities = list(TaskPriority)
        tasks = []

        for i in range(count):
            # Vary task sizes (some small, some large)
            if self.random.random() < 0.5:
                estimated_minutes = self.random.randint(15, 60)  # Small
            else:
                estimated_minutes = self.random.randint(60, 240)  # Large

            created_at = now - timedelta(days=self.random.randint(1, 14))
            tags = self.random.sample(TAG_CHOICES, k=self.random.randint(0, 2))

            task = Task(
                id=f"task_demo_{i:03d}",
                title=f"Task {i}",
                category=self.random.choice(self.categories),
                priority=self.random.choice(priorities),
                estimated_minutes=estimated_minutes,
                # Deadlines spread from two days ago to ten days ahead
                deadline=now + timedelta(hours=self.random.randint(-48, 240)),
                created_at=created_at,
                tags=tags,
            )

            roll = self.random.random()
            if roll < completed_share:
                task = self._complete(task, now, overrun_mean, overrun_std)
            elif roll < completed_share + 0.15:
                task = task.evolve(
                    status=TaskStatus.IN_PROGRESS,
                    actual_minutes=self.random.randint(0, estimated_minutes),
                )

            tasks.append(task)

        return self._replay_factor_history(tasks)

    def _complete(self, task: Task, now: datetime, overrun_mean: float, overrun_std: float) -> Task:
        """Mark a generated task completed with a sampled overrun."""
        overrun_factor = max(0.5, self.random.gauss(overrun_mean, overrun_std))
        actual_minutes = max(1, int(task.estimated_minutes * overrun_factor))

        # Completions cluster in working hours
        day = task.created_at + timedelta(days=self.random.randint(0, 3))
        hour = self.random.choice([9, 10, 11, 14, 15, 16, 20, 21])
        completed_at = day.replace(hour=hour, minute=self.random.randint(0, 59), second=0, microsecond=0)
        completed_at = min(completed_at, now)

        return task.evolve(
            status=TaskStatus.COMPLETED,
            actual_minutes=actual_minutes,
            completed_at=completed_at,
        )

    def _replay_factor_history(self, tasks: List[Task]) -> List[Task]:
        """Give completed tasks the factor snapshots a real session would have left."""
        estimator = ProcrastinationEstimator.from_config(self.config)
        completed = sorted(
            (i for i, t in enumerate(tasks) if t.is_completed),
            key=lambda i: tasks[i].completed_at,
        )

        result = list(tasks)
        for i in completed:
            task = result[i]
            factor = estimator.observe(task.estimated_minutes, task.actual_minutes)
            result[i] = task.evolve(procrastination_factor=round(factor, 4))
        return result
