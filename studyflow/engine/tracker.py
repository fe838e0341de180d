"""Task lifecycle tracking over a task store."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional

from ..models.stats import TaskStats
from ..models.task import Task, TaskDraft, TaskStatus
from ..policies.base import OrderingPolicy
from ..policies.urgency import UrgencyPolicy
from ..store.base import TaskStore
from ..utils.config import get_default_config
from ..utils.datetime_utils import ensure_aware, now_utc
from ..utils.exceptions import StorageError, ValidationError
from ..utils.validators import TaskInputValidator
from .deadline import DANGER_HOURS, WARNING_HOURS, DeadlineStatus, get_deadline_status, is_overdue
from .procrastination import ProcrastinationEstimator
from .stats import StatisticsAggregator

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of one user action: the affected task and fresh stats."""

    task: Optional[Task]
    stats: TaskStats
    fallback_used: bool = False
    stale: bool = False


@dataclass
class TrackerView:
    """Snapshot of the task collection with its statistics."""

    tasks: List[Task] = field(default_factory=list)
    stats: TaskStats = field(default_factory=TaskStats)
    stale: bool = False


def generate_task_id() -> str:
    return f"task_{uuid.uuid4().hex[:12]}"


def filter_tasks(tasks: Iterable[Task], query: Optional[str]) -> List[Task]:
    """Case-insensitive search over title, description, category and tags."""
    tasks = list(tasks)
    if not query:
        return tasks

    query = query.lower()
    return [
        t for t in tasks
        if query in t.title.lower()
        or (t.description and query in t.description.lower())
        or query in t.category.lower()
        or any(query in tag.lower() for tag in t.tags)
    ]


class TaskTracker:
    """Applies user actions to a task store and recomputes statistics."""

    def __init__(
        self,
        store: TaskStore,
        config: Optional[dict] = None,
        estimator: Optional[ProcrastinationEstimator] = None,
        policy: Optional[OrderingPolicy] = None,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize tracker with a store and configuration."""
        self.store = store
        self.config = config or get_default_config()
        self.aggregator = StatisticsAggregator(self.config)
        self.validator = TaskInputValidator()
        self.policy = policy or UrgencyPolicy(self.config)
        self.tz = tz
        deadlines = self.config.get('deadlines', {})
        self.danger_hours = deadlines.get('danger_hours', DANGER_HOURS)
        self.warning_hours = deadlines.get('warning_hours', WARNING_HOURS)
        self.last_error: Optional[StorageError] = None
        self._estimator = estimator
        self._snapshot: List[Task] = []

    @property
    def estimator(self) -> ProcrastinationEstimator:
        """Session estimator, restored from task history on first use."""
        if self._estimator is None:
            self._estimator = ProcrastinationEstimator.from_history(self._read_tasks(), self.config)
            logger.info(f"Procrastination factor restored: {self._estimator.factor:.2f}")
        return self._estimator

    def load(self, now: Optional[datetime] = None) -> TrackerView:
        """Read the collection; serves the last good snapshot if the store fails."""
        tasks = self._read_tasks()
        return TrackerView(
            tasks=tasks,
            stats=self.aggregator.compute(tasks, now=now, tz=self.tz),
            stale=self.last_error is not None,
        )

    def stats(self, now: Optional[datetime] = None) -> TaskStats:
        return self.load(now).stats

    def focus(self, query: Optional[str] = None, now: Optional[datetime] = None) -> List[Task]:
        """Active tasks in policy order, optionally filtered by a search query."""
        active = [t for t in self._read_tasks() if not t.is_completed]
        return self.policy.order_tasks(filter_tasks(active, query), now)

    def realistic_minutes(self, estimated_minutes: int) -> int:
        return self.estimator.realistic_minutes(estimated_minutes)

    def deadline_status(self, task: Task, now: Optional[datetime] = None) -> DeadlineStatus:
        """Urgency tier of a task under the configured thresholds."""
        if is_overdue(task, now):
            return DeadlineStatus.OVERDUE
        return get_deadline_status(
            task.deadline,
            now,
            danger_hours=self.danger_hours,
            warning_hours=self.warning_hours,
        )

    def create(self, draft: TaskDraft, now: Optional[datetime] = None) -> ActionResult:
        """Validate a draft and store it as a new todo task."""
        self.validator.validate_draft(draft).raise_for_errors()
        now = ensure_aware(now or now_utc())

        task = Task(
            id=generate_task_id(),
            title=draft.title.strip(),
            description=draft.description,
            category=draft.category,
            priority=draft.priority,
            status=TaskStatus.TODO,
            estimated_minutes=draft.estimated_minutes,
            deadline=draft.deadline,
            created_at=now,
            tags=list(draft.tags),
            procrastination_factor=self.estimator.factor,
        )
        stored = self.store.create_task(task)
        logger.info(f"Created task {stored.id}: {stored.title}")
        return self._result(stored, now)

    def start(self, task_id: str, now: Optional[datetime] = None) -> ActionResult:
        """Move a task to in-progress."""
        task = self._get(task_id)
        if task is None:
            return self._result(None, now)
        if task.is_completed:
            raise ValidationError(f"Task {task_id} is already completed")
        if task.status == TaskStatus.IN_PROGRESS:
            return self._result(task, now)

        updated = self.store.update_task(task_id, {'status': TaskStatus.IN_PROGRESS})
        logger.info(f"Started task {task_id}")
        return self._result(updated, now)

    def log_time(self, task_id: str, minutes: int, now: Optional[datetime] = None) -> ActionResult:
        """Record elapsed working time on an in-progress task."""
        self.validator.validate_minutes(minutes).raise_for_errors()
        task = self._get(task_id)
        if task is None:
            return self._result(None, now)
        if task.status != TaskStatus.IN_PROGRESS:
            raise ValidationError(f"Task {task_id} is not in progress")

        updated = self.store.update_task(task_id, {'actual_minutes': minutes})
        logger.debug(f"Logged {minutes} minutes on task {task_id}")
        return self._result(updated, now)

    def complete(
        self,
        task_id: str,
        actual_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ActionResult:
        """Complete a task and fold its actual time into the procrastination factor."""
        if actual_minutes is not None:
            self.validator.validate_minutes(actual_minutes).raise_for_errors()
        task = self._get(task_id)
        if task is None:
            return self._result(None, now)
        if task.is_completed:
            raise ValidationError(f"Task {task_id} is already completed")

        now = ensure_aware(now or now_utc())
        if actual_minutes is None:
            actual_minutes = task.actual_minutes or task.estimated_minutes

        previous_factor = self.estimator.factor
        factor = self.estimator.observe(task.estimated_minutes, actual_minutes)
        try:
            updated = self.store.update_task(task_id, {
                'status': TaskStatus.COMPLETED,
                'completed_at': now,
                'actual_minutes': actual_minutes,
                'procrastination_factor': factor,
            })
        except StorageError:
            self.estimator.factor = previous_factor
            raise
        if updated is None:
            self.estimator.factor = previous_factor
            logger.warning(f"Task {task_id} disappeared before completion")
            return self._result(None, now)

        logger.info(
            f"Completed task {task_id}: {actual_minutes}/{task.estimated_minutes} min, "
            f"factor {previous_factor:.2f} -> {factor:.2f}"
        )
        return self._result(updated, now)

    def edit(self, task_id: str, now: Optional[datetime] = None, **fields) -> ActionResult:
        """Change descriptive fields; lifecycle fields are not editable."""
        self.validator.validate_edit(fields).raise_for_errors()
        if 'title' in fields:
            fields['title'] = fields['title'].strip()

        if self._get(task_id) is None:
            return self._result(None, now)
        updated = self.store.update_task(task_id, fields)
        logger.info(f"Edited task {task_id}: {sorted(fields)}")
        return self._result(updated, now)

    def delete(self, task_id: str) -> bool:
        deleted = self.store.delete_task(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id}")
        else:
            logger.warning(f"Cannot delete unknown task {task_id}")
        return deleted

    def _get(self, task_id: str) -> Optional[Task]:
        task = self.store.get_task(task_id)
        if task is None:
            logger.warning(f"Task not found: {task_id}")
        return task

    def _read_tasks(self) -> List[Task]:
        try:
            tasks = self.store.list_tasks()
        except StorageError as e:
            logger.error(f"Cannot read tasks, using last snapshot: {e}")
            self.last_error = e
            return list(self._snapshot)

        self.last_error = None
        self._snapshot = list(tasks)
        return list(tasks)

    def _result(self, task: Optional[Task], now: Optional[datetime]) -> ActionResult:
        fallback_used = getattr(self.store, 'fallback_used', False)
        tasks = self._read_tasks()
        return ActionResult(
            task=task,
            stats=self.aggregator.compute(tasks, now=now, tz=self.tz),
            fallback_used=fallback_used,
            stale=self.last_error is not None,
        )
