"""Remote-then-local fallback store."""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..models.task import Task
from ..utils.exceptions import StorageError
from .base import TaskStore

logger = logging.getLogger(__name__)


class FallbackTaskStore(TaskStore):
    """Prefers the primary store and repeats the call on the fallback when it fails.

    A primary call fails when it raises StorageError, or, for update and
    delete, when it reports a missing task (the task may only exist locally).
    There is no retry and no reconciliation between the two stores.
    `fallback_used` and `last_error` describe the most recent call.
    """

    def __init__(self, primary: TaskStore, fallback: TaskStore):
        self.primary = primary
        self.fallback = fallback
        self.fallback_used = False
        self.last_error: Optional[StorageError] = None

    def list_tasks(self) -> List[Task]:
        return self._call("list_tasks", lambda store: store.list_tasks())

    def create_task(self, task: Task) -> Task:
        return self._call("create_task", lambda store: store.create_task(task))

    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        return self._call(
            "update_task",
            lambda store: store.update_task(task_id, fields),
            accept=lambda result: result is not None,
        )

    def delete_task(self, task_id: str) -> bool:
        return self._call(
            "delete_task",
            lambda store: store.delete_task(task_id),
            accept=bool,
        )

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._call(
            "get_task",
            lambda store: store.get_task(task_id),
            accept=lambda result: result is not None,
        )

    def _call(
        self,
        operation: str,
        action: Callable[[TaskStore], Any],
        accept: Callable[[Any], bool] = lambda result: True,
    ) -> Any:
        self.fallback_used = False
        self.last_error = None

        try:
            result = action(self.primary)
            if accept(result):
                return result
            logger.info(f"{operation} found nothing in primary store, trying fallback")
        except StorageError as e:
            self.last_error = e
            logger.warning(f"{operation} failed on primary store, using fallback: {e}")

        self.fallback_used = True
        return action(self.fallback)
