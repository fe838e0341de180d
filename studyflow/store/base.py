"""Task store interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.task import Task


class TaskStore(ABC):
    """Persistence backend for the task collection."""

    @abstractmethod
    def list_tasks(self) -> List[Task]:
        """Return every stored task."""
        pass

    @abstractmethod
    def create_task(self, task: Task) -> Task:
        """Persist a new task and return the stored version."""
        pass

    @abstractmethod
    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        """Apply a partial update; None if the task does not exist."""
        pass

    @abstractmethod
    def delete_task(self, task_id: str) -> bool:
        """Delete a task; False if it did not exist."""
        pass

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None
