"""
Local Task Store

Keeps the task collection in a single JSON file, the offline key-value
backend used when no remote service is configured or reachable.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.task import Task
from ..utils.exceptions import StorageError, ValidationError
from .base import TaskStore

logger = logging.getLogger(__name__)


class LocalTaskStore(TaskStore):
    """
    JSON file backed task store.
    """

    def __init__(self, path):
        self.path = Path(path)
        logger.info(f"LocalTaskStore initialized at {self.path}")

    def list_tasks(self) -> List[Task]:
        try:
            return [Task.from_dict(record) for record in self._read()]
        except ValidationError as e:
            raise StorageError(f"Corrupt task file {self.path}: {e}") from e

    def create_task(self, task: Task) -> Task:
        records = self._read()
        if any(r.get('id') == task.id for r in records):
            raise StorageError(f"Task already exists: {task.id}")
        records.append(task.to_dict())
        self._write(records)
        logger.debug(f"Stored task {task.id} locally")
        return task

    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        """
        Merge fields into the stored task.

        Args:
            task_id: Identifier of the task to update.
            fields: Task attributes to replace.

        Returns:
            The updated task, or None if no task has that id.
        """
        records = self._read()
        for index, record in enumerate(records):
            if record.get('id') != task_id:
                continue
            try:
                stored = Task.from_dict(record)
            except ValidationError as e:
                raise StorageError(f"Corrupt task {task_id} in {self.path}: {e}") from e
            updated = stored.evolve(**fields)
            records[index] = updated.to_dict()
            self._write(records)
            logger.debug(f"Updated task {task_id} locally: {sorted(fields)}")
            return updated
        return None

    def delete_task(self, task_id: str) -> bool:
        records = self._read()
        remaining = [r for r in records if r.get('id') != task_id]
        if len(remaining) == len(records):
            return False
        self._write(remaining)
        logger.debug(f"Deleted task {task_id} locally")
        return True

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read task file {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Task file {self.path} does not contain a list")
        return data

    def _write(self, records: List[Dict[str, Any]]) -> None:
        """
        Atomically replace the task file.

        Args:
            records: Serialized tasks to store.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix='.tasks-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(records, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write task file {self.path}: {e}") from e
