"""
Remote Task Store

Talks to a PostgREST-style HTTP API (the interface Supabase exposes for a
`tasks` table). Column names match the keys of Task.to_dict.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..models.task import Task, fields_to_record
from ..utils.exceptions import StorageError, ValidationError
from .base import TaskStore

logger = logging.getLogger(__name__)


class RemoteTaskStore(TaskStore):
    """
    HTTP backed task store.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        table: str = "tasks",
        timeout_seconds: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.table = table
        headers = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        self.client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
        )

    def list_tasks(self) -> List[Task]:
        rows = self._request("GET", params={"select": "*", "order": "deadline.asc"})
        return self._to_tasks(rows)

    def create_task(self, task: Task) -> Task:
        rows = self._request(
            "POST",
            json=task.to_dict(),
            headers={"Prefer": "return=representation"},
        )
        created = self._to_tasks(rows)
        if not created:
            raise StorageError(f"Remote store did not return created task {task.id}")
        logger.debug(f"Stored task {task.id} remotely")
        return created[0]

    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json=fields_to_record(fields),
            headers={"Prefer": "return=representation"},
        )
        updated = self._to_tasks(rows)
        return updated[0] if updated else None

    def delete_task(self, task_id: str) -> bool:
        rows = self._request(
            "DELETE",
            params={"id": f"eq.{task_id}"},
            headers={"Prefer": "return=representation"},
        )
        return bool(rows)

    def get_task(self, task_id: str) -> Optional[Task]:
        rows = self._request("GET", params={"select": "*", "id": f"eq.{task_id}"})
        tasks = self._to_tasks(rows)
        return tasks[0] if tasks else None

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, **kwargs) -> List[Dict[str, Any]]:
        """
        Send a request against the task table.

        Returns:
            Decoded JSON rows (empty list for an empty body).

        Raises:
            StorageError: On transport errors, non-2xx responses or bad JSON.
        """
        try:
            response = self.client.request(method, f"/{self.table}", **kwargs)
            response.raise_for_status()
            if not response.content:
                return []
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise StorageError(
                f"Remote store {method} failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise StorageError(f"Remote store {method} failed: {e}") from e
        except ValueError as e:
            raise StorageError(f"Remote store returned invalid JSON: {e}") from e

        if isinstance(data, dict):
            return [data]
        return data

    def _to_tasks(self, rows: List[Dict[str, Any]]) -> List[Task]:
        try:
            return [Task.from_dict(row) for row in rows]
        except ValidationError as e:
            raise StorageError(f"Remote store returned a malformed task: {e}") from e
