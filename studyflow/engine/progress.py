"""Task progress estimation."""

from ..models.task import Task, TaskStatus


STARTED_WITHOUT_DATA = 25.0


def get_task_progress(task: Task) -> float:
    """Completion percentage (0-100) derived from status and logged time."""
    if task.status == TaskStatus.COMPLETED:
        return 100.0
    if task.status == TaskStatus.TODO:
        return 0.0
    if task.actual_minutes and task.estimated_minutes > 0:
        return min(100.0, task.actual_minutes / task.estimated_minutes * 100)
    return STARTED_WITHOUT_DATA
