"""Task and statistics data models."""

from .task import Task, TaskDraft, TaskPriority, TaskStatus
from .stats import HourProductivity, TaskStats

__all__ = ['Task', 'TaskDraft', 'TaskPriority', 'TaskStatus', 'HourProductivity', 'TaskStats']
