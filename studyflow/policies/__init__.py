"""Task ordering policy implementations."""

from .base import OrderingPolicy
from .urgency import UrgencyPolicy, sort_tasks_by_urgency
from .realistic import RealisticStartPolicy

__all__ = ['OrderingPolicy', 'UrgencyPolicy', 'RealisticStartPolicy', 'sort_tasks_by_urgency']
