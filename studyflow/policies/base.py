"""Base ordering policy interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models.task import Task


class OrderingPolicy(ABC):
    """Abstract base class for task ordering policies."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize policy with configuration."""
        self.config = config or {}

    @abstractmethod
    def order_tasks(self, tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
        """Return a new list of tasks in policy order."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Return the name of this policy."""
        pass
