"""Task data models."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.datetime_utils import ensure_aware, format_timestamp, now_utc, parse_timestamp
from ..utils.exceptions import ValidationError


class TaskPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric order, higher = more important."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.CRITICAL: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Any) -> "TaskStatus":
        # "overdue" is derived at query time; older records may still carry it
        if value == "overdue":
            return cls.TODO
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown task status: {value!r}") from None


def parse_priority(value: Any) -> TaskPriority:
    try:
        return TaskPriority(value)
    except ValueError:
        raise ValidationError(f"Unknown task priority: {value!r}") from None


def unique_tags(tags) -> List[str]:
    """Drop duplicate tags, keeping first occurrence."""
    seen = []
    for tag in tags or []:
        if tag not in seen:
            seen.append(tag)
    return seen


@dataclass
class Task:
    """A unit of work tracked against a deadline."""

    id: str
    title: str
    category: str
    priority: TaskPriority
    estimated_minutes: int
    deadline: datetime
    status: TaskStatus = TaskStatus.TODO
    description: Optional[str] = None
    actual_minutes: Optional[int] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    procrastination_factor: Optional[float] = None

    def __post_init__(self):
        """Normalize enums, timestamps and tags."""
        self.priority = parse_priority(self.priority)
        if not isinstance(self.status, TaskStatus):
            self.status = TaskStatus.parse(self.status)
        self.deadline = ensure_aware(self.deadline)
        if self.created_at is None:
            self.created_at = now_utc()
        else:
            self.created_at = ensure_aware(self.created_at)
        if self.completed_at is not None:
            self.completed_at = ensure_aware(self.completed_at)
        self.tags = unique_tags(self.tags)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def evolve(self, **changes) -> "Task":
        """Return a copy with the given fields replaced."""
        changes.setdefault('tags', list(self.tags))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'priority': self.priority.value,
            'status': self.status.value,
            'estimated_minutes': self.estimated_minutes,
            'actual_minutes': self.actual_minutes,
            'deadline': format_timestamp(self.deadline),
            'created_at': format_timestamp(self.created_at),
            'completed_at': format_timestamp(self.completed_at),
            'tags': list(self.tags),
            'procrastination_factor': self.procrastination_factor,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from a stored record."""
        try:
            deadline = parse_timestamp(data['deadline'])
            created_at = parse_timestamp(data.get('created_at'))
            completed_at = parse_timestamp(data.get('completed_at'))
            estimated = int(data['estimated_minutes'])
            actual = data.get('actual_minutes')
            factor = data.get('procrastination_factor')
            return cls(
                id=str(data['id']),
                title=data['title'],
                description=data.get('description'),
                category=data['category'],
                priority=data['priority'],
                status=data.get('status') or TaskStatus.TODO,
                estimated_minutes=estimated,
                actual_minutes=int(actual) if actual is not None else None,
                deadline=deadline,
                created_at=created_at,
                completed_at=completed_at,
                tags=data.get('tags') or [],
                procrastination_factor=float(factor) if factor is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed task record: {e}") from e


def fields_to_record(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize a partial set of task fields the same way as Task.to_dict."""
    record = {}
    for key, value in fields.items():
        if isinstance(value, datetime):
            value = format_timestamp(value)
        elif isinstance(value, Enum):
            value = value.value
        elif key == 'tags':
            value = unique_tags(value)
        record[key] = value
    return record


@dataclass
class TaskDraft:
    """User-supplied fields for a new task."""

    title: str
    deadline: datetime
    estimated_minutes: int = 30
    category: str = "class"
    priority: TaskPriority = TaskPriority.MEDIUM
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
