"""
Validation Utilities

Validates user-supplied task fields at the data-entry boundary so the
scheduling and statistics engine only ever sees well-formed tasks.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.task import TaskPriority
from .exceptions import ValidationError


EDITABLE_FIELDS = {
    'title',
    'description',
    'category',
    'priority',
    'estimated_minutes',
    'deadline',
    'tags',
}


class ValidationResult:
    def __init__(self, is_valid: bool, errors: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    @property
    def error(self) -> Optional[str]:
        return "; ".join(self.errors) if self.errors else None

    def raise_for_errors(self) -> None:
        if not self.is_valid:
            raise ValidationError(self.error)


class TaskInputValidator:
    def __init__(self, max_title_length: int = 200):
        self.max_title_length = max_title_length

    def validate_fields(self, fields: Dict[str, Any]) -> ValidationResult:
        errors = []

        if 'title' in fields:
            title = fields['title']
            if not isinstance(title, str) or not title.strip():
                errors.append("Title must not be empty")
            elif len(title) > self.max_title_length:
                errors.append(f"Title too long (max {self.max_title_length} characters)")

        if 'estimated_minutes' in fields:
            estimate = fields['estimated_minutes']
            if isinstance(estimate, bool) or not isinstance(estimate, int) or estimate <= 0:
                errors.append("Estimated minutes must be a positive integer")

        if 'category' in fields:
            category = fields['category']
            if not isinstance(category, str) or not category.strip():
                errors.append("Category must not be empty")

        if 'priority' in fields:
            try:
                TaskPriority(fields['priority'])
            except ValueError:
                errors.append(f"Unknown priority: {fields['priority']!r}")

        if 'deadline' in fields and not isinstance(fields['deadline'], datetime):
            errors.append("Deadline must be a datetime")

        if 'tags' in fields:
            tags = fields['tags']
            if not isinstance(tags, (list, tuple, set)) or not all(isinstance(t, str) for t in tags):
                errors.append("Tags must be a list of strings")

        return ValidationResult(not errors, errors)

    def validate_draft(self, draft) -> ValidationResult:
        return self.validate_fields({
            'title': draft.title,
            'estimated_minutes': draft.estimated_minutes,
            'category': draft.category,
            'priority': draft.priority,
            'deadline': draft.deadline,
            'tags': draft.tags,
        })

    def validate_edit(self, fields: Dict[str, Any]) -> ValidationResult:
        locked = sorted(set(fields) - EDITABLE_FIELDS)
        if locked:
            return ValidationResult(False, [f"Fields cannot be edited: {', '.join(locked)}"])
        return self.validate_fields(fields)

    def validate_minutes(self, minutes: Any) -> ValidationResult:
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
            return ValidationResult(False, ["Minutes must be a non-negative integer"])
        return ValidationResult(True)
