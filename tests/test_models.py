from datetime import datetime, timedelta, timezone

import pytest

from studyflow.models.task import Task, TaskPriority, TaskStatus, fields_to_record
from studyflow.utils.exceptions import ValidationError


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _record(**overrides):
    record = {
        'id': 'task_abc',
        'title': 'Problem set 3',
        'description': 'Chapters 5-6',
        'category': 'class',
        'priority': 'high',
        'status': 'todo',
        'estimated_minutes': 90,
        'actual_minutes': None,
        'deadline': '2026-03-12T17:00:00Z',
        'created_at': '2026-03-08T09:00:00+00:00',
        'completed_at': None,
        'tags': ['study', 'math'],
        'procrastination_factor': 1.2,
    }
    record.update(overrides)
    return record


def test_from_dict_parses_enums_and_timestamps():
    task = Task.from_dict(_record())
    assert task.priority == TaskPriority.HIGH
    assert task.status == TaskStatus.TODO
    assert task.deadline == datetime(2026, 3, 12, 17, 0, tzinfo=timezone.utc)
    assert task.tags == ['study', 'math']
    assert task.procrastination_factor == 1.2


def test_to_dict_from_dict_preserves_task():
    task = Task.from_dict(_record(status='completed', actual_minutes=120,
                                  completed_at='2026-03-10T10:00:00+00:00'))
    assert Task.from_dict(task.to_dict()) == task


def test_legacy_overdue_status_loads_as_todo():
    assert Task.from_dict(_record(status='overdue')).status == TaskStatus.TODO


def test_unknown_status_or_priority_rejected():
    with pytest.raises(ValidationError):
        Task.from_dict(_record(status='paused'))
    with pytest.raises(ValidationError):
        Task.from_dict(_record(priority='urgent'))


def test_missing_field_rejected():
    record = _record()
    del record['deadline']
    with pytest.raises(ValidationError):
        Task.from_dict(record)


def test_duplicate_tags_dropped():
    task = Task.from_dict(_record(tags=['a', 'b', 'a']))
    assert task.tags == ['a', 'b']


def test_naive_timestamps_become_utc():
    task = Task(
        id='t', title='x', category='class', priority='low',
        estimated_minutes=10, deadline=datetime(2026, 3, 11, 8, 0),
    )
    assert task.deadline.tzinfo is not None
    assert task.created_at is not None


def test_evolve_leaves_original_untouched():
    task = Task.from_dict(_record())
    changed = task.evolve(status=TaskStatus.IN_PROGRESS)
    changed.tags.append('extra')
    assert task.status == TaskStatus.TODO
    assert task.tags == ['study', 'math']


def test_priority_rank_order():
    ranks = [p.rank for p in (TaskPriority.CRITICAL, TaskPriority.HIGH,
                              TaskPriority.MEDIUM, TaskPriority.LOW)]
    assert ranks == sorted(ranks, reverse=True)


def test_fields_to_record_serializes_values():
    record = fields_to_record({
        'status': TaskStatus.COMPLETED,
        'completed_at': NOW,
        'tags': ['x', 'x', 'y'],
        'actual_minutes': 40,
    })
    assert record['status'] == 'completed'
    assert record['completed_at'].startswith('2026-03-10T12:00:00')
    assert record['tags'] == ['x', 'y']
    assert record['actual_minutes'] == 40
