from datetime import datetime, timezone

import pytest

from studyflow.demo.generator import TaskGenerator
from studyflow.engine.procrastination import ProcrastinationEstimator
from studyflow.models.task import TaskStatus


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_same_seed_same_tasks():
    first = TaskGenerator(seed=7).generate_tasks(20, NOW)
    second = TaskGenerator(seed=7).generate_tasks(20, NOW)
    assert [t.to_dict() for t in first] == [t.to_dict() for t in second]


def test_generated_tasks_are_well_formed():
    tasks = TaskGenerator(seed=1).generate_tasks(40, NOW)
    assert len({t.id for t in tasks}) == 40
    for task in tasks:
        assert task.estimated_minutes > 0
        assert task.created_at <= NOW
        if task.is_completed:
            assert task.completed_at <= NOW
            assert task.actual_minutes >= 1
            assert task.procrastination_factor is not None
        else:
            assert task.completed_at is None
        if task.status == TaskStatus.IN_PROGRESS:
            assert 0 <= task.actual_minutes <= task.estimated_minutes


def test_factor_snapshots_replay_completion_order():
    tasks = TaskGenerator(seed=3).generate_tasks(30, NOW, completed_share=0.8)
    completed = sorted((t for t in tasks if t.is_completed), key=lambda t: t.completed_at)
    assert completed

    estimator = ProcrastinationEstimator()
    for task in completed:
        expected = estimator.observe(task.estimated_minutes, task.actual_minutes)
        assert task.procrastination_factor == pytest.approx(expected, abs=1e-4)

    restored = ProcrastinationEstimator.from_history(tasks)
    assert restored.factor == completed[-1].procrastination_factor


def test_configured_categories_are_used():
    config = {'categories': ['study', 'chores']}
    tasks = TaskGenerator(seed=5, config=config).generate_tasks(15, NOW)
    assert {t.category for t in tasks} <= {'study', 'chores'}
