from datetime import datetime, timedelta, timezone

import pytest

from studyflow.engine.procrastination import (
    ProcrastinationEstimator,
    average_procrastination,
    completion_ratio,
)
from studyflow.models.task import Task, TaskStatus


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _done(estimated, actual, completed_at=NOW, factor=None):
    return Task(
        id=f"t{estimated}-{actual}-{completed_at.isoformat()}",
        title="Task",
        category="work",
        priority="high",
        estimated_minutes=estimated,
        actual_minutes=actual,
        deadline=NOW + timedelta(days=1),
        status=TaskStatus.COMPLETED,
        created_at=NOW - timedelta(days=2),
        completed_at=completed_at,
        procrastination_factor=factor,
    )


def test_first_observation_from_default_factor():
    estimator = ProcrastinationEstimator()
    assert estimator.observe(60, 90) == pytest.approx(1.35)
    assert estimator.factor == pytest.approx(1.35)


def test_accurate_estimates_converge_to_one():
    for start in (0.0, 0.4, 3.5, 10.0):
        estimator = ProcrastinationEstimator(factor=start)
        for _ in range(30):
            estimator.observe(45, 45)
        assert estimator.factor == pytest.approx(1.0, abs=1e-9)


def test_degenerate_observations_are_no_ops():
    estimator = ProcrastinationEstimator(factor=1.8)
    assert estimator.observe(0, 30) == 1.8
    assert estimator.observe(30, None) == 1.8
    assert estimator.observe(30, 0) == 1.8
    assert estimator.observe(-5, 30) == 1.8
    assert estimator.factor == 1.8


def test_weights_from_config():
    config = {'procrastination': {'current_weight': 0.5, 'new_weight': 0.5}}
    estimator = ProcrastinationEstimator.from_config(config)
    assert estimator.observe(10, 30) == pytest.approx(2.0)


def test_realistic_minutes():
    estimator = ProcrastinationEstimator(factor=1.5)
    assert estimator.realistic_minutes(40) == 60


def test_from_history_uses_latest_completion_snapshot():
    tasks = [
        _done(30, 60, completed_at=NOW - timedelta(days=2), factor=1.9),
        _done(30, 30, completed_at=NOW - timedelta(hours=1), factor=1.2),
        _done(30, 45, completed_at=NOW - timedelta(days=1), factor=1.6),
    ]
    assert ProcrastinationEstimator.from_history(tasks).factor == 1.2


def test_from_history_without_snapshots_defaults_to_one():
    assert ProcrastinationEstimator.from_history([]).factor == 1.0
    assert ProcrastinationEstimator.from_history([_done(30, 60)]).factor == 1.0


def test_average_is_plain_mean_not_ewma():
    tasks = [_done(60, 90), _done(30, 30), _done(20, 10)]
    # (1.5 + 1.0 + 0.5) / 3
    assert average_procrastination(tasks) == pytest.approx(1.0)


def test_average_skips_open_and_degenerate_tasks():
    open_task = _done(30, 90).evolve(status=TaskStatus.IN_PROGRESS, completed_at=None)
    no_actual = _done(30, None)
    tasks = [open_task, no_actual, _done(40, 80)]
    assert average_procrastination(tasks) == pytest.approx(2.0)
    assert average_procrastination([open_task, no_actual]) == 1.0


def test_completion_ratio_undefined_for_zero_estimate():
    task = _done(30, 60)
    task.estimated_minutes = 0
    assert completion_ratio(task) is None
    assert average_procrastination([task]) == 1.0
