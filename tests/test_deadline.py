from datetime import datetime, timedelta, timezone

from studyflow.engine.deadline import (
    DeadlineStatus,
    calculate_realistic_start,
    format_deadline,
    format_time_estimate,
    get_deadline_status,
    is_overdue,
)
from studyflow.models.task import Task, TaskStatus


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _task(status=TaskStatus.TODO, deadline=None):
    return Task(
        id="t1",
        title="Essay",
        category="class",
        priority="medium",
        estimated_minutes=60,
        deadline=deadline or NOW + timedelta(days=1),
        status=status,
        created_at=NOW - timedelta(days=1),
    )


def test_deadline_exactly_now_is_danger():
    assert get_deadline_status(NOW, NOW) == DeadlineStatus.DANGER


def test_status_tier_boundaries():
    assert get_deadline_status(NOW - timedelta(seconds=1), NOW) == DeadlineStatus.OVERDUE
    assert get_deadline_status(NOW + timedelta(hours=5, minutes=59), NOW) == DeadlineStatus.DANGER
    assert get_deadline_status(NOW + timedelta(hours=6), NOW) == DeadlineStatus.WARNING
    assert get_deadline_status(NOW + timedelta(hours=23, minutes=59), NOW) == DeadlineStatus.WARNING
    assert get_deadline_status(NOW + timedelta(hours=24), NOW) == DeadlineStatus.SAFE


def test_custom_thresholds():
    deadline = NOW + timedelta(hours=8)
    assert get_deadline_status(deadline, NOW, danger_hours=12, warning_hours=48) == DeadlineStatus.DANGER


def test_naive_deadline_treated_as_utc():
    naive = datetime(2026, 3, 10, 15, 0)
    assert get_deadline_status(naive, NOW) == DeadlineStatus.DANGER


def test_three_hours_left():
    deadline = NOW + timedelta(hours=3)
    assert get_deadline_status(deadline, NOW) == DeadlineStatus.DANGER
    assert format_deadline(deadline, NOW) == "3 hours left"


def test_overdue_by_thirty_hours_reports_one_day():
    deadline = NOW - timedelta(hours=30)
    assert get_deadline_status(deadline, NOW) == DeadlineStatus.OVERDUE
    assert format_deadline(deadline, NOW) == "Overdue by 1 day"


def test_overdue_formatting():
    assert format_deadline(NOW - timedelta(hours=2), NOW) == "Overdue by hours"
    assert format_deadline(NOW - timedelta(hours=23, minutes=59), NOW) == "Overdue by hours"
    assert format_deadline(NOW - timedelta(hours=50), NOW) == "Overdue by 2 days"


def test_remaining_time_formatting():
    assert format_deadline(NOW, NOW) == "0 minutes left"
    assert format_deadline(NOW + timedelta(minutes=1), NOW) == "1 minute left"
    assert format_deadline(NOW + timedelta(minutes=10), NOW) == "10 minutes left"
    assert format_deadline(NOW + timedelta(hours=1), NOW) == "1 hour left"
    assert format_deadline(NOW + timedelta(hours=26), NOW) == "1 day left"
    assert format_deadline(NOW + timedelta(days=6, hours=23), NOW) == "6 days left"


def test_far_deadline_uses_short_date():
    deadline = datetime(2026, 12, 25, 12, 0, tzinfo=timezone.utc)
    assert format_deadline(deadline, NOW, tz=timezone.utc) == "Dec 25"


def test_format_time_estimate():
    assert format_time_estimate(45) == "45m"
    assert format_time_estimate(120) == "2h"
    assert format_time_estimate(90) == "1h 30m"


def test_realistic_start_scales_estimate_and_adds_buffer():
    deadline = NOW + timedelta(hours=10)
    # 100 min * 1.5 = 150 min, plus 20% buffer = 180 min
    start = calculate_realistic_start(deadline, 100, 1.5)
    assert start == deadline - timedelta(minutes=180)


def test_is_overdue_ignores_completed_tasks():
    past = NOW - timedelta(hours=5)
    assert is_overdue(_task(deadline=past), NOW) is True
    assert is_overdue(_task(status=TaskStatus.IN_PROGRESS, deadline=past), NOW) is True
    done = _task(deadline=past).evolve(status=TaskStatus.COMPLETED, completed_at=NOW)
    assert is_overdue(done, NOW) is False
