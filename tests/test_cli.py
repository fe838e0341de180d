import json
import logging

import pytest

from main import main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "storage:\n"
        "  backend: local\n"
        f"  local_path: {tmp_path / 'tasks.json'}\n"
        "logging:\n"
        "  level: WARNING\n"
        "  console_color: false\n"
    )
    yield str(path)
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)


def _stored(config_path):
    tasks_file = config_path.replace("config.yaml", "tasks.json")
    with open(tasks_file) as f:
        return json.load(f)


def test_add_start_complete_and_stats(config_path, capsys):
    assert main(['--config', config_path, 'add', 'Essay', '--estimate', '60',
                 '--in-hours', '5', '--tag', 'writing']) == 0
    assert "Task created" in capsys.readouterr().out

    task_id = _stored(config_path)[0]['id']
    assert main(['--config', config_path, 'start', task_id]) == 0
    assert "Timer started" in capsys.readouterr().out

    assert main(['--config', config_path, 'complete', task_id, '--actual', '90']) == 0
    out = capsys.readouterr().out
    assert "Task completed" in out
    assert "Procrastination factor is now 1.35" in out

    assert main(['--config', config_path, 'stats', '--json']) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats['total_tasks'] == 1
    assert stats['completed_tasks'] == 1
    assert stats['average_procrastination'] == pytest.approx(1.5)


def test_list_and_focus(config_path, capsys):
    main(['--config', config_path, 'add', 'Math homework', '--in-hours', '30', '--priority', 'high'])
    main(['--config', config_path, 'add', 'Groceries', '--in-hours', '3', '--category', 'shopping'])
    capsys.readouterr()

    assert main(['--config', config_path, 'list', '--search', 'grocer']) == 0
    out = capsys.readouterr().out
    assert "Groceries" in out
    assert "Math homework" not in out

    assert main(['--config', config_path, 'focus']) == 0
    out = capsys.readouterr().out
    assert "Focus mode (URGENCY): 2 active task(s)" in out
    assert out.index("Math homework") < out.index("Groceries")

    assert main(['--config', config_path, 'focus', '--policy', 'realistic-start']) == 0
    assert "REALISTIC-START" in capsys.readouterr().out


def test_edit_and_delete(config_path, capsys):
    main(['--config', config_path, 'add', 'Draft', '--in-hours', '10'])
    task_id = _stored(config_path)[0]['id']

    assert main(['--config', config_path, 'edit', task_id, '--title', 'Final', '--priority', 'low']) == 0
    record = _stored(config_path)[0]
    assert record['title'] == 'Final'
    assert record['priority'] == 'low'

    assert main(['--config', config_path, 'delete', task_id]) == 0
    assert _stored(config_path) == []
    assert main(['--config', config_path, 'delete', task_id]) == 1


def test_errors_are_reported(config_path, capsys):
    assert main(['--config', config_path, 'add', '   ']) == 1
    assert "Error:" in capsys.readouterr().err

    assert main(['--config', config_path, 'start', 'task_missing']) == 1
    assert "Task not found" in capsys.readouterr().out

    assert main(['--config', config_path, 'add', 'x', '--deadline', 'tomorrow']) == 1
    assert "Invalid deadline" in capsys.readouterr().err


def test_generate_tasks(config_path, tmp_path, capsys):
    output = tmp_path / "tasks.json"
    assert main(['--config', config_path, 'generate-tasks', '--count', '12',
                 '--seed', '3', '--output', str(output)]) == 0
    assert "Generated 12 tasks" in capsys.readouterr().out
    assert len(_stored(config_path)) == 12

    assert main(['--config', config_path, 'stats']) == 0
    assert "Total tasks: 12" in capsys.readouterr().out


def test_configured_danger_hours_change_printed_tier(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text(
        "deadlines:\n"
        "  danger_hours: 12\n"
        "storage:\n"
        f"  local_path: {tmp_path / 'tasks.json'}\n"
        "logging:\n"
        "  level: WARNING\n"
        "  console_color: false\n"
    )
    try:
        assert main(['--config', str(path), 'add', 'Lab report', '--in-hours', '8']) == 0
        assert "[danger]" in capsys.readouterr().out
    finally:
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)


def test_default_thresholds_print_warning_tier(config_path, capsys):
    assert main(['--config', config_path, 'add', 'Lab report', '--in-hours', '8']) == 0
    assert "[warning]" in capsys.readouterr().out
