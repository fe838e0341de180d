"""Main entry point for the StudyFlow task tracker."""

import argparse
import json
import logging
import sys
from datetime import timedelta
from pathlib import Path

from studyflow.demo.generator import TaskGenerator
from studyflow.engine.deadline import format_deadline, format_time_estimate
from studyflow.engine.progress import get_task_progress
from studyflow.engine.tracker import TaskTracker, filter_tasks
from studyflow.models.task import Task, TaskDraft
from studyflow.policies.realistic import RealisticStartPolicy
from studyflow.store import LocalTaskStore, build_store
from studyflow.utils.config import resolve_config
from studyflow.utils.datetime_utils import now_utc, parse_timestamp
from studyflow.utils.exceptions import StudyFlowError, ValidationError
from studyflow.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def describe_task(task: Task, tracker: TaskTracker) -> str:
    """One-line summary of a task for terminal output."""
    now = now_utc()
    estimate = format_time_estimate(task.estimated_minutes)
    if task.is_completed:
        actual = format_time_estimate(task.actual_minutes or 0)
        timing = f"done ({actual} of {estimate})"
    else:
        status = tracker.deadline_status(task, now).value
        timing = f"{format_deadline(task.deadline, now)} [{status}]"
        realistic = tracker.realistic_minutes(task.estimated_minutes)
        if realistic > task.estimated_minutes:
            estimate = f"{estimate} (realistic ~{format_time_estimate(realistic)})"

    tags = f" #{' #'.join(task.tags)}" if task.tags else ""
    return (
        f"{task.id}  {task.priority.value:<8} {task.status.value:<11} "
        f"{get_task_progress(task):>5.0f}%  {task.title} <{task.category}>{tags}\n"
        f"    {timing}, est. {estimate}"
    )


def parse_deadline(args, config: dict):
    if args.deadline:
        try:
            return parse_timestamp(args.deadline)
        except ValueError as e:
            raise ValidationError(f"Invalid deadline {args.deadline!r}: {e}") from e
    hours = args.in_hours
    if hours is None:
        hours = config['task_defaults'].get('deadline_offset_hours', 24)
    return now_utc() + timedelta(hours=hours)


def run_add(tracker: TaskTracker, args, config: dict):
    """Create a task from command-line arguments."""
    defaults = config['task_defaults']
    draft = TaskDraft(
        title=args.title,
        deadline=parse_deadline(args, config),
        estimated_minutes=args.estimate or defaults.get('estimated_minutes', 30),
        category=args.category or defaults.get('category', 'class'),
        priority=args.priority or defaults.get('priority', 'medium'),
        description=args.description,
        tags=args.tag or [],
    )
    result = tracker.create(draft)
    print(describe_task(result.task, tracker))
    report_storage(result.fallback_used, "Task created")

    realistic = tracker.realistic_minutes(draft.estimated_minutes)
    threshold = config['procrastination'].get('high_threshold', 1.5)
    if tracker.estimator.factor > 1.1:
        print(f"Realistic time: ~{realistic} minutes based on your history")
    if result.stats.is_high_procrastination(threshold):
        print("High procrastination detected: consider starting earlier")


def run_list(tracker: TaskTracker, args):
    view = tracker.load()
    if view.stale:
        print(f"Warning: showing cached tasks ({tracker.last_error})")
    tasks = filter_tasks(view.tasks, args.search)
    if not tasks:
        print("No tasks")
    for task in tasks:
        print(describe_task(task, tracker))


def run_focus(tracker: TaskTracker, args, config: dict):
    """Print active tasks in focus order."""
    if args.policy == 'realistic-start':
        tracker.policy = RealisticStartPolicy(config, tracker.estimator.factor)

    tasks = tracker.focus(args.search)
    print(f"Focus mode ({tracker.policy.get_policy_name()}): {len(tasks)} active task(s)")
    for task in tasks:
        print(describe_task(task, tracker))


def report_storage(fallback_used: bool, message: str):
    if fallback_used:
        print(f"{message} (locally)")
    else:
        print(message)


def run_action(tracker: TaskTracker, args):
    """Apply a single lifecycle action to one task."""
    if args.command == 'start':
        result = tracker.start(args.task_id)
        message = "Timer started"
    elif args.command == 'log':
        result = tracker.log_time(args.task_id, args.minutes)
        message = "Time logged"
    elif args.command == 'complete':
        result = tracker.complete(args.task_id, args.actual)
        message = "Task completed"
    else:
        fields = {}
        for name in ('title', 'description', 'category', 'priority'):
            value = getattr(args, name)
            if value is not None:
                fields[name] = value
        if args.estimate is not None:
            fields['estimated_minutes'] = args.estimate
        if args.deadline or args.in_hours is not None:
            fields['deadline'] = parse_deadline(args, {})
        if args.tag is not None:
            fields['tags'] = args.tag
        result = tracker.edit(args.task_id, **fields)
        message = "Task updated"

    if result.task is None:
        print(f"Task not found: {args.task_id}")
        return 1

    print(describe_task(result.task, tracker))
    report_storage(result.fallback_used, message)
    if args.command == 'complete':
        print(f"Procrastination factor is now {tracker.estimator.factor:.2f}")
    return 0


def run_stats(tracker: TaskTracker, args):
    stats = tracker.stats()
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        print(stats.to_human_readable())


def run_generate(args, config: dict):
    """Write a seeded sample task history to a local JSON store."""
    generator = TaskGenerator(seed=args.seed, config=config)
    tasks = generator.generate_tasks(args.count, now_utc())

    output = Path(args.output or config['storage'].get('local_path', 'data/tasks.json'))
    if output.exists():
        output.unlink()
    store = LocalTaskStore(output)
    for task in tasks:
        store.create_task(task)

    completed = sum(1 for t in tasks if t.is_completed)
    print(f"Generated {len(tasks)} tasks ({completed} completed)")
    print(f"Tasks saved to: {output}")


def add_task_fields(parser: argparse.ArgumentParser, creating: bool):
    if not creating:
        parser.add_argument('--title', type=str, help='New title')
    parser.add_argument('--description', type=str, help='Free-text description')
    parser.add_argument('--category', type=str, help='Task category')
    parser.add_argument(
        '--priority',
        choices=['critical', 'high', 'medium', 'low'],
        help='Task priority',
    )
    parser.add_argument('--estimate', type=int, help='Estimated minutes')
    parser.add_argument('--deadline', type=str, help='Deadline as ISO-8601 timestamp')
    parser.add_argument('--in-hours', type=float, help='Deadline as hours from now')
    parser.add_argument('--tag', action='append', help='Tag (repeatable)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="StudyFlow: procrastination-aware task tracker"
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    add_parser = subparsers.add_parser('add', help='Create a task')
    add_parser.add_argument('title', type=str)
    add_task_fields(add_parser, creating=True)

    list_parser = subparsers.add_parser('list', help='List all tasks')
    list_parser.add_argument('--search', type=str, help='Filter by text')

    focus_parser = subparsers.add_parser('focus', help='Show active tasks by urgency')
    focus_parser.add_argument('--search', type=str, help='Filter by text')
    focus_parser.add_argument(
        '--policy',
        choices=['urgency', 'realistic-start'],
        default='urgency',
        help='Ordering policy (default: urgency)'
    )

    start_parser = subparsers.add_parser('start', help='Start working on a task')
    start_parser.add_argument('task_id', type=str)

    log_parser = subparsers.add_parser('log', help='Record minutes worked so far')
    log_parser.add_argument('task_id', type=str)
    log_parser.add_argument('minutes', type=int)

    complete_parser = subparsers.add_parser('complete', help='Complete a task')
    complete_parser.add_argument('task_id', type=str)
    complete_parser.add_argument('--actual', type=int, help='Actual minutes spent')

    edit_parser = subparsers.add_parser('edit', help='Edit task details')
    edit_parser.add_argument('task_id', type=str)
    add_task_fields(edit_parser, creating=False)

    delete_parser = subparsers.add_parser('delete', help='Delete a task')
    delete_parser.add_argument('task_id', type=str)

    stats_parser = subparsers.add_parser('stats', help='Show productivity statistics')
    stats_parser.add_argument('--json', action='store_true', help='Output JSON')

    generate_parser = subparsers.add_parser('generate-tasks', help='Write sample task history')
    generate_parser.add_argument('--count', type=int, default=30)
    generate_parser.add_argument('--seed', type=int, default=42)
    generate_parser.add_argument('--output', type=str, help='Target JSON file')

    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args.config)
        setup_logging(config.get('logging'))

        if args.command == 'generate-tasks':
            run_generate(args, config)
            return 0

        tracker = TaskTracker(build_store(config), config)

        if args.command == 'add':
            run_add(tracker, args, config)
        elif args.command == 'list':
            run_list(tracker, args)
        elif args.command == 'focus':
            run_focus(tracker, args, config)
        elif args.command == 'stats':
            run_stats(tracker, args)
        elif args.command == 'delete':
            if not tracker.delete(args.task_id):
                print(f"Task not found: {args.task_id}")
                return 1
            print("Task deleted")
        else:
            return run_action(tracker, args)
    except StudyFlowError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
