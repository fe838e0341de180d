"""StudyFlow: procrastination-aware task tracking engine."""

__version__ = "0.1.0"
