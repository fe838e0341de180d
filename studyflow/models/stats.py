"""Statistics models."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


HIGH_PROCRASTINATION_THRESHOLD = 1.5
MEDIUM_LEVEL_THRESHOLD = 1.5
HIGH_LEVEL_THRESHOLD = 2.0


@dataclass(frozen=True)
class HourProductivity:
    """Number of tasks completed within one hour of the day."""

    hour: int
    productivity: int


@dataclass
class TaskStats:
    """Summary statistics recomputed from the full task collection."""

    total_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    average_procrastination: float = 1.0
    best_working_hours: List[HourProductivity] = field(default_factory=list)
    category_breakdown: Dict[str, int] = field(default_factory=dict)

    @property
    def completion_rate(self) -> float:
        """Percentage of tasks completed."""
        if self.total_tasks == 0:
            return 0.0
        return self.completed_tasks / self.total_tasks * 100

    @property
    def overdue_rate(self) -> float:
        """Percentage of tasks overdue."""
        if self.total_tasks == 0:
            return 0.0
        return self.overdue_tasks / self.total_tasks * 100

    @property
    def procrastination_level(self) -> str:
        if self.average_procrastination > HIGH_LEVEL_THRESHOLD:
            return 'high'
        if self.average_procrastination > MEDIUM_LEVEL_THRESHOLD:
            return 'medium'
        return 'low'

    def is_high_procrastination(self, threshold: float = HIGH_PROCRASTINATION_THRESHOLD) -> bool:
        return self.average_procrastination > threshold

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary for JSON export."""
        data = asdict(self)
        data['completion_rate'] = self.completion_rate
        data['overdue_rate'] = self.overdue_rate
        data['procrastination_level'] = self.procrastination_level
        return data

    def to_human_readable(self) -> str:
        """Generate human-readable report."""
        lines = [
            "=== Task Statistics ===",
            f"Total tasks: {self.total_tasks}",
            f"Completed: {self.completed_tasks} ({self.completion_rate:.1f}%)",
            f"Overdue: {self.overdue_tasks} ({self.overdue_rate:.1f}%)",
            f"Average procrastination: {self.average_procrastination:.2f}x ({self.procrastination_level})",
            "",
            "Best working hours:",
        ]

        if not self.best_working_hours:
            lines.append("  (no completed tasks yet)")
        for entry in self.best_working_hours:
            lines.append(f"  {entry.hour:02d}:00  {entry.productivity} task(s)")

        lines.extend([
            "",
            "Categories:",
        ])

        for category, count in self.category_breakdown.items():
            lines.append(f"  {category}: {count}")

        lines.append("=" * 30)

        return "\n".join(lines)
