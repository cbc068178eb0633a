"""
Summary counts over one owner's tasks.

Pure read: fetches the owner's tasks from a store and counts them. Nothing is
cached; every call reflects the store as it is now.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

WEEK = timedelta(days=7)


@dataclass
class TaskStats:
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    this_week_tasks: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "pendingTasks": self.pending_tasks,
            "thisWeekTasks": self.this_week_tasks,
        }


def created_within(created_at: datetime, now: datetime, window: timedelta = WEEK) -> bool:
    """True if created_at lies in the trailing window ending at now (window end excluded)."""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return now - created_at < window


def compute_task_stats(storage, user_id: int, now: Optional[datetime] = None) -> TaskStats:
    """Count total / completed / pending / created-in-the-last-7-days tasks for user_id."""
    if now is None:
        now = datetime.now(timezone.utc)
    tasks = storage.get_tasks(user_id)

    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(
        total_tasks=len(tasks),
        completed_tasks=completed,
        pending_tasks=len(tasks) - completed,
        this_week_tasks=sum(1 for t in tasks if created_within(t.created_at, now)),
    )
