"""
Goal progress: how many completed tasks count toward a daily, weekly or
monthly target.

A completed task counts when it was created inside the goal's window:
  daily   - since midnight today
  weekly  - since midnight on the most recent Sunday
  monthly - since the 1st of the current month
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from .schema import Task

GOAL_TYPES = ("daily", "weekly", "monthly")


class GoalError(ValueError):
    """Raised for an unknown goal type or a negative target."""
    pass


def goal_window_start(goal_type: str, now: datetime) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if goal_type == "daily":
        return midnight
    if goal_type == "weekly":
        # weekday() is Monday=0; weeks start on Sunday
        return midnight - timedelta(days=(now.weekday() + 1) % 7)
    if goal_type == "monthly":
        return midnight.replace(day=1)
    raise GoalError(f"Unknown goal type: {goal_type}. Allowed: {', '.join(GOAL_TYPES)}")


def goal_progress(
    tasks: Iterable[Task],
    goal_type: str,
    target: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Progress toward completing `target` tasks in the current window."""
    if target < 0:
        raise GoalError("target must not be negative")
    if now is None:
        now = datetime.now(timezone.utc)
    start = goal_window_start(goal_type, now)

    completed = 0
    for t in tasks:
        created = t.created_at if t.created_at.tzinfo else t.created_at.replace(tzinfo=timezone.utc)
        if t.completed and start <= created <= now:
            completed += 1

    return {
        "type": goal_type,
        "target": target,
        "windowStart": start.isoformat(),
        "completed": completed,
        "percentage": min(completed / target * 100, 100) if target > 0 else 0,
        "isAchieved": completed >= target,
    }
