"""
Period reports over a task list.

A report covers tasks created between the start of the period and now:
  week    - the trailing 7 days
  month   - since the 1st of the current month
  quarter - since the 1st of the current quarter
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from .calendar_view import parse_due_date
from .schema import Task, Priority

PERIODS = {
    "week": "This Week",
    "month": "This Month",
    "quarter": "This Quarter",
}


class ReportError(ValueError):
    """Raised for an unknown report period."""
    pass


def period_start(period: str, now: datetime) -> datetime:
    if period == "week":
        return now - timedelta(days=7)
    midnight = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == "month":
        return midnight
    if period == "quarter":
        return midnight.replace(month=(now.month - 1) // 3 * 3 + 1)
    raise ReportError(f"Unknown report period: {period}. Allowed: {', '.join(PERIODS)}")


def _rate(done: int, total: int) -> int:
    return round(done / total * 100) if total else 0


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def generate_report(
    tasks: Iterable[Task],
    period: str = "week",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the report dict for one period."""
    if now is None:
        now = datetime.now(timezone.utc)
    start = period_start(period, now)

    period_tasks = [t for t in tasks if start <= _as_utc(t.created_at) <= now]
    completed = [t for t in period_tasks if t.completed]

    today = now.date()
    overdue = []
    for t in period_tasks:
        due = parse_due_date(t.due_date)
        if due is not None and due <= today and not t.completed:
            overdue.append(t)

    priority_stats = {}
    for p in Priority.values():
        total = sum(1 for t in period_tasks if t.priority == p)
        done = sum(1 for t in completed if t.priority == p)
        priority_stats[p] = {"total": total, "completed": done, "rate": _rate(done, total)}

    return {
        "period": period,
        "periodName": PERIODS[period],
        "startDate": start.isoformat(),
        "generated": now.isoformat(),
        "totalTasks": len(period_tasks),
        "completedTasks": len(completed),
        "completionRate": _rate(len(completed), len(period_tasks)),
        "highPriorityTasks": sum(1 for t in period_tasks if t.priority == Priority.HIGH.value),
        "overdueTasks": len(overdue),
        "priorityStats": priority_stats,
        "tasks": [
            {
                "title": t.title,
                "priority": t.priority,
                "status": "Completed" if t.completed else "Pending",
                "dueDate": t.due_date,
            }
            for t in period_tasks
        ],
    }
