"""Task search: free-text, priority and completion-status filters."""
from typing import Iterable, List

from .schema import Task

STATUS_FILTERS = ("all", "completed", "pending")


def matches(task: Task, query: str = "", priority: str = "all", status: str = "all") -> bool:
    q = query.strip().lower()
    if q and q not in task.title.lower() and q not in task.description.lower():
        return False
    if priority != "all" and task.priority != priority:
        return False
    if status == "completed" and not task.completed:
        return False
    if status == "pending" and task.completed:
        return False
    return True


def filter_tasks(
    tasks: Iterable[Task],
    query: str = "",
    priority: str = "all",
    status: str = "all",
) -> List[Task]:
    """Return the tasks matching every active filter, preserving order."""
    return [t for t in tasks if matches(t, query, priority, status)]
