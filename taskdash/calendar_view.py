"""
Calendar placement of tasks.

Due dates are free text typed by the user ("Dec 28, 2024", "12/28/2024", ...).
parse_due_date() understands the common shapes; anything else is unscheduled.
"""
import calendar
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .schema import Task

DUE_DATE_FORMATS = (
    "%b %d, %Y",     # Dec 28, 2024
    "%B %d, %Y",     # December 28, 2024
    "%m/%d/%Y",      # 12/28/2024
    "%Y-%m-%d",      # 2024-12-28
)


def parse_due_date(text: str) -> Optional[date]:
    """Parse a due-date display string, or None if it has no recognised shape."""
    if not text:
        return None
    text = " ".join(text.split())
    for fmt in DUE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def month_view(tasks: Iterable[Task], year: int, month: int) -> Dict[str, Any]:
    """Place tasks on the days of one month.

    Returns the grid geometry (days in month, weekday of the 1st with Sunday
    as 0) plus the tasks due on each day. Only days with tasks are listed.
    Tasks whose due date cannot be parsed go under "unscheduled".
    """
    first_weekday, days_in_month = calendar.monthrange(year, month)
    days: Dict[int, List[Dict[str, Any]]] = {}
    unscheduled = []

    for task in tasks:
        due = parse_due_date(task.due_date)
        if due is None:
            unscheduled.append(task.to_dict())
            continue
        if due.year == year and due.month == month:
            days.setdefault(due.day, []).append(task.to_dict())

    return {
        "year": year,
        "month": month,
        "daysInMonth": days_in_month,
        # calendar uses Monday=0; the grid starts on Sunday
        "firstWeekday": (first_weekday + 1) % 7,
        "days": {str(d): days[d] for d in sorted(days)},
        "unscheduled": unscheduled,
    }
