"""
Task dashboard storage.

Storage is the contract the request layer talks to. MemStorage keeps
everything in process memory; data resets on restart.
"""
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .schema import User, Task
from .stats import TaskStats, compute_task_stats

logger = logging.getLogger(__name__)

PLACEHOLDER_PASSWORD = "password123"

# Attributes a partial update may touch. id, password and created_at never change.
USER_MUTABLE = ("username", "name", "email", "role", "department",
                "location", "profile_image", "join_date")
TASK_MUTABLE = ("title", "description", "completed", "priority", "due_date")


DEFAULT_USER = {
    "id": 1,
    "username": "avinash",
    "password": PLACEHOLDER_PASSWORD,
    "name": "Avinash",
    "email": "avinash@example.com",
    "role": "Product Manager",
    "department": "Engineering",
    "location": "Pune, Maharashtra",
    "profile_image": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
                     "?ixlib=rb-4.0.3&auto=format&fit=crop&w=100&h=100",
    "join_date": "Jan 2024",
}

SAMPLE_TASKS = [
    {
        "id": 1, "userId": 1,
        "title": "Complete project wireframes",
        "description": "Finalize the wireframes for the new dashboard interface",
        "completed": False, "priority": "High", "dueDate": "Dec 28, 2024",
        "createdAt": "2024-12-20T00:00:00+00:00",
    },
    {
        "id": 2, "userId": 1,
        "title": "Review team performance reports",
        "description": "Analyze Q4 performance metrics and prepare feedback",
        "completed": True, "priority": "Medium", "dueDate": "Dec 25, 2024",
        "createdAt": "2024-12-15T00:00:00+00:00",
    },
    {
        "id": 3, "userId": 1,
        "title": "Prepare client presentation",
        "description": "Create slides for upcoming client meeting on project progress",
        "completed": False, "priority": "Medium", "dueDate": "Dec 30, 2024",
        "createdAt": "2024-12-22T00:00:00+00:00",
    },
    {
        "id": 4, "userId": 1,
        "title": "Update user documentation",
        "description": "Revise API documentation based on recent updates",
        "completed": False, "priority": "Low", "dueDate": "Jan 5, 2025",
        "createdAt": "2024-12-18T00:00:00+00:00",
    },
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Storage(ABC):
    """Storage contract for users and tasks.

    Lookups that miss return None rather than raising. Implementations hand
    out copies, so callers must go through update_* to change a record.
    """

    # ── Users ──

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, data: Dict[str, Any]) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]: ...

    # ── Tasks ──

    @abstractmethod
    def get_tasks(self, user_id: int) -> List[Task]: ...

    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    def create_task(
        self,
        user_id: int,
        title: str,
        description: str,
        priority: str,
        due_date: str,
        completed: bool = False,
    ) -> Task: ...

    @abstractmethod
    def update_task(self, task_id: int, updates: Dict[str, Any]) -> Optional[Task]: ...

    @abstractmethod
    def delete_task(self, task_id: int) -> bool: ...

    # ── Statistics ──

    def get_task_stats(self, user_id: int) -> TaskStats:
        """Summary counts over the owner's current tasks."""
        return compute_task_stats(self, user_id)


class MemStorage(Storage):
    """In-memory store: two dicts keyed by ID plus one counter per entity type."""

    def __init__(self, seed: bool = True, clock: Callable[[], datetime] = utc_now):
        self._users: Dict[int, User] = {}
        self._tasks: Dict[int, Task] = {}
        self._next_user_id = 1
        self._next_task_id = 1
        self._clock = clock
        # Counter bumps and read-modify-write updates happen under this lock
        self._lock = threading.RLock()
        if seed:
            self._seed()

    def _seed(self):
        """Load the demo user and the four sample tasks."""
        user = User(**DEFAULT_USER)
        self._users[user.id] = user
        self._next_user_id = user.id + 1

        for data in SAMPLE_TASKS:
            task = Task.from_dict(data)
            self._tasks[task.id] = task
        self._next_task_id = max(self._tasks) + 1
        logger.debug(f"Seeded {len(self._users)} user(s), {len(self._tasks)} task(s)")

    # ── Users ──

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return replace(user)
        return None

    def create_user(self, data: Dict[str, Any]) -> User:
        """Create a user. The handle is taken from the email; the password is a placeholder."""
        fields = {k: v for k, v in data.items() if k in USER_MUTABLE}
        with self._lock:
            user_id = self._next_user_id
            self._next_user_id += 1
            fields["username"] = fields.get("email", "")
            user = User(id=user_id, password=PLACEHOLDER_PASSWORD, **fields)
            self._users[user_id] = user
        logger.info(f"Created user {user_id} ({user.username})")
        return replace(user)

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            changes = {k: v for k, v in updates.items() if k in USER_MUTABLE}
            updated = replace(user, **changes)
            self._users[user_id] = updated
            return replace(updated)

    # ── Tasks ──

    def get_tasks(self, user_id: int) -> List[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks.values() if t.user_id == user_id]

    def get_task(self, task_id: int) -> Optional[Task]:
        with self._lock:
            task = self._tasks.get(task_id)
            return replace(task) if task else None

    def create_task(
        self,
        user_id: int,
        title: str,
        description: str,
        priority: str,
        due_date: str,
        completed: bool = False,
    ) -> Task:
        with self._lock:
            task_id = self._next_task_id
            self._next_task_id += 1
            task = Task(
                id=task_id,
                user_id=user_id,
                title=title,
                description=description,
                completed=bool(completed),
                priority=priority,
                due_date=due_date,
                created_at=self._clock(),
            )
            self._tasks[task_id] = task
        logger.info(f"Created task {task_id} for user {user_id}: {title}")
        return replace(task)

    def update_task(self, task_id: int, updates: Dict[str, Any]) -> Optional[Task]:
        """Shallow-merge updates into a task. id, owner and created_at are left alone."""
        with self._lock:
            task = self._tasks.get(task_id)
            if not task:
                return None
            changes = {k: v for k, v in updates.items() if k in TASK_MUTABLE}
            updated = replace(task, **changes)
            self._tasks[task_id] = updated
            return replace(updated)

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            removed = self._tasks.pop(task_id, None) is not None
        if removed:
            logger.info(f"Deleted task {task_id}")
        return removed
