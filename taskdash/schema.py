"""
Task dashboard schema.

Two records live in the store:
  User - the single operator of the dashboard
  Task - a unit of work owned by a user

Records serialize to camelCase dicts, which is what the dashboard UI reads.
"""
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any


class Priority(Enum):
    """Closed set of task priorities."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_str(cls, value: str) -> Optional["Priority"]:
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return None

    @classmethod
    def values(cls):
        return [p.value for p in cls]


@dataclass
class User:
    """The dashboard operator."""

    id: int
    username: str
    password: str                  # clear text, demo only
    name: str = ""
    email: str = ""
    role: str = ""
    department: str = ""
    location: str = ""
    profile_image: str = ""
    join_date: str = ""            # display string, e.g. "Jan 2024"

    def to_public_dict(self) -> Dict[str, Any]:
        """Serialize without the password field."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "department": self.department,
            "location": self.location,
            "profileImage": self.profile_image,
            "joinDate": self.join_date,
        }


@dataclass
class Task:
    """A task owned by a user."""

    id: int
    user_id: int
    title: str
    description: str = ""
    completed: bool = False
    priority: str = Priority.MEDIUM.value
    due_date: str = ""             # free text, e.g. "Dec 28, 2024"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "dueDate": self.due_date,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Deserialize from a camelCase dict (as produced by to_dict)."""
        created_at = data.get("createdAt")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        return cls(
            id=int(data["id"]),
            user_id=int(data.get("userId", 1)),
            title=data.get("title", ""),
            description=data.get("description", ""),
            completed=bool(data.get("completed", False)),
            priority=data.get("priority", Priority.MEDIUM.value),
            due_date=data.get("dueDate", ""),
            created_at=created_at,
        )
