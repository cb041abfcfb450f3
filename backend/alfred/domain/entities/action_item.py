"""Domain entity for action items raised against a project."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from alfred.domain.exceptions import InvalidFieldValueError


class ActionPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ActionStatus(str, Enum):
    """Lifecycle states of an action item."""

    NEW = "new"
    IN_PROGRESS = "in-progress"
    MONITORING = "monitoring"
    RESOLVED = "resolved"


class ActionType(str, Enum):
    RFI = "rfi"
    RISK = "risk"
    TASK = "task"
    ALERT = "alert"


def parse_action_status(value: str) -> ActionStatus:
    """Map a raw status string onto ActionStatus or raise InvalidFieldValueError."""
    try:
        return ActionStatus(value)
    except ValueError:
        raise InvalidFieldValueError("status", value, "Invalid status value") from None


@dataclass
class ActionItem:
    """Something a site manager has to act on: an RFI, a risk, a task or an alert."""

    title: str
    description: str
    due_date: str
    project_id: str
    type: ActionType
    priority: ActionPriority = ActionPriority.MEDIUM
    status: ActionStatus = ActionStatus.NEW
    assigned_to: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, **changes: Any) -> None:
        """Apply the given field changes and refresh the updated_at timestamp."""
        for name, value in changes.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def change_status(self, status: ActionStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)

    def is_overdue(self, now: datetime) -> bool:
        """Unresolved and due before ``now`` (ISO strings compare lexically)."""
        return self.status != ActionStatus.RESOLVED and self.due_date < now.isoformat()
