"""Domain entity for project communications (feed items)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class CommunicationType(str, Enum):
    INSIGHT = "insight"
    STATUS_UPDATE = "status-update"
    PERMIT = "permit"
    RISK = "risk"


class CommunicationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class CommunicationSource(str, Enum):
    AI = "ai"
    CONTRACTOR = "contractor"
    AUTHORITY = "authority"
    SYSTEM = "system"


@dataclass
class Communication:
    """A message posted to a project's feed by a person, authority or the AI."""

    type: CommunicationType
    title: str
    content: str
    source: CommunicationSource
    project_id: str
    priority: CommunicationPriority = CommunicationPriority.NORMAL
    tags: list[str] = field(default_factory=list)
    posted_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    is_ai: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, **changes: Any) -> None:
        """Apply the given field changes and refresh the updated_at timestamp."""
        for name, value in changes.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, content and tags."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )
