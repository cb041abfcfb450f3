"""Domain entity for project risk assessments."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class RiskImpact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskProbability(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskStatus(str, Enum):
    OPEN = "open"
    MITIGATED = "mitigated"
    CLOSED = "closed"


HIGH_IMPACTS = (RiskImpact.HIGH, RiskImpact.CRITICAL)


@dataclass
class RiskAssessment:
    """A named risk on a project together with its mitigation plan."""

    project_id: str
    risk_type: str
    description: str
    mitigation: str
    impact: RiskImpact = RiskImpact.MEDIUM
    probability: RiskProbability = RiskProbability.MEDIUM
    status: RiskStatus = RiskStatus.OPEN
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, **changes: Any) -> None:
        """Apply the given field changes and refresh the updated_at timestamp."""
        for name, value in changes.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    @property
    def is_high_impact(self) -> bool:
        return self.impact in HIGH_IMPACTS
