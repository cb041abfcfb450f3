"""Pydantic DTOs for action items and risk assessments."""

from datetime import datetime

from pydantic import Field

from alfred.application.schemas.common import CamelModel
from alfred.domain.entities import (
    ActionPriority,
    ActionStatus,
    ActionType,
    RiskImpact,
    RiskProbability,
    RiskStatus,
)


# ── Action items ─────────────────────────────────────────────────────


class ActionItemCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    due_date: str = Field(..., min_length=1)
    project_id: str = Field(..., min_length=1)
    type: ActionType
    priority: ActionPriority | None = None
    status: ActionStatus | None = None
    assigned_to: str | None = None


class ActionItemUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    due_date: str | None = None
    project_id: str | None = None
    type: ActionType | None = None
    priority: ActionPriority | None = None
    status: ActionStatus | None = None
    assigned_to: str | None = None


class ActionStatusUpdate(CamelModel):
    """Body of PATCH /actions/{id}/status. The value is checked by the service."""

    status: str


class ActionItemResponse(CamelModel):
    id: str
    title: str
    description: str
    priority: ActionPriority
    status: ActionStatus
    due_date: str
    project_id: str
    type: ActionType
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime


# ── Risk assessments ─────────────────────────────────────────────────


class RiskAssessmentCreate(CamelModel):
    project_id: str = Field(..., min_length=1)
    risk_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    mitigation: str = Field(..., min_length=1)
    impact: RiskImpact | None = None
    probability: RiskProbability | None = None
    status: RiskStatus | None = None


class RiskAssessmentUpdate(CamelModel):
    project_id: str | None = None
    risk_type: str | None = None
    description: str | None = None
    mitigation: str | None = None
    impact: RiskImpact | None = None
    probability: RiskProbability | None = None
    status: RiskStatus | None = None


class RiskAssessmentResponse(CamelModel):
    id: str
    project_id: str
    risk_type: str
    description: str
    impact: RiskImpact
    probability: RiskProbability
    mitigation: str
    status: RiskStatus
    created_at: datetime
    updated_at: datetime


# ── Statistics ───────────────────────────────────────────────────────


class ActionCounts(CamelModel):
    total_actions: int = 0
    new_actions: int = 0
    in_progress_actions: int = 0
    resolved_actions: int = 0


class RiskCounts(CamelModel):
    total_risks: int = 0
    open_risks: int = 0
    mitigated_risks: int = 0
    high_impact_risks: int = 0


class ActionRiskStatistics(CamelModel):
    actions: ActionCounts
    risks: RiskCounts
