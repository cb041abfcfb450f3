"""Pydantic DTOs for the Communication feature."""

from datetime import datetime

from pydantic import Field

from alfred.application.schemas.common import CamelModel
from alfred.domain.entities import (
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
)


class CommunicationCreate(CamelModel):
    """Schema for posting a communication. postedAt defaults to now, isAI to false."""

    type: CommunicationType
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    source: CommunicationSource
    project_id: str = Field(..., min_length=1)
    priority: CommunicationPriority | None = None
    tags: list[str] | None = None
    posted_at: str | None = None
    is_ai: bool | None = Field(None, alias="isAI")


class CommunicationUpdate(CamelModel):
    type: CommunicationType | None = None
    title: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = None
    source: CommunicationSource | None = None
    project_id: str | None = None
    priority: CommunicationPriority | None = None
    tags: list[str] | None = None
    posted_at: str | None = None
    is_ai: bool | None = Field(None, alias="isAI")


class AIInsightRequest(CamelModel):
    project_id: str = Field(..., min_length=1)
    insight_type: str = Field(..., min_length=1, examples=["schedule-risk"])
    content: str = Field(..., min_length=1)


class CommunicationResponse(CamelModel):
    id: str
    type: CommunicationType
    title: str
    content: str
    priority: CommunicationPriority
    source: CommunicationSource
    project_id: str
    tags: list[str]
    posted_at: str
    is_ai: bool = Field(alias="isAI")
    created_at: datetime
    updated_at: datetime
