"""Application service (use case) for Communication operations."""

from datetime import datetime, timezone
from typing import Any

from alfred.application.interfaces import CommunicationRepository
from alfred.application.schemas.communication import (
    AIInsightRequest,
    CommunicationCreate,
    CommunicationUpdate,
)
from alfred.domain.entities import (
    Communication,
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
)
from alfred.domain.exceptions import EntityNotFoundError


class CommunicationService:
    """Orchestrates the project feed: posts, edits, search and AI insights."""

    def __init__(self, repository: CommunicationRepository):
        self._repository = repository

    async def get_communication(self, communication_id: str) -> Communication:
        communication = await self._repository.get_by_id(communication_id)
        if communication is None:
            raise EntityNotFoundError("Communication", communication_id)
        return communication

    async def list_communications(
        self,
        *,
        type: str | None = None,
        priority: str | None = None,
        project_id: str | None = None,
        source: str | None = None,
    ) -> list[Communication]:
        return await self._repository.get_all(
            type=type, priority=priority, project_id=project_id, source=source
        )

    async def list_for_project(self, project_id: str) -> list[Communication]:
        return await self._repository.get_all(project_id=project_id)

    async def list_ai_insights(self) -> list[Communication]:
        return await self._repository.get_all(is_ai=True)

    async def search(self, term: str) -> list[Communication]:
        return await self._repository.search(term)

    async def create_communication(self, data: CommunicationCreate) -> Communication:
        communication = Communication(
            type=data.type,
            title=data.title,
            content=data.content,
            source=data.source,
            project_id=data.project_id,
            priority=data.priority or CommunicationPriority.NORMAL,
            tags=list(data.tags or []),
            posted_at=data.posted_at or datetime.now(timezone.utc).isoformat(),
            is_ai=bool(data.is_ai),
        )
        return await self._repository.create(communication)

    async def update_communication(
        self, communication_id: str, data: CommunicationUpdate
    ) -> Communication:
        communication = await self.get_communication(communication_id)
        changes: dict[str, Any] = data.model_dump(exclude_none=True)
        communication.update(**changes)
        return await self._repository.update(communication)

    async def delete_communication(self, communication_id: str) -> None:
        if not await self._repository.delete(communication_id):
            raise EntityNotFoundError("Communication", communication_id)

    async def generate_ai_insight(self, data: AIInsightRequest) -> Communication:
        """Store an AI-authored insight as a high-priority feed item."""
        insight = Communication(
            type=CommunicationType.INSIGHT,
            title=f"AI Insight: {data.insight_type}",
            content=data.content,
            priority=CommunicationPriority.HIGH,
            source=CommunicationSource.AI,
            project_id=data.project_id,
            tags=["ai", "insight", data.insight_type],
            is_ai=True,
        )
        return await self._repository.create(insight)
