"""Concrete repository implementation for Communication backed by SQLAlchemy."""

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.interfaces import CommunicationRepository
from alfred.domain.entities import (
    Communication,
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
)
from alfred.infrastructure.database.models import CommunicationModel


class SQLAlchemyCommunicationRepository(CommunicationRepository):
    """Implements the CommunicationRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CommunicationModel) -> Communication:
        return Communication(
            id=model.id,
            type=CommunicationType(model.type),
            title=model.title,
            content=model.content,
            priority=CommunicationPriority(model.priority),
            source=CommunicationSource(model.source),
            project_id=model.project_id,
            tags=list(model.tags or []),
            posted_at=model.posted_at,
            is_ai=model.is_ai,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _apply(model: CommunicationModel, entity: Communication) -> None:
        model.type = entity.type.value
        model.title = entity.title
        model.content = entity.content
        model.priority = entity.priority.value
        model.source = entity.source.value
        model.project_id = entity.project_id
        model.tags = list(entity.tags)
        model.posted_at = entity.posted_at
        model.is_ai = entity.is_ai
        model.updated_at = entity.updated_at

    async def get_by_id(self, communication_id: str) -> Communication | None:
        result = await self._session.get(CommunicationModel, communication_id)
        return self._to_entity(result) if result else None

    async def get_all(
        self,
        *,
        type: str | None = None,
        priority: str | None = None,
        project_id: str | None = None,
        source: str | None = None,
        is_ai: bool | None = None,
    ) -> list[Communication]:
        stmt = select(CommunicationModel)

        if type is not None:
            stmt = stmt.where(CommunicationModel.type == type)
        if priority is not None:
            stmt = stmt.where(CommunicationModel.priority == priority)
        if project_id is not None:
            stmt = stmt.where(CommunicationModel.project_id == project_id)
        if source is not None:
            stmt = stmt.where(CommunicationModel.source == source)
        if is_ai is not None:
            stmt = stmt.where(CommunicationModel.is_ai == is_ai)

        stmt = stmt.order_by(CommunicationModel.posted_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def search(self, term: str) -> list[Communication]:
        needle = term.lower()
        stmt = (
            select(CommunicationModel)
            .where(
                or_(
                    func.lower(CommunicationModel.title).contains(needle, autoescape=True),
                    func.lower(CommunicationModel.content).contains(needle, autoescape=True),
                    func.lower(cast(CommunicationModel.tags, String)).contains(
                        needle, autoescape=True
                    ),
                )
            )
            .order_by(CommunicationModel.posted_at.desc())
        )
        result = await self._session.execute(stmt)
        # The tags column is matched as serialised JSON; re-check per tag.
        return [
            entity
            for entity in (self._to_entity(row) for row in result.scalars().all())
            if entity.matches(term)
        ]

    async def create(self, communication: Communication) -> Communication:
        model = CommunicationModel(id=communication.id, created_at=communication.created_at)
        self._apply(model, communication)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, communication: Communication) -> Communication:
        model = await self._session.get(CommunicationModel, communication.id)
        if model is None:
            raise ValueError(f"Communication {communication.id} not found in database")
        self._apply(model, communication)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, communication_id: str) -> bool:
        model = await self._session.get(CommunicationModel, communication_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
