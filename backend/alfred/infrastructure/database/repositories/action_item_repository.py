"""Concrete repository implementation for ActionItem backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.interfaces import ActionItemRepository
from alfred.domain.entities import ActionItem, ActionPriority, ActionStatus, ActionType
from alfred.infrastructure.database.models import ActionItemModel


class SQLAlchemyActionItemRepository(ActionItemRepository):
    """Implements the ActionItemRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ActionItemModel) -> ActionItem:
        return ActionItem(
            id=model.id,
            title=model.title,
            description=model.description,
            priority=ActionPriority(model.priority),
            status=ActionStatus(model.status),
            due_date=model.due_date,
            project_id=model.project_id,
            type=ActionType(model.type),
            assigned_to=model.assigned_to,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _apply(model: ActionItemModel, entity: ActionItem) -> None:
        model.title = entity.title
        model.description = entity.description
        model.priority = entity.priority.value
        model.status = entity.status.value
        model.due_date = entity.due_date
        model.project_id = entity.project_id
        model.type = entity.type.value
        model.assigned_to = entity.assigned_to
        model.updated_at = entity.updated_at

    async def get_by_id(self, action_id: str) -> ActionItem | None:
        result = await self._session.get(ActionItemModel, action_id)
        return self._to_entity(result) if result else None

    async def get_all(
        self,
        *,
        priority: str | None = None,
        status: str | None = None,
        project_id: str | None = None,
        type: str | None = None,
    ) -> list[ActionItem]:
        stmt = select(ActionItemModel)

        if priority is not None:
            stmt = stmt.where(ActionItemModel.priority == priority)
        if status is not None:
            stmt = stmt.where(ActionItemModel.status == status)
        if project_id is not None:
            stmt = stmt.where(ActionItemModel.project_id == project_id)
        if type is not None:
            stmt = stmt.where(ActionItemModel.type == type)

        stmt = stmt.order_by(ActionItemModel.due_date.asc(), ActionItemModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_overdue(self, now: datetime) -> list[ActionItem]:
        stmt = (
            select(ActionItemModel)
            .where(ActionItemModel.status != ActionStatus.RESOLVED.value)
            .where(ActionItemModel.due_date < now.isoformat())
            .order_by(ActionItemModel.due_date.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, action: ActionItem) -> ActionItem:
        model = ActionItemModel(id=action.id, created_at=action.created_at)
        self._apply(model, action)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, action: ActionItem) -> ActionItem:
        model = await self._session.get(ActionItemModel, action.id)
        if model is None:
            raise ValueError(f"ActionItem {action.id} not found in database")
        self._apply(model, action)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, action_id: str) -> bool:
        model = await self._session.get(ActionItemModel, action_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
