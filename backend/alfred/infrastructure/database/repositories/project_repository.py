"""Concrete repository implementation for Project backed by SQLAlchemy."""

from dataclasses import asdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.interfaces import ProjectRepository
from alfred.domain.entities import (
    Coordinates,
    Project,
    ProjectLocation,
    ProjectStatus,
    WeatherSnapshot,
)
from alfred.infrastructure.database.models import ProjectModel


class SQLAlchemyProjectRepository(ProjectRepository):
    """Implements the ProjectRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ProjectModel) -> Project:
        """Map ORM model → domain entity."""
        return Project(
            id=model.id,
            name=model.name,
            location=ProjectLocation(
                city=model.city,
                state=model.state,
                coordinates=Coordinates(lat=model.latitude, lng=model.longitude),
            ),
            capacity=model.capacity,
            progress=model.progress,
            status=ProjectStatus(model.status),
            start_date=model.start_date,
            end_date=model.end_date,
            weather=WeatherSnapshot(**(model.weather or {})),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _apply(model: ProjectModel, entity: Project) -> None:
        model.name = entity.name
        model.city = entity.location.city
        model.state = entity.location.state
        model.latitude = entity.location.coordinates.lat
        model.longitude = entity.location.coordinates.lng
        model.capacity = entity.capacity
        model.progress = entity.progress
        model.status = entity.status.value
        model.start_date = entity.start_date
        model.end_date = entity.end_date
        model.weather = asdict(entity.weather)
        model.updated_at = entity.updated_at

    async def get_by_id(self, project_id: str) -> Project | None:
        result = await self._session.get(ProjectModel, project_id)
        return self._to_entity(result) if result else None

    async def get_all(
        self,
        *,
        status: str | None = None,
        city: str | None = None,
        state: str | None = None,
    ) -> list[Project]:
        stmt = select(ProjectModel)

        if status is not None:
            stmt = stmt.where(ProjectModel.status == status)
        if city is not None:
            stmt = stmt.where(ProjectModel.city == city)
        if state is not None:
            stmt = stmt.where(ProjectModel.state == state)

        stmt = stmt.order_by(ProjectModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, project: Project) -> Project:
        model = ProjectModel(id=project.id, created_at=project.created_at)
        self._apply(model, project)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, project: Project) -> Project:
        model = await self._session.get(ProjectModel, project.id)
        if model is None:
            raise ValueError(f"Project {project.id} not found in database")
        self._apply(model, project)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, project_id: str) -> bool:
        model = await self._session.get(ProjectModel, project_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
