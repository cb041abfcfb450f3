"""Concrete repository implementation for RiskAssessment backed by SQLAlchemy."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.interfaces import RiskAssessmentRepository
from alfred.domain.entities import RiskAssessment, RiskImpact, RiskProbability, RiskStatus
from alfred.infrastructure.database.models import RiskAssessmentModel


class SQLAlchemyRiskAssessmentRepository(RiskAssessmentRepository):
    """Implements the RiskAssessmentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RiskAssessmentModel) -> RiskAssessment:
        return RiskAssessment(
            id=model.id,
            project_id=model.project_id,
            risk_type=model.risk_type,
            description=model.description,
            impact=RiskImpact(model.impact),
            probability=RiskProbability(model.probability),
            mitigation=model.mitigation,
            status=RiskStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _apply(model: RiskAssessmentModel, entity: RiskAssessment) -> None:
        model.project_id = entity.project_id
        model.risk_type = entity.risk_type
        model.description = entity.description
        model.impact = entity.impact.value
        model.probability = entity.probability.value
        model.mitigation = entity.mitigation
        model.status = entity.status.value
        model.updated_at = entity.updated_at

    async def get_by_id(self, risk_id: str) -> RiskAssessment | None:
        result = await self._session.get(RiskAssessmentModel, risk_id)
        return self._to_entity(result) if result else None

    async def get_all(
        self,
        *,
        project_id: str | None = None,
        impacts: Sequence[str] | None = None,
        status: str | None = None,
    ) -> list[RiskAssessment]:
        stmt = select(RiskAssessmentModel)

        if project_id is not None:
            stmt = stmt.where(RiskAssessmentModel.project_id == project_id)
        if impacts:
            stmt = stmt.where(RiskAssessmentModel.impact.in_(list(impacts)))
        if status is not None:
            stmt = stmt.where(RiskAssessmentModel.status == status)

        stmt = stmt.order_by(RiskAssessmentModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, risk: RiskAssessment) -> RiskAssessment:
        model = RiskAssessmentModel(id=risk.id, created_at=risk.created_at)
        self._apply(model, risk)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, risk: RiskAssessment) -> RiskAssessment:
        model = await self._session.get(RiskAssessmentModel, risk.id)
        if model is None:
            raise ValueError(f"RiskAssessment {risk.id} not found in database")
        self._apply(model, risk)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, risk_id: str) -> bool:
        model = await self._session.get(RiskAssessmentModel, risk_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
