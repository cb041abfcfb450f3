"""Application service (use case) for action items and risk assessments."""

from datetime import datetime, timezone

from alfred.application.interfaces import ActionItemRepository, RiskAssessmentRepository
from alfred.application.schemas.action import (
    ActionCounts,
    ActionItemCreate,
    ActionItemUpdate,
    ActionRiskStatistics,
    RiskAssessmentCreate,
    RiskAssessmentUpdate,
    RiskCounts,
)
from alfred.domain.entities import (
    ActionItem,
    ActionPriority,
    ActionStatus,
    RiskAssessment,
    RiskImpact,
    RiskProbability,
    RiskStatus,
    parse_action_status,
)
from alfred.domain.entities.risk_assessment import HIGH_IMPACTS
from alfred.domain.exceptions import EntityNotFoundError


class ActionService:
    """Action Center use cases. Both repositories are injected (DI)."""

    def __init__(
        self,
        action_repository: ActionItemRepository,
        risk_repository: RiskAssessmentRepository,
    ):
        self._actions = action_repository
        self._risks = risk_repository

    # ── Action items ────────────────────────────────────────────────

    async def get_action(self, action_id: str) -> ActionItem:
        action = await self._actions.get_by_id(action_id)
        if action is None:
            raise EntityNotFoundError("ActionItem", action_id)
        return action

    async def list_actions(
        self,
        *,
        priority: str | None = None,
        status: str | None = None,
        project_id: str | None = None,
        type: str | None = None,
    ) -> list[ActionItem]:
        return await self._actions.get_all(
            priority=priority, status=status, project_id=project_id, type=type
        )

    async def list_overdue(self, now: datetime | None = None) -> list[ActionItem]:
        return await self._actions.get_overdue(now or datetime.now(timezone.utc))

    async def create_action(self, data: ActionItemCreate) -> ActionItem:
        action = ActionItem(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            project_id=data.project_id,
            type=data.type,
            priority=data.priority or ActionPriority.MEDIUM,
            status=data.status or ActionStatus.NEW,
            assigned_to=data.assigned_to,
        )
        return await self._actions.create(action)

    async def update_action(self, action_id: str, data: ActionItemUpdate) -> ActionItem:
        action = await self.get_action(action_id)
        action.update(**data.model_dump(exclude_none=True))
        return await self._actions.update(action)

    async def update_status(self, action_id: str, status: str) -> ActionItem:
        """Move an action through its lifecycle; unknown values are rejected up front."""
        new_status = parse_action_status(status)
        action = await self.get_action(action_id)
        action.change_status(new_status)
        return await self._actions.update(action)

    async def delete_action(self, action_id: str) -> None:
        if not await self._actions.delete(action_id):
            raise EntityNotFoundError("ActionItem", action_id)

    # ── Risk assessments ────────────────────────────────────────────

    async def get_risk(self, risk_id: str) -> RiskAssessment:
        risk = await self._risks.get_by_id(risk_id)
        if risk is None:
            raise EntityNotFoundError("RiskAssessment", risk_id)
        return risk

    async def list_risks(
        self,
        *,
        project_id: str | None = None,
        impact: str | None = None,
        status: str | None = None,
    ) -> list[RiskAssessment]:
        return await self._risks.get_all(
            project_id=project_id,
            impacts=[impact] if impact else None,
            status=status,
        )

    async def list_high_risks(self) -> list[RiskAssessment]:
        return await self._risks.get_all(impacts=[i.value for i in HIGH_IMPACTS])

    async def create_risk(self, data: RiskAssessmentCreate) -> RiskAssessment:
        risk = RiskAssessment(
            project_id=data.project_id,
            risk_type=data.risk_type,
            description=data.description,
            mitigation=data.mitigation,
            impact=data.impact or RiskImpact.MEDIUM,
            probability=data.probability or RiskProbability.MEDIUM,
            status=data.status or RiskStatus.OPEN,
        )
        return await self._risks.create(risk)

    async def update_risk(self, risk_id: str, data: RiskAssessmentUpdate) -> RiskAssessment:
        risk = await self.get_risk(risk_id)
        risk.update(**data.model_dump(exclude_none=True))
        return await self._risks.update(risk)

    async def delete_risk(self, risk_id: str) -> None:
        if not await self._risks.delete(risk_id):
            raise EntityNotFoundError("RiskAssessment", risk_id)

    # ── Statistics ──────────────────────────────────────────────────

    async def get_statistics(self) -> ActionRiskStatistics:
        actions = await self._actions.get_all()
        risks = await self._risks.get_all()
        return ActionRiskStatistics(
            actions=ActionCounts(
                total_actions=len(actions),
                new_actions=sum(a.status == ActionStatus.NEW for a in actions),
                in_progress_actions=sum(a.status == ActionStatus.IN_PROGRESS for a in actions),
                resolved_actions=sum(a.status == ActionStatus.RESOLVED for a in actions),
            ),
            risks=RiskCounts(
                total_risks=len(risks),
                open_risks=sum(r.status == RiskStatus.OPEN for r in risks),
                mitigated_risks=sum(r.status == RiskStatus.MITIGATED for r in risks),
                high_impact_risks=sum(r.is_high_impact for r in risks),
            ),
        )
