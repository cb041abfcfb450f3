"""Action Center API controller — action items, risk assessments and their stats."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from alfred.application.schemas import (
    ActionItemCreate,
    ActionItemResponse,
    ActionItemUpdate,
    ActionRiskStatistics,
    ActionStatusUpdate,
    ApiResponse,
    RiskAssessmentCreate,
    RiskAssessmentResponse,
    RiskAssessmentUpdate,
    to_payload,
)
from alfred.application.services import ActionService, MutationNotifier
from alfred.domain.entities import (
    ActionItem,
    ActionPriority,
    ActionStatus,
    ActionType,
    RiskAssessment,
    RiskImpact,
    RiskStatus,
)
from alfred.domain.events import EventTopic
from alfred.domain.exceptions import EntityNotFoundError
from alfred.infrastructure.dependencies import get_action_service, get_mutation_notifier

router = APIRouter(prefix="/actions", tags=["Actions"])


def _action(action: ActionItem) -> ActionItemResponse:
    return ActionItemResponse.model_validate(action, from_attributes=True)


def _risk(risk: RiskAssessment) -> RiskAssessmentResponse:
    return RiskAssessmentResponse.model_validate(risk, from_attributes=True)


def _not_found(e: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Action items (static paths) ──────────────────────────────────────


@router.get("", response_model=ApiResponse[list[ActionItemResponse]])
async def list_actions(
    priority: ActionPriority | None = Query(None),
    status_filter: ActionStatus | None = Query(None, alias="status"),
    project_id: str | None = Query(None, alias="projectId"),
    type: ActionType | None = Query(None),
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[list[ActionItemResponse]]:
    """List action items, earliest due first."""
    actions = await service.list_actions(
        priority=priority.value if priority else None,
        status=status_filter.value if status_filter else None,
        project_id=project_id,
        type=type.value if type else None,
    )
    return ApiResponse(
        data=[_action(a) for a in actions], message="Action items retrieved successfully"
    )


@router.post("", response_model=ApiResponse[ActionItemResponse], status_code=status.HTTP_201_CREATED)
async def create_action(
    data: ActionItemCreate,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ActionItemResponse]:
    action = await service.create_action(data)
    await notifier.publish(EventTopic.ACTION_NEW, to_payload(ActionItemResponse, action))
    return ApiResponse(data=_action(action), message="Action item created successfully")


@router.get("/overdue", response_model=ApiResponse[list[ActionItemResponse]])
async def list_overdue(
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[list[ActionItemResponse]]:
    actions = await service.list_overdue()
    return ApiResponse(
        data=[_action(a) for a in actions], message="Overdue action items retrieved successfully"
    )


@router.get("/stats/overview", response_model=ApiResponse[ActionRiskStatistics])
async def statistics(
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[ActionRiskStatistics]:
    stats = await service.get_statistics()
    return ApiResponse(data=stats, message="Action and risk statistics retrieved successfully")


# ── Risk assessments ─────────────────────────────────────────────────


@router.get("/risks", response_model=ApiResponse[list[RiskAssessmentResponse]])
@router.get("/risks/all", response_model=ApiResponse[list[RiskAssessmentResponse]])
async def list_risks(
    project_id: str | None = Query(None, alias="projectId"),
    impact: RiskImpact | None = Query(None),
    status_filter: RiskStatus | None = Query(None, alias="status"),
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[list[RiskAssessmentResponse]]:
    risks = await service.list_risks(
        project_id=project_id,
        impact=impact.value if impact else None,
        status=status_filter.value if status_filter else None,
    )
    return ApiResponse(
        data=[_risk(r) for r in risks], message="Risk assessments retrieved successfully"
    )


@router.get("/risks/high", response_model=ApiResponse[list[RiskAssessmentResponse]])
async def list_high_risks(
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[list[RiskAssessmentResponse]]:
    """Risks whose impact is high or critical."""
    risks = await service.list_high_risks()
    return ApiResponse(
        data=[_risk(r) for r in risks], message="High-risk assessments retrieved successfully"
    )


@router.post(
    "/risks",
    response_model=ApiResponse[RiskAssessmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_risk(
    data: RiskAssessmentCreate,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[RiskAssessmentResponse]:
    risk = await service.create_risk(data)
    await notifier.publish(EventTopic.RISK_NEW, to_payload(RiskAssessmentResponse, risk))
    return ApiResponse(data=_risk(risk), message="Risk assessment created successfully")


@router.get("/risks/{risk_id}", response_model=ApiResponse[RiskAssessmentResponse])
async def get_risk(
    risk_id: str,
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[RiskAssessmentResponse]:
    try:
        risk = await service.get_risk(risk_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(data=_risk(risk), message="Risk assessment retrieved successfully")


@router.put("/risks/{risk_id}", response_model=ApiResponse[RiskAssessmentResponse])
async def update_risk(
    risk_id: str,
    data: RiskAssessmentUpdate,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[RiskAssessmentResponse]:
    try:
        risk = await service.update_risk(risk_id, data)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.RISK_UPDATE, to_payload(RiskAssessmentResponse, risk))
    return ApiResponse(data=_risk(risk), message="Risk assessment updated successfully")


@router.delete("/risks/{risk_id}", response_model=ApiResponse[None])
async def delete_risk(
    risk_id: str,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[None]:
    try:
        await service.delete_risk(risk_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.RISK_DELETED, {"id": risk_id})
    return ApiResponse(message="Risk assessment deleted successfully")


# ── Single action item ───────────────────────────────────────────────


@router.get("/{action_id}", response_model=ApiResponse[ActionItemResponse])
async def get_action(
    action_id: str,
    service: ActionService = Depends(get_action_service),
) -> ApiResponse[ActionItemResponse]:
    try:
        action = await service.get_action(action_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(data=_action(action), message="Action item retrieved successfully")


@router.put("/{action_id}", response_model=ApiResponse[ActionItemResponse])
async def update_action(
    action_id: str,
    data: ActionItemUpdate,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ActionItemResponse]:
    try:
        action = await service.update_action(action_id, data)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.ACTION_UPDATE, to_payload(ActionItemResponse, action))
    return ApiResponse(data=_action(action), message="Action item updated successfully")


@router.patch("/{action_id}/status", response_model=ApiResponse[ActionItemResponse])
async def update_action_status(
    action_id: str,
    data: ActionStatusUpdate,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ActionItemResponse]:
    """Change an action's status. Unknown status values fail the request with 500."""
    try:
        action = await service.update_status(action_id, data.status)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.ACTION_UPDATE, to_payload(ActionItemResponse, action))
    return ApiResponse(data=_action(action), message="Action status updated successfully")


@router.delete("/{action_id}", response_model=ApiResponse[None])
async def delete_action(
    action_id: str,
    service: ActionService = Depends(get_action_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[None]:
    try:
        await service.delete_action(action_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.ACTION_DELETED, {"id": action_id})
    return ApiResponse(message="Action item deleted successfully")
