"""Communications API controller — project feed, search and AI insights."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from alfred.application.schemas import (
    AIInsightRequest,
    ApiResponse,
    CommunicationCreate,
    CommunicationResponse,
    CommunicationUpdate,
    to_payload,
)
from alfred.application.services import CommunicationService, MutationNotifier, NotificationHub
from alfred.domain.entities import (
    Communication,
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
)
from alfred.domain.events import EventTopic
from alfred.domain.exceptions import EntityNotFoundError
from alfred.infrastructure.dependencies import (
    get_communication_service,
    get_mutation_notifier,
    get_notification_hub,
)
from alfred.presentation.api.caching import set_cache_headers

router = APIRouter(prefix="/communications", tags=["Communications"])


def _to_response(communication: Communication) -> CommunicationResponse:
    return CommunicationResponse.model_validate(communication, from_attributes=True)


def _many(communications: list[Communication]) -> list[CommunicationResponse]:
    return [_to_response(c) for c in communications]


@router.get("", response_model=ApiResponse[list[CommunicationResponse]])
async def list_communications(
    response: Response,
    type: CommunicationType | None = Query(None),
    priority: CommunicationPriority | None = Query(None),
    project_id: str | None = Query(None, alias="projectId"),
    source: CommunicationSource | None = Query(None),
    service: CommunicationService = Depends(get_communication_service),
) -> ApiResponse[list[CommunicationResponse]]:
    """List the feed, most recently posted first."""
    communications = await service.list_communications(
        type=type.value if type else None,
        priority=priority.value if priority else None,
        project_id=project_id,
        source=source.value if source else None,
    )
    set_cache_headers(response, max_age=30, tag="communications")
    return ApiResponse(data=_many(communications), message="Communications retrieved successfully")


@router.post("", response_model=ApiResponse[CommunicationResponse], status_code=status.HTTP_201_CREATED)
async def create_communication(
    data: CommunicationCreate,
    service: CommunicationService = Depends(get_communication_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[CommunicationResponse]:
    communication = await service.create_communication(data)
    await notifier.publish(
        EventTopic.COMMUNICATION_NEW, to_payload(CommunicationResponse, communication)
    )
    return ApiResponse(
        data=_to_response(communication), message="Communication created successfully"
    )


@router.get("/project/{project_id}", response_model=ApiResponse[list[CommunicationResponse]])
async def communications_for_project(
    project_id: str,
    service: CommunicationService = Depends(get_communication_service),
) -> ApiResponse[list[CommunicationResponse]]:
    communications = await service.list_for_project(project_id)
    return ApiResponse(
        data=_many(communications), message="Communications by project retrieved successfully"
    )


@router.get("/search", response_model=ApiResponse[list[CommunicationResponse]])
async def search_communications(
    q: str = Query(..., min_length=1, description="Case-insensitive text to look for"),
    service: CommunicationService = Depends(get_communication_service),
) -> ApiResponse[list[CommunicationResponse]]:
    communications = await service.search(q)
    return ApiResponse(data=_many(communications), message="Search completed successfully")


@router.get("/ai-insights", response_model=ApiResponse[list[CommunicationResponse]])
async def list_ai_insights(
    service: CommunicationService = Depends(get_communication_service),
) -> ApiResponse[list[CommunicationResponse]]:
    communications = await service.list_ai_insights()
    return ApiResponse(data=_many(communications), message="AI insights retrieved successfully")


@router.post(
    "/ai-insight",
    response_model=ApiResponse[CommunicationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def generate_ai_insight(
    data: AIInsightRequest,
    service: CommunicationService = Depends(get_communication_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[CommunicationResponse]:
    """Store an AI insight and push it to subscribers as ``ai-insight``."""
    insight = await service.generate_ai_insight(data)
    await notifier.publish(EventTopic.AI_INSIGHT, to_payload(CommunicationResponse, insight))
    return ApiResponse(data=_to_response(insight), message="AI insight generated successfully")


@router.post("/test-socket", response_model=ApiResponse[None])
async def test_socket(
    hub: NotificationHub = Depends(get_notification_hub),
) -> ApiResponse[None]:
    """Push a fake communication and a fake insight to every connected client."""
    stamp = int(time.time() * 1000)
    now = datetime.now(timezone.utc).isoformat()
    await hub.broadcast_all(
        EventTopic.COMMUNICATION_NEW,
        {
            "id": f"test-{stamp}",
            "type": "status-update",
            "title": "Test Communication",
            "content": "This is a test communication for socket testing.",
            "priority": "normal",
            "source": "system",
            "projectId": "test-project",
            "tags": ["test", "socket"],
            "postedAt": now,
            "isAI": False,
        },
    )
    await hub.broadcast_all(
        EventTopic.AI_INSIGHT,
        {
            "id": f"insight-{stamp}",
            "type": "test-insight",
            "message": "This is a test AI insight for socket testing.",
            "priority": "high",
            "timestamp": now,
        },
    )
    return ApiResponse(message="Test socket events sent successfully")


@router.get("/{communication_id}", response_model=ApiResponse[CommunicationResponse])
async def get_communication(
    communication_id: str,
    service: CommunicationService = Depends(get_communication_service),
) -> ApiResponse[CommunicationResponse]:
    try:
        communication = await service.get_communication(communication_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ApiResponse(
        data=_to_response(communication), message="Communication retrieved successfully"
    )


@router.put("/{communication_id}", response_model=ApiResponse[CommunicationResponse])
async def update_communication(
    communication_id: str,
    data: CommunicationUpdate,
    service: CommunicationService = Depends(get_communication_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[CommunicationResponse]:
    try:
        communication = await service.update_communication(communication_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    await notifier.publish(
        EventTopic.COMMUNICATION_UPDATE, to_payload(CommunicationResponse, communication)
    )
    return ApiResponse(
        data=_to_response(communication), message="Communication updated successfully"
    )


@router.delete("/{communication_id}", response_model=ApiResponse[None])
async def delete_communication(
    communication_id: str,
    service: CommunicationService = Depends(get_communication_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[None]:
    try:
        await service.delete_communication(communication_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    await notifier.publish(EventTopic.COMMUNICATION_DELETED, {"id": communication_id})
    return ApiResponse(message="Communication deleted successfully")
