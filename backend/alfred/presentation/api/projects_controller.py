"""Projects API controller — CRUD, progress, roll-ups and the schematic view."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from alfred.application.schemas import (
    ApiResponse,
    NetworkOverview,
    ProgressUpdate,
    ProjectCreate,
    ProjectMetrics,
    ProjectResponse,
    ProjectSchematic,
    ProjectStatistics,
    ProjectUpdate,
    to_payload,
)
from alfred.application.services import MutationNotifier, ProjectService
from alfred.domain.entities import Project, ProjectStatus
from alfred.domain.events import EventTopic
from alfred.domain.exceptions import EntityNotFoundError
from alfred.infrastructure.dependencies import get_mutation_notifier, get_project_service
from alfred.presentation.api.caching import set_cache_headers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])


def _to_response(project: Project) -> ProjectResponse:
    return ProjectResponse.model_validate(project, from_attributes=True)


def _not_found(e: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Collection & static paths ────────────────────────────────────────


@router.get("", response_model=ApiResponse[list[ProjectResponse]])
async def list_projects(
    response: Response,
    status_filter: ProjectStatus | None = Query(None, alias="status"),
    city: str | None = Query(None),
    state: str | None = Query(None),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[list[ProjectResponse]]:
    """List projects, newest first, optionally filtered by status and location."""
    projects = await service.list_projects(
        status=status_filter.value if status_filter else None, city=city, state=state
    )
    set_cache_headers(response, max_age=60, tag="projects")
    return ApiResponse(
        data=[_to_response(p) for p in projects],
        message="Projects retrieved successfully",
    )


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ProjectResponse]:
    project = await service.create_project(data)
    await notifier.publish(EventTopic.PROJECT_NEW, to_payload(ProjectResponse, project))
    return ApiResponse(data=_to_response(project), message="Project created successfully")


@router.get("/stats/overview", response_model=ApiResponse[ProjectStatistics])
async def project_statistics(
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectStatistics]:
    stats = await service.get_statistics()
    return ApiResponse(data=stats, message="Project statistics retrieved successfully")


@router.get("/status/{project_status}", response_model=ApiResponse[list[ProjectResponse]])
async def projects_by_status(
    project_status: ProjectStatus,
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[list[ProjectResponse]]:
    projects = await service.list_by_status(project_status)
    return ApiResponse(
        data=[_to_response(p) for p in projects],
        message=f"Projects with status '{project_status.value}' retrieved successfully",
    )


@router.get("/location/search", response_model=ApiResponse[list[ProjectResponse]])
async def projects_by_location(
    city: str = Query(..., min_length=1),
    state: str | None = Query(None),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[list[ProjectResponse]]:
    projects = await service.search_by_location(city, state)
    return ApiResponse(
        data=[_to_response(p) for p in projects],
        message="Projects by location retrieved successfully",
    )


@router.get("/network/overview", response_model=ApiResponse[NetworkOverview])
async def network_overview(
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[NetworkOverview]:
    """Site counts, capacity and average progress across the whole network."""
    overview = await service.get_network_overview()
    return ApiResponse(data=overview, message="Network overview retrieved successfully")


# ── Single project ───────────────────────────────────────────────────


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def get_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectResponse]:
    try:
        project = await service.get_project(project_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(data=_to_response(project), message="Project retrieved successfully")


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ProjectResponse]:
    try:
        project = await service.update_project(project_id, data)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.PROJECT_UPDATE, to_payload(ProjectResponse, project))
    return ApiResponse(data=_to_response(project), message="Project updated successfully")


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[None]:
    try:
        await service.delete_project(project_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.PROJECT_DELETED, {"id": project_id})
    return ApiResponse(message="Project deleted successfully")


@router.patch("/{project_id}/progress", response_model=ApiResponse[ProjectResponse])
async def update_progress(
    project_id: str,
    data: ProgressUpdate,
    service: ProjectService = Depends(get_project_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[ProjectResponse]:
    """Set progress only; subscribers get the reduced ``{id, progress, updatedAt}`` payload."""
    try:
        project = await service.update_progress(project_id, data.progress)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(
        EventTopic.PROJECT_UPDATE,
        {
            "id": project.id,
            "progress": project.progress,
            "updatedAt": project.updated_at.isoformat(),
        },
    )
    return ApiResponse(data=_to_response(project), message="Project progress updated successfully")


@router.get("/{project_id}/metrics", response_model=ApiResponse[ProjectMetrics])
async def project_metrics(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectMetrics]:
    try:
        metrics = await service.get_metrics(project_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(data=metrics, message="Project metrics retrieved successfully")


@router.get("/{project_id}/schematic", response_model=ApiResponse[ProjectSchematic])
async def project_schematic(
    project_id: str,
    response: Response,
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectSchematic]:
    try:
        schematic = await service.get_schematic(project_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    set_cache_headers(response, max_age=300, tag=f"schematic-{project_id}")
    return ApiResponse(data=schematic, message="Project schematic retrieved successfully")
