"""Application service (use case) for Project operations."""

from collections import Counter
from typing import Any

from alfred.application.interfaces import ProjectRepository
from alfred.application.schemas.project import (
    LocationSchema,
    NetworkOverview,
    NetworkStats,
    ProjectCreate,
    ProjectMetrics,
    ProjectSchematic,
    ProjectStatistics,
    ProjectUpdate,
    RegionalCount,
    SchematicTask,
    WeatherSnapshotSchema,
    WorkflowStage,
)
from alfred.domain.entities import (
    Coordinates,
    Project,
    ProjectLocation,
    ProjectStatus,
    WeatherSnapshot,
    validate_progress,
)
from alfred.domain.exceptions import EntityNotFoundError

SCHEDULE_PERFORMANCE_INDEX = 0.85
STAGE_COLOR = "text-yellow-400"


def _location(schema: LocationSchema) -> ProjectLocation:
    return ProjectLocation(
        city=schema.city,
        state=schema.state,
        coordinates=Coordinates(lat=schema.coordinates.lat, lng=schema.coordinates.lng),
    )


def _weather(schema: WeatherSnapshotSchema) -> WeatherSnapshot:
    return WeatherSnapshot(**schema.model_dump(exclude_none=True))


class ProjectService:
    """Orchestrates project CRUD, progress and the dashboard roll-ups."""

    def __init__(self, repository: ProjectRepository):
        self._repository = repository

    async def get_project(self, project_id: str) -> Project:
        project = await self._repository.get_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("Project", project_id)
        return project

    async def list_projects(
        self,
        *,
        status: str | None = None,
        city: str | None = None,
        state: str | None = None,
    ) -> list[Project]:
        return await self._repository.get_all(status=status, city=city, state=state)

    async def list_by_status(self, status: ProjectStatus) -> list[Project]:
        return await self._repository.get_all(status=status.value)

    async def search_by_location(self, city: str, state: str | None = None) -> list[Project]:
        return await self._repository.get_all(city=city, state=state)

    async def create_project(self, data: ProjectCreate) -> Project:
        project = Project(
            name=data.name,
            location=_location(data.location),
            capacity=data.capacity,
            start_date=data.start_date,
            end_date=data.end_date,
            progress=data.progress or 0,
            status=data.status or ProjectStatus.ACTIVE,
            weather=_weather(data.weather) if data.weather else WeatherSnapshot(),
        )
        return await self._repository.create(project)

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        project = await self.get_project(project_id)

        changes: dict[str, Any] = {
            "name": data.name,
            "capacity": data.capacity,
            "start_date": data.start_date,
            "end_date": data.end_date,
            "progress": data.progress,
            "status": data.status,
        }
        if data.location is not None:
            changes["location"] = _location(data.location)
        if data.weather is not None:
            changes["weather"] = _weather(data.weather)

        project.update(**changes)
        return await self._repository.update(project)

    async def update_progress(self, project_id: str, progress: int) -> Project:
        """Set only the progress field. Out-of-range values never reach the store."""
        validate_progress(progress)
        project = await self.get_project(project_id)
        project.set_progress(progress)
        return await self._repository.update(project)

    async def delete_project(self, project_id: str) -> None:
        if not await self._repository.delete(project_id):
            raise EntityNotFoundError("Project", project_id)

    # ── Roll-ups ────────────────────────────────────────────────────

    async def get_metrics(self, project_id: str) -> ProjectMetrics:
        project = await self.get_project(project_id)
        return ProjectMetrics(
            total_capacity=project.capacity,
            progress=project.progress,
            deviation="On Track",
            completion_date=project.end_date,
        )

    async def get_statistics(self) -> ProjectStatistics:
        projects = await self._repository.get_all()
        if not projects:
            return ProjectStatistics()
        return ProjectStatistics(
            total_projects=len(projects),
            active_projects=sum(p.status == ProjectStatus.ACTIVE for p in projects),
            completed_projects=sum(p.status == ProjectStatus.COMPLETED for p in projects),
            average_progress=sum(p.progress for p in projects) / len(projects),
            total_capacity=sum(p.capacity_mw for p in projects),
        )

    async def get_network_overview(self) -> NetworkOverview:
        projects = await self._repository.get_all()
        total_progress = sum(p.progress for p in projects)
        by_state = Counter(p.location.state for p in projects)
        return NetworkOverview(
            network_stats=NetworkStats(
                total_projects=len(projects),
                active_sites=sum(p.status == ProjectStatus.ACTIVE for p in projects),
                total_capacity=sum(int(p.capacity_mw) for p in projects),
                network_progress=round(total_progress / len(projects)) if projects else 0,
            ),
            regional_distribution=[
                RegionalCount(state=state, count=count) for state, count in by_state.items()
            ],
        )

    async def get_schematic(self, project_id: str) -> ProjectSchematic:
        """Workflow stages for the schematic view; open tasks never show less than the project."""
        project = await self.get_project(project_id)
        p = project.progress

        def task(name: str, progress: int, status: str, button_text: str) -> SchematicTask:
            return SchematicTask(
                name=name, progress=progress, status=status, button_text=button_text
            )

        stages = [
            ("Development & Permitting", [
                task("Land Acquisition", 100, "completed", "Completed"),
                task("PPA Signed", 100, "completed", "Completed"),
                task("Permits Secured", 100, "completed", "Completed"),
            ]),
            ("Engineering & Design", [
                task("Design Approval", 100, "completed", "Completed"),
                task("Engineering Complete", 100, "completed", "Grid Connection"),
                task("Layout Finalized", max(75, p), "in-progress", "Jul 17"),
            ]),
            ("Procurement", [
                task("Module Delivery", max(35, p), "risk", "Monsoon Impact"),
                task("Inverter Delivery", 100, "completed", "Completed"),
                task("BOS Procurement", max(60, p), "in-progress", "Aug 10"),
            ]),
            ("Construction", [
                task("Civil Works", 100, "completed", "Completed"),
                task("Mounting Structure", max(45, p), "in-progress", "In Progress"),
                task("Electrical Installation", p, "pending", "Sep 15"),
            ]),
            ("Testing & Commissioning", [
                task("Pre-commissioning", p, "pending", "A Delay In Module"),
                task("Grid Sync", p, "pending", "Oct 5"),
                task("Final Acceptance", p, "pending", "Oct 15"),
            ]),
        ]
        return ProjectSchematic(
            project_id=project.id,
            project_name=project.name,
            progress=p,
            spi=SCHEDULE_PERFORMANCE_INDEX,
            workflow_stages=[
                WorkflowStage(title=title, color=STAGE_COLOR, tasks=tasks)
                for title, tasks in stages
            ],
        )
