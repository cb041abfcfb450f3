"""Abstract repository interface (port) for Project persistence."""

from abc import ABC, abstractmethod

from alfred.domain.entities import Project


class ProjectRepository(ABC):
    """Port for project persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Project | None:
        """Retrieve a single project by its ID."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        status: str | None = None,
        city: str | None = None,
        state: str | None = None,
    ) -> list[Project]:
        """Retrieve projects matching the filters, newest first."""
        ...

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """Persist a new project and return it."""
        ...

    @abstractmethod
    async def update(self, project: Project) -> Project:
        """Write every mutable field of an existing project."""
        ...

    @abstractmethod
    async def delete(self, project_id: str) -> bool:
        """Delete a project. Returns True if deleted, False if not found."""
        ...
