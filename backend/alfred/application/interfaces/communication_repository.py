"""Abstract repository interface (port) for Communication persistence."""

from abc import ABC, abstractmethod

from alfred.domain.entities import Communication


class CommunicationRepository(ABC):
    """Port for communication persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, communication_id: str) -> Communication | None:
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        type: str | None = None,
        priority: str | None = None,
        project_id: str | None = None,
        source: str | None = None,
        is_ai: bool | None = None,
    ) -> list[Communication]:
        """Retrieve communications matching the filters, most recently posted first."""
        ...

    @abstractmethod
    async def search(self, term: str) -> list[Communication]:
        """Case-insensitive substring search over title, content and tags."""
        ...

    @abstractmethod
    async def create(self, communication: Communication) -> Communication:
        ...

    @abstractmethod
    async def update(self, communication: Communication) -> Communication:
        ...

    @abstractmethod
    async def delete(self, communication_id: str) -> bool:
        """Delete a communication. Returns True if deleted, False if not found."""
        ...
