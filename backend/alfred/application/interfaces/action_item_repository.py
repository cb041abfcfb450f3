"""Abstract repository interface (port) for ActionItem persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from alfred.domain.entities import ActionItem


class ActionItemRepository(ABC):
    """Port for action item persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, action_id: str) -> ActionItem | None:
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        priority: str | None = None,
        status: str | None = None,
        project_id: str | None = None,
        type: str | None = None,
    ) -> list[ActionItem]:
        """Retrieve action items matching the filters, earliest due first."""
        ...

    @abstractmethod
    async def get_overdue(self, now: datetime) -> list[ActionItem]:
        """Unresolved items whose due date lies before ``now``."""
        ...

    @abstractmethod
    async def create(self, action: ActionItem) -> ActionItem:
        ...

    @abstractmethod
    async def update(self, action: ActionItem) -> ActionItem:
        ...

    @abstractmethod
    async def delete(self, action_id: str) -> bool:
        ...
