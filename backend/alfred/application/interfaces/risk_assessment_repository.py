"""Abstract repository interface (port) for RiskAssessment persistence."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from alfred.domain.entities import RiskAssessment


class RiskAssessmentRepository(ABC):
    """Port for risk assessment persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, risk_id: str) -> RiskAssessment | None:
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        project_id: str | None = None,
        impacts: Sequence[str] | None = None,
        status: str | None = None,
    ) -> list[RiskAssessment]:
        """Retrieve risk assessments matching the filters, newest first."""
        ...

    @abstractmethod
    async def create(self, risk: RiskAssessment) -> RiskAssessment:
        ...

    @abstractmethod
    async def update(self, risk: RiskAssessment) -> RiskAssessment:
        ...

    @abstractmethod
    async def delete(self, risk_id: str) -> bool:
        ...
