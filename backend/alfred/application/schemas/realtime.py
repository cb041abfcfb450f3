"""Pydantic DTOs for the realtime channel's REST side."""

from pydantic import Field

from alfred.application.schemas.common import CamelModel


class ProjectSubscription(CamelModel):
    project_id: str = Field(..., min_length=1)


class RealtimeStatus(CamelModel):
    connected_clients: int
    session_ids: list[str]
