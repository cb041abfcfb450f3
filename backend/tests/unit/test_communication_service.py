"""Unit tests for the CommunicationService."""

import pytest

from alfred.application.interfaces import CommunicationRepository
from alfred.application.schemas import AIInsightRequest, CommunicationCreate, CommunicationUpdate
from alfred.application.services import CommunicationService
from alfred.domain.entities import Communication
from alfred.domain.exceptions import EntityNotFoundError


class FakeCommunicationRepository(CommunicationRepository):
    def __init__(self):
        self._items: dict[str, Communication] = {}

    async def get_by_id(self, communication_id):
        return self._items.get(communication_id)

    async def get_all(self, *, type=None, priority=None, project_id=None, source=None, is_ai=None):
        return [
            c
            for c in self._items.values()
            if (type is None or c.type == type)
            and (priority is None or c.priority == priority)
            and (project_id is None or c.project_id == project_id)
            and (source is None or c.source == source)
            and (is_ai is None or c.is_ai == is_ai)
        ]

    async def search(self, term):
        return [c for c in self._items.values() if c.matches(term)]

    async def create(self, communication):
        self._items[communication.id] = communication
        return communication

    async def update(self, communication):
        self._items[communication.id] = communication
        return communication

    async def delete(self, communication_id):
        return self._items.pop(communication_id, None) is not None


def _message(**overrides) -> CommunicationCreate:
    values = {
        "type": "status-update",
        "title": "Piling complete",
        "content": "All 4,200 piles driven on block C",
        "source": "contractor",
        "projectId": "site-alpha",
    }
    values.update(overrides)
    return CommunicationCreate.model_validate(values)


@pytest.fixture
def service() -> CommunicationService:
    return CommunicationService(FakeCommunicationRepository())


@pytest.mark.asyncio
async def test_create_defaults(service: CommunicationService):
    created = await service.create_communication(_message())
    assert created.priority == "normal"
    assert created.tags == []
    assert created.is_ai is False
    assert created.posted_at


@pytest.mark.asyncio
async def test_search_is_case_insensitive_over_tags(service: CommunicationService):
    await service.create_communication(_message(tags=["Civil", "piling"]))
    await service.create_communication(_message(title="Other", content="nothing", tags=[]))

    results = await service.search("civil")

    assert [c.title for c in results] == ["Piling complete"]


@pytest.mark.asyncio
async def test_generate_ai_insight(service: CommunicationService):
    insight = await service.generate_ai_insight(
        AIInsightRequest(project_id="site-alpha", insight_type="weather", content="Storm inbound")
    )
    assert insight.title == "AI Insight: weather"
    assert insight.is_ai is True
    assert insight.priority == "high"
    assert insight.tags == ["ai", "insight", "weather"]
    assert [c.id for c in await service.list_ai_insights()] == [insight.id]


@pytest.mark.asyncio
async def test_update_and_delete(service: CommunicationService):
    created = await service.create_communication(_message())
    updated = await service.update_communication(created.id, CommunicationUpdate(priority="high"))
    assert updated.priority == "high"
    assert updated.title == "Piling complete"

    await service.delete_communication(created.id)
    with pytest.raises(EntityNotFoundError):
        await service.get_communication(created.id)
