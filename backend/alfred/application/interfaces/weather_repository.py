"""Abstract repository interface (port) for WeatherRecord persistence."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from alfred.domain.entities import WeatherRecord


class WeatherRepository(ABC):
    """Port for weather persistence. Records are keyed by normalised location."""

    @abstractmethod
    async def get_by_location(self, location: str) -> WeatherRecord | None:
        ...

    @abstractmethod
    async def get_many(self, locations: Sequence[str]) -> list[WeatherRecord]:
        ...

    @abstractmethod
    async def get_all(self) -> list[WeatherRecord]:
        ...

    @abstractmethod
    async def create(self, record: WeatherRecord) -> WeatherRecord:
        ...

    @abstractmethod
    async def update(self, record: WeatherRecord) -> WeatherRecord:
        ...

    @abstractmethod
    async def delete(self, location: str) -> bool:
        """Delete the record for a location. Returns False if none existed."""
        ...
