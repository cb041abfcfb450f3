"""Concrete repository implementation for WeatherRecord backed by SQLAlchemy."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.interfaces import WeatherRepository
from alfred.domain.entities import WeatherRecord, normalize_location
from alfred.infrastructure.database.models import WeatherRecordModel


class SQLAlchemyWeatherRepository(WeatherRepository):
    """Implements the WeatherRepository port. Lookups go through the normalised location."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: WeatherRecordModel) -> WeatherRecord:
        return WeatherRecord(
            id=model.id,
            location=model.location,
            temperature=model.temperature,
            wind_speed=model.wind_speed,
            condition=model.condition,
            humidity=model.humidity,
            pressure=model.pressure,
            updated_at=model.updated_at,
            created_at=model.created_at,
        )

    async def _get_model(self, location: str) -> WeatherRecordModel | None:
        stmt = select(WeatherRecordModel).where(
            WeatherRecordModel.location == normalize_location(location)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_location(self, location: str) -> WeatherRecord | None:
        model = await self._get_model(location)
        return self._to_entity(model) if model else None

    async def get_many(self, locations: Sequence[str]) -> list[WeatherRecord]:
        wanted = [normalize_location(loc) for loc in locations]
        stmt = (
            select(WeatherRecordModel)
            .where(WeatherRecordModel.location.in_(wanted))
            .order_by(WeatherRecordModel.location)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_all(self) -> list[WeatherRecord]:
        result = await self._session.execute(
            select(WeatherRecordModel).order_by(WeatherRecordModel.location)
        )
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, record: WeatherRecord) -> WeatherRecord:
        model = WeatherRecordModel(
            id=record.id,
            location=record.location,
            temperature=record.temperature,
            wind_speed=record.wind_speed,
            condition=record.condition,
            humidity=record.humidity,
            pressure=record.pressure,
            updated_at=record.updated_at,
            created_at=record.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, record: WeatherRecord) -> WeatherRecord:
        model = await self._get_model(record.location)
        if model is None:
            raise ValueError(f"WeatherRecord for '{record.location}' not found in database")
        model.temperature = record.temperature
        model.wind_speed = record.wind_speed
        model.condition = record.condition
        model.humidity = record.humidity
        model.pressure = record.pressure
        model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, location: str) -> bool:
        model = await self._get_model(location)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
