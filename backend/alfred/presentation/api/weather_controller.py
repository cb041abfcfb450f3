"""Weather API controller — per-location readings, simulation and forecasts."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from alfred.application.schemas import (
    ApiResponse,
    ExtremeWeather,
    ForecastEntry,
    MultipleLocationsRequest,
    WeatherCreate,
    WeatherResponse,
    WeatherStatistics,
    WeatherUpdate,
    to_payload,
)
from alfred.application.services import MutationNotifier, NotificationHub, WeatherService
from alfred.application.services.weather_simulation import (
    DEFAULT_FORECAST_DAYS,
    MAX_FORECAST_DAYS,
    MIN_FORECAST_DAYS,
)
from alfred.domain.entities import WeatherRecord
from alfred.domain.events import EventTopic
from alfred.domain.exceptions import EntityNotFoundError
from alfred.infrastructure.dependencies import (
    get_mutation_notifier,
    get_notification_hub,
    get_weather_service,
)

router = APIRouter(prefix="/weather", tags=["Weather"])


def _to_response(record: WeatherRecord) -> WeatherResponse:
    return WeatherResponse.model_validate(record, from_attributes=True)


def _update_event(record: WeatherRecord) -> dict:
    return {"location": record.location, "data": to_payload(WeatherResponse, record)}


def _not_found(e: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/location/{location}", response_model=ApiResponse[WeatherResponse])
async def get_weather(
    location: str,
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[WeatherResponse]:
    try:
        record = await service.get_weather(location)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(data=_to_response(record), message="Weather data retrieved successfully")


@router.post("/multiple", response_model=ApiResponse[list[WeatherResponse]])
async def get_weather_for_locations(
    data: MultipleLocationsRequest,
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[list[WeatherResponse]]:
    """Readings for the requested locations; unknown locations are simply absent."""
    records = await service.get_many(data.locations)
    return ApiResponse(
        data=[_to_response(r) for r in records],
        message="Weather data for multiple locations retrieved successfully",
    )


@router.post("/location/{location}", response_model=ApiResponse[WeatherResponse])
async def upsert_weather(
    location: str,
    data: WeatherCreate,
    service: WeatherService = Depends(get_weather_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[WeatherResponse]:
    record = await service.upsert_weather(location, data)
    await notifier.publish(EventTopic.WEATHER_UPDATE, _update_event(record))
    return ApiResponse(data=_to_response(record), message="Weather data saved successfully")


@router.put("/location/{location}", response_model=ApiResponse[WeatherResponse])
async def update_weather(
    location: str,
    data: WeatherUpdate,
    service: WeatherService = Depends(get_weather_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[WeatherResponse]:
    try:
        record = await service.update_weather(location, data)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.WEATHER_UPDATE, _update_event(record))
    return ApiResponse(data=_to_response(record), message="Weather data updated successfully")


@router.delete("/location/{location}", response_model=ApiResponse[None])
async def delete_weather(
    location: str,
    service: WeatherService = Depends(get_weather_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[None]:
    try:
        key = await service.delete_weather(location)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.WEATHER_DELETED, {"location": key})
    return ApiResponse(message="Weather data deleted successfully")


@router.get("/forecast/{location}", response_model=ApiResponse[list[ForecastEntry]])
async def forecast(
    location: str,
    days: int = Query(DEFAULT_FORECAST_DAYS, ge=MIN_FORECAST_DAYS, le=MAX_FORECAST_DAYS),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[list[ForecastEntry]]:
    """Simulated daily forecast starting tomorrow, derived from the current reading."""
    try:
        entries = await service.forecast(location, days)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(
        data=[ForecastEntry(**entry) for entry in entries],
        message="Weather forecast generated successfully",
    )


@router.post("/simulate/{location}", response_model=ApiResponse[WeatherResponse])
async def simulate(
    location: str,
    service: WeatherService = Depends(get_weather_service),
    notifier: MutationNotifier = Depends(get_mutation_notifier),
) -> ApiResponse[WeatherResponse]:
    try:
        record = await service.simulate(location)
    except EntityNotFoundError as e:
        raise _not_found(e)
    await notifier.publish(EventTopic.WEATHER_UPDATE, _update_event(record))
    return ApiResponse(data=_to_response(record), message="Weather update simulated successfully")


@router.get("/stats/overview", response_model=ApiResponse[WeatherStatistics])
async def statistics(
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[WeatherStatistics]:
    stats = await service.get_statistics()
    return ApiResponse(data=stats, message="Weather statistics retrieved successfully")


@router.get("/stats/extreme", response_model=ApiResponse[ExtremeWeather])
async def extremes(
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[ExtremeWeather]:
    result = await service.get_extremes()
    return ApiResponse(data=result, message="Extreme weather conditions retrieved successfully")


@router.post("/test-socket", response_model=ApiResponse[dict])
async def test_socket(
    hub: NotificationHub = Depends(get_notification_hub),
) -> ApiResponse[dict]:
    await hub.broadcast_all(
        EventTopic.WEATHER_TEST,
        {
            "message": "Weather socket test successful",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
    return ApiResponse(
        data={"message": "Weather socket test emitted successfully"},
        message="Weather socket test completed",
    )
