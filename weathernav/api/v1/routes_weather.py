# weathernav/api/v1/routes_weather.py
from typing import List

from fastapi import APIRouter

from weathernav.models.requests import WeatherRequest
from weathernav.models.trip import WeatherReading
from weathernav.services.weather_service import WeatherService

router = APIRouter(
    prefix="/weather",
    tags=["weather"],
)

weather_service = WeatherService()


@router.post(
    "/",
    response_model=List[WeatherReading],
    summary="Weather for each waypoint sample",
)
async def weather_for_waypoints(request: WeatherRequest) -> List[WeatherReading]:
    """
    One reading per waypoint, in waypoint order, each tagged with a severity tier.

    Failed lookups are replaced by synthetic readings, so this endpoint
    does not fail on provider errors.
    """
    return await weather_service.fetch_for_samples(
        request.waypoints,
        forecast=request.forecast,
        departure_time=request.departure_time,
    )
