# weathernav/models/requests.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from weathernav.models.trip import (
    Location,
    Route,
    RouteSegment,
    TripSummary,
    WaypointSample,
    WeatherReading,
)


class RouteRequest(BaseModel):
    """
    Request body for the /route endpoint.
    """
    origin: Location
    destination: Location
    alternatives: bool = False


class WeatherRequest(BaseModel):
    """
    Request body for the /weather endpoint.

    waypoints normally come straight from the waypoint sampler. When
    `forecast` is true, samples whose arrival time lies in the future are
    looked up in the forecast instead of current conditions.
    """
    waypoints: List[WaypointSample]
    forecast: bool = False
    departure_time: Optional[datetime] = None


class TripPlanRequest(BaseModel):
    """
    Request body for the /trip endpoint.
    """
    origin: Location
    destination: Location
    departure_time: Optional[datetime] = None
    alternatives: bool = True


class TripAnalysisRequest(BaseModel):
    """
    An already-fetched route plus the readings taken along it, in waypoint order.
    """
    route: Route
    readings: List[WeatherReading] = Field(min_length=1)


class TripAnalysis(BaseModel):
    segments: List[RouteSegment]
    summary: TripSummary


class TripPlan(BaseModel):
    """
    Response for the /trip endpoint.

    - `routes` holds every route the provider returned; `route` is the one the
      weather was fetched for (always routes[0]).
    - `weather[i]` corresponds to `waypoints[i]`.
    """
    routes: List[Route]
    route: Route
    waypoints: List[WaypointSample]
    weather: List[WeatherReading]
    segments: List[RouteSegment]
    summary: TripSummary
    has_severe_weather: bool
    advisory: Optional[str] = None
