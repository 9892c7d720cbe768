# weathernav/services/trip_planner.py

from time import perf_counter
from typing import List, Sequence

from weathernav.core.logger import logger
from weathernav.models.requests import TripAnalysis, TripPlan, TripPlanRequest
from weathernav.models.trip import Route, SeverityTier, WaypointSample, WeatherReading
from weathernav.services.routing_service import RoutingService
from weathernav.services.segmenter import segment_route
from weathernav.services.severity import tag_readings
from weathernav.services.trip_summary import summarize_trip
from weathernav.services.waypoint_sampler import endpoint_samples, sample_waypoints
from weathernav.services.weather_service import WeatherService

SEVERE_ADVISORY = (
    "Severe weather detected along your route. "
    "Consider alternative routes or timing."
)
GENERAL_ADVISORY = (
    "Consider checking alternative routes or adjusting departure time "
    "for better conditions."
)


class TripPlanner:
    """
    Runs the whole route-weather pipeline for one trip:

    1. Get routes from the routing provider chain.
    2. Sample waypoints along the primary route.
    3. Fetch weather for every sample (forecast-aware).
    4. Tag readings with severity tiers.
    5. Build colored route segments and the trip summary.
    """

    def __init__(
        self,
        routing_service: RoutingService | None = None,
        weather_service: WeatherService | None = None,
    ) -> None:
        self.routing_service = routing_service or RoutingService()
        self.weather_service = weather_service or WeatherService()

    async def plan(self, request: TripPlanRequest) -> TripPlan:
        t0 = perf_counter()

        routes = await self.routing_service.get_routes(
            request.origin,
            request.destination,
            alternatives=request.alternatives,
        )
        route = routes[0]

        waypoints = sample_route(route)
        logger.info(f"Sampled {len(waypoints)} waypoints along {route.id}")

        readings = await self.weather_service.fetch_for_samples(
            waypoints,
            forecast=True,
            departure_time=request.departure_time,
        )
        readings = tag_readings(readings)

        analysis = self.analyze(route, readings)
        worst = analysis.summary.worst_severity

        advisory = None
        if worst == SeverityTier.SEVERE:
            advisory = SEVERE_ADVISORY
        elif worst != SeverityTier.CLEAR:
            advisory = GENERAL_ADVISORY

        logger.info(
            f"Trip planned in {(perf_counter() - t0) * 1000.0:.2f} ms: "
            f"worst={worst.value}, segments={len(analysis.segments)}"
        )

        return TripPlan(
            routes=routes,
            route=route,
            waypoints=waypoints,
            weather=readings,
            segments=analysis.segments,
            summary=analysis.summary,
            has_severe_weather=worst == SeverityTier.SEVERE,
            advisory=advisory,
        )

    @staticmethod
    def analyze(route: Route, readings: Sequence[WeatherReading]) -> TripAnalysis:
        """
        Recompute segments and summary for a route and its readings.
        """
        tagged = tag_readings(readings)
        return TripAnalysis(
            segments=segment_route(route, tagged),
            summary=summarize_trip(tagged),
        )


def sample_route(route: Route) -> List[WaypointSample]:
    """
    Waypoint samples for `route`, guarding routes without a usable average speed.
    """
    if len(route.geometry) < 2 or route.distance_m <= 0 or route.duration_s <= 0:
        logger.warning(
            f"Route {route.id} has distance={route.distance_m} m, duration={route.duration_s} s, "
            f"{len(route.geometry)} point(s): sampling endpoints only"
        )
        return endpoint_samples(route.geometry, route.distance_m, route.duration_s)
    return sample_waypoints(route.geometry, route.distance_m, route.duration_s)
