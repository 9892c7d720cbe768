# weathernav/services/routing_service.py

from time import perf_counter
from typing import Any, Dict, List

import httpx

from weathernav.core.config import Settings, settings as default_settings
from weathernav.core.logger import logger
from weathernav.models.trip import Location, Route, RouteInstruction
from weathernav.services.geometry import (
    decode_polyline,
    haversine_distance_m,
    straight_line_path,
)

MAPBOX_DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/driving"
OPENROUTE_DIRECTIONS_URL = "https://api.openrouteservice.org/v2/directions/driving-car"


class RoutingService:
    """
    High-level routing service:
    - asks Mapbox Directions when a Mapbox token is configured
    - falls back to OpenRouteService when an API key is configured
    - falls back to a synthetic straight-line route otherwise

    The first provider that returns at least one route wins. Provider
    failures are logged and the chain moves on, so `get_routes` always
    returns at least one route.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._transport = transport
        logger.info("RoutingService initialised.")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def get_routes(
        self,
        origin: Location,
        destination: Location,
        alternatives: bool = False,
    ) -> List[Route]:
        """
        Main entry point for the /route endpoint.

        Returns routes in provider order; when there is more than one, the
        first also lists the others in `alternative_routes`.
        """
        t0 = perf_counter()

        logger.info(
            f"Received routing request from ({origin.lat:.6f}, {origin.lng:.6f}) -> "
            f"({destination.lat:.6f}, {destination.lng:.6f}), alternatives={alternatives}"
        )

        routes: List[Route] = []
        async with httpx.AsyncClient(
            timeout=self.settings.HTTP_TIMEOUT_S,
            transport=self._transport,
        ) as client:
            if self.settings.MAPBOX_TOKEN:
                routes = await self._try_provider(
                    "Mapbox", self._routes_from_mapbox(client, origin, destination, alternatives)
                )

            if not routes and self.settings.OPENROUTE_API_KEY:
                routes = await self._try_provider(
                    "OpenRouteService",
                    self._routes_from_openroute(client, origin, destination, alternatives),
                )

        if not routes:
            logger.warning("No routing provider returned a route: using straight-line fallback")
            routes = [self.straight_line_route(origin, destination)]

        if len(routes) > 1:
            routes[0] = routes[0].model_copy(update={"alternative_routes": routes[1:]})

        logger.info(
            f"Route summary: {len(routes)} route(s), primary distance={routes[0].distance_m:.1f} m, "
            f"duration={routes[0].duration_s:.1f} s, "
            f"total routing time {(perf_counter() - t0) * 1000.0:.2f} ms"
        )
        return routes

    def straight_line_route(self, origin: Location, destination: Location) -> Route:
        """
        Demo route: a straight line with a fixed duration estimate.
        """
        return Route(
            id="straight-line",
            origin=origin,
            destination=destination,
            distance_m=haversine_distance_m(origin.to_coordinate(), destination.to_coordinate()),
            duration_s=self.settings.STRAIGHT_LINE_DURATION_S,
            geometry=straight_line_path(origin, destination, self.settings.STRAIGHT_LINE_POINTS),
            instructions=[
                RouteInstruction(text="Head toward destination", type="depart"),
                RouteInstruction(text="Arrive at destination", type="arrive"),
            ],
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    async def _try_provider(name: str, call) -> List[Route]:
        t0 = perf_counter()
        try:
            routes = await call
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning(f"{name} routing failed: {exc!r}")
            return []
        logger.info(f"{name} returned {len(routes)} route(s) in {(perf_counter() - t0) * 1000.0:.2f} ms")
        return routes

    async def _routes_from_mapbox(
        self,
        client: httpx.AsyncClient,
        origin: Location,
        destination: Location,
        alternatives: bool,
    ) -> List[Route]:
        url = f"{MAPBOX_DIRECTIONS_URL}/{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        response = await client.get(
            url,
            params={
                "access_token": self.settings.MAPBOX_TOKEN,
                "geometries": "geojson",
                "overview": "full",
                "steps": "true",
                "alternatives": "true" if alternatives else "false",
            },
        )
        response.raise_for_status()

        routes: List[Route] = []
        for index, r in enumerate(response.json().get("routes") or []):
            legs = r.get("legs") or [{}]
            steps = legs[0].get("steps") or []
            routes.append(
                Route(
                    id=f"route-{index}",
                    origin=origin,
                    destination=destination,
                    distance_m=r["distance"],
                    duration_s=r["duration"],
                    geometry=r["geometry"]["coordinates"],
                    instructions=[
                        RouteInstruction(
                            text=s["maneuver"].get("instruction", ""),
                            distance_m=s.get("distance", 0.0),
                            duration_s=s.get("duration", 0.0),
                            type=s["maneuver"].get("type", ""),
                        )
                        for s in steps
                    ],
                )
            )
        return routes

    async def _routes_from_openroute(
        self,
        client: httpx.AsyncClient,
        origin: Location,
        destination: Location,
        alternatives: bool,
    ) -> List[Route]:
        body: Dict[str, Any] = {
            "coordinates": [list(origin.to_coordinate()), list(destination.to_coordinate())],
        }
        if alternatives:
            body["alternative_routes"] = {"target_count": 2}

        response = await client.post(
            OPENROUTE_DIRECTIONS_URL,
            json=body,
            headers={"Authorization": self.settings.OPENROUTE_API_KEY},
        )
        response.raise_for_status()

        routes: List[Route] = []
        for index, r in enumerate(response.json().get("routes") or []):
            geometry = r["geometry"]
            # ORS returns an encoded polyline unless GeoJSON was requested
            if isinstance(geometry, str):
                coords = decode_polyline(geometry)
            else:
                coords = geometry["coordinates"]

            segments = r.get("segments") or [{}]
            steps = segments[0].get("steps") or []
            routes.append(
                Route(
                    id=f"route-{index}",
                    origin=origin,
                    destination=destination,
                    distance_m=r["summary"]["distance"],
                    duration_s=r["summary"]["duration"],
                    geometry=coords,
                    instructions=[
                        RouteInstruction(
                            text=s.get("instruction", ""),
                            distance_m=s.get("distance", 0.0),
                            duration_s=s.get("duration", 0.0),
                            type=str(s.get("type", "")),
                        )
                        for s in steps
                    ],
                )
            )
        return routes
