# weathernav/api/v1/routes_routing.py
from typing import List

from fastapi import APIRouter

from weathernav.models.requests import RouteRequest
from weathernav.models.trip import Route
from weathernav.services.routing_service import RoutingService

router = APIRouter(
    prefix="/route",
    tags=["routing"],
)

# Single shared instance
routing_service = RoutingService()


@router.post(
    "/",
    response_model=List[Route],
    summary="Compute driving routes between origin and destination",
)
async def compute_route(request: RouteRequest) -> List[Route]:
    """
    Compute driving routes between origin and destination.

    - Tries Mapbox, then OpenRouteService, depending on configured keys.
    - Falls back to a straight-line route when no provider answers, so this
      endpoint does not fail on provider errors.
    """
    return await routing_service.get_routes(
        request.origin,
        request.destination,
        alternatives=request.alternatives,
    )
