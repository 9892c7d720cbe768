# weathernav/api/v1/routes_trip.py
from fastapi import APIRouter, HTTPException

from weathernav.core.errors import InvalidInputError
from weathernav.core.logger import logger
from weathernav.models.requests import (
    TripAnalysis,
    TripAnalysisRequest,
    TripPlan,
    TripPlanRequest,
)
from weathernav.services.trip_planner import TripPlanner

router = APIRouter(
    prefix="/trip",
    tags=["trip"],
)

trip_planner = TripPlanner()


@router.post(
    "/",
    response_model=TripPlan,
    summary="Plan a trip with weather along the route",
)
async def plan_trip(request: TripPlanRequest) -> TripPlan:
    """
    Route, sample, fetch weather and summarise in one call.
    """
    try:
        return await trip_planner.plan(request)
    except InvalidInputError as exc:
        logger.error(f"Trip planning rejected: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))


@router.post(
    "/analyze",
    response_model=TripAnalysis,
    summary="Segments and summary for an existing route and readings",
)
async def analyze_trip(request: TripAnalysisRequest) -> TripAnalysis:
    try:
        return trip_planner.analyze(request.route, request.readings)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
