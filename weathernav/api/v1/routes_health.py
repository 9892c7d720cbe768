# weathernav/api/v1/routes_health.py
from fastapi import APIRouter
from weathernav.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Report that the API is running and which providers the current
    configuration will use.
    """
    if settings.MAPBOX_TOKEN:
        routing = "mapbox"
    elif settings.OPENROUTE_API_KEY:
        routing = "openrouteservice"
    else:
        routing = "straight-line"

    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "providers": {
            "geocoding": "mapbox" if settings.MAPBOX_TOKEN else "nominatim",
            "routing": routing,
            "weather": "openweather" if settings.OPENWEATHER_API_KEY else "synthetic",
        },
    }
