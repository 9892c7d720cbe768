# weathernav/main.py

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from weathernav.api.v1 import (
    routes_geocode,
    routes_health,
    routes_routing,
    routes_trip,
    routes_weather,
)
from weathernav.core.config import settings
from weathernav.core.logger import logger

# BASE_DIR = .../weathernav
BASE_DIR = Path(__file__).resolve().parent
# STATIC_DIR = .../weathernav/static
STATIC_DIR = BASE_DIR / "static"
INDEX_FILE = STATIC_DIR / "index.html"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Driving routes with weather along the way, with a Leaflet frontend served from /map.",
    )

    # Routers
    app.include_router(routes_health.router)
    app.include_router(routes_geocode.router)
    app.include_router(routes_routing.router)
    app.include_router(routes_weather.router)
    app.include_router(routes_trip.router)

    # Serve /static/* from the package's static folder
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/map")
    async def map_page() -> FileResponse:
        """
        Serve the frontend map page from static/index.html
        """
        logger.info(f"Serving /map from {INDEX_FILE}")

        if not INDEX_FILE.exists():
            logger.error(f"index.html not found at {INDEX_FILE}")
            raise HTTPException(status_code=404, detail="index.html not found")

        return FileResponse(INDEX_FILE)

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ready ({settings.ENVIRONMENT})")
    return app


app = create_app()
