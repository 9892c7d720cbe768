# weathernav/api/v1/routes_geocode.py
from typing import List

from fastapi import APIRouter, HTTPException

from weathernav.core.errors import InvalidInputError, ProviderError
from weathernav.models.trip import GeocodeResult
from weathernav.services.geocoding_service import GeocodingService

router = APIRouter(
    prefix="/geocode",
    tags=["geocoding"],
)

geocoding_service = GeocodingService()


@router.get("/", response_model=List[GeocodeResult], summary="Search for an address")
async def geocode(q: str = "") -> List[GeocodeResult]:
    try:
        return await geocoding_service.search(q)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ProviderError:
        raise HTTPException(status_code=500, detail="Failed to geocode address")
