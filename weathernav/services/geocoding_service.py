# weathernav/services/geocoding_service.py

from typing import List
from urllib.parse import quote

import httpx

from weathernav.core.config import Settings, settings as default_settings
from weathernav.core.errors import InvalidInputError, ProviderError
from weathernav.core.logger import logger
from weathernav.models.trip import GeocodeResult

MAPBOX_GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"
NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
RESULT_LIMIT = 5


class GeocodingService:
    """
    Address search: Mapbox when a token is configured, Nominatim otherwise.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._transport = transport

    async def search(self, query: str) -> List[GeocodeResult]:
        query = (query or "").strip()
        if not query:
            raise InvalidInputError("Query parameter is required")

        async with httpx.AsyncClient(
            timeout=self.settings.HTTP_TIMEOUT_S,
            transport=self._transport,
        ) as client:
            try:
                if self.settings.MAPBOX_TOKEN:
                    results = await self._search_mapbox(client, query)
                else:
                    results = await self._search_nominatim(client, query)
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
                logger.error(f"Geocoding failed for {query!r}: {exc!r}")
                raise ProviderError("Geocoding failed") from exc

        logger.info(f"Geocoded {query!r} -> {len(results)} results")
        return results

    async def _search_mapbox(self, client: httpx.AsyncClient, query: str) -> List[GeocodeResult]:
        response = await client.get(
            f"{MAPBOX_GEOCODING_URL}/{quote(query, safe='')}.json",
            params={"access_token": self.settings.MAPBOX_TOKEN, "limit": RESULT_LIMIT},
        )
        response.raise_for_status()
        features = response.json().get("features") or []
        return [
            GeocodeResult(
                place_name=f["place_name"],
                center=f["center"],
                place_type=f.get("place_type") or [],
                address=f.get("address"),
            )
            for f in features
        ]

    async def _search_nominatim(self, client: httpx.AsyncClient, query: str) -> List[GeocodeResult]:
        response = await client.get(
            NOMINATIM_SEARCH_URL,
            params={"q": query, "format": "json", "limit": RESULT_LIMIT},
            headers={"User-Agent": self.settings.NOMINATIM_USER_AGENT},
        )
        response.raise_for_status()
        return [
            GeocodeResult(
                place_name=item["display_name"],
                center=(float(item["lon"]), float(item["lat"])),
                place_type=[item.get("type") or "place"],
                address=item["display_name"],
            )
            for item in response.json()
        ]
