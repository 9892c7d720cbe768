# tests/test_geocoding_service.py
import asyncio

import httpx
import pytest

from weathernav.core.config import Settings
from weathernav.core.errors import InvalidInputError, ProviderError
from weathernav.services.geocoding_service import GeocodingService


def search(service: GeocodingService, query: str):
    return asyncio.run(service.search(query))


def test_nominatim_results_are_normalised():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"display_name": "Denver, Colorado, USA", "lat": "39.7392", "lon": "-104.9903", "type": "city"},
                {"display_name": "Denver, Iowa, USA", "lat": "42.6714", "lon": "-92.3374"},
            ],
        )

    service = GeocodingService(settings=Settings(MAPBOX_TOKEN=""), transport=httpx.MockTransport(handler))
    results = search(service, "Denver")

    assert seen[0].url.host == "nominatim.openstreetmap.org"
    assert seen[0].url.params["q"] == "Denver"
    assert seen[0].url.params["limit"] == "5"
    assert seen[0].headers["User-Agent"] == "WeatherNavApp/1.0"

    assert len(results) == 2
    assert results[0].center == (-104.9903, 39.7392)
    assert results[0].place_type == ["city"]
    assert results[1].place_type == ["place"]

    location = results[0].to_location()
    assert location.lat == 39.7392
    assert location.lng == -104.9903
    assert location.address == "Denver, Colorado, USA"


def test_mapbox_is_used_when_token_is_configured():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "features": [
                    {"place_name": "Boulder, Colorado, United States", "center": [-105.27, 40.015], "place_type": ["place"]}
                ]
            },
        )

    service = GeocodingService(settings=Settings(MAPBOX_TOKEN="pk.test"), transport=httpx.MockTransport(handler))
    results = search(service, "Boulder CO")

    assert seen[0].url.host == "api.mapbox.com"
    assert seen[0].url.params["access_token"] == "pk.test"
    assert results[0].place_name == "Boulder, Colorado, United States"
    assert results[0].center == (-105.27, 40.015)


def test_provider_failure_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    service = GeocodingService(settings=Settings(MAPBOX_TOKEN=""), transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError):
        search(service, "Denver")


@pytest.mark.parametrize("query", ["", "   "])
def test_blank_query_is_rejected(query):
    with pytest.raises(InvalidInputError):
        search(GeocodingService(settings=Settings()), query)
