# weathernav/services/weather_service.py

import asyncio
from datetime import datetime, timedelta, timezone
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

from weathernav.core.config import Settings, settings as default_settings
from weathernav.core.logger import logger
from weathernav.models.trip import Location, WaypointSample, WeatherReading
from weathernav.services.severity import classify
from weathernav.services.synthetic_weather import synthetic_reading

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class WeatherService:
    """
    Fetches one weather reading per waypoint sample.

    - Each sample's target time is departure (default: now) plus its
      estimated travel time.
    - Samples reached in the future use the forecast endpoint when
      `forecast=True`; everything else uses current conditions.
    - Without an OpenWeather key, or when a single fetch fails, a
      deterministic synthetic reading stands in for that sample, so the
      result always lines up one-to-one with the input samples.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._transport = transport
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def fetch_for_samples(
        self,
        samples: Sequence[WaypointSample],
        forecast: bool = False,
        departure_time: Optional[datetime] = None,
    ) -> List[WeatherReading]:
        now = self._clock()
        base_time = _as_utc(departure_time) if departure_time else now

        if not self.settings.OPENWEATHER_API_KEY:
            logger.info(f"No OpenWeather key configured: generating synthetic weather for {len(samples)} samples")
            return [self._synthetic_for(s, base_time, now) for s in samples]

        t0 = perf_counter()
        async with httpx.AsyncClient(
            timeout=self.settings.HTTP_TIMEOUT_S,
            transport=self._transport,
        ) as client:
            readings = await asyncio.gather(
                *(self._fetch_one(client, s, base_time, now, forecast) for s in samples)
            )

        logger.info(
            f"Fetched weather for {len(samples)} samples in {(perf_counter() - t0) * 1000.0:.2f} ms"
        )
        return list(readings)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _fetch_one(
        self,
        client: httpx.AsyncClient,
        sample: WaypointSample,
        base_time: datetime,
        now: datetime,
        forecast: bool,
    ) -> WeatherReading:
        lng, lat = sample.point
        target = base_time + timedelta(seconds=sample.estimated_time_s)
        use_forecast = forecast and target > now
        endpoint = "forecast" if use_forecast else "weather"

        try:
            response = await client.get(
                f"{OPENWEATHER_BASE_URL}/{endpoint}",
                params={
                    "lat": lat,
                    "lon": lng,
                    "appid": self.settings.OPENWEATHER_API_KEY,
                    "units": "metric",
                },
            )
            response.raise_for_status()
            data = response.json()

            if use_forecast:
                item = closest_forecast_entry(data["list"], target)
            else:
                item = data
            reading = reading_from_openweather(item, lat, lng)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning(
                f"Weather fetch failed for ({lat:.5f}, {lng:.5f}) via /{endpoint}: {exc!r}; "
                "substituting synthetic reading"
            )
            return self._synthetic_for(sample, base_time, now)

        return reading.model_copy(update={"severity": classify(reading)})

    @staticmethod
    def _synthetic_for(sample: WaypointSample, base_time: datetime, now: datetime) -> WeatherReading:
        lng, lat = sample.point
        target = base_time + timedelta(seconds=sample.estimated_time_s)
        offset_hours = int(max(0.0, (target - now).total_seconds()) // 3600)
        return synthetic_reading(lat, lng, offset_hours=offset_hours, timestamp=target.isoformat())


def closest_forecast_entry(entries: List[Dict[str, Any]], target: datetime) -> Dict[str, Any]:
    """
    Forecast entry whose `dt` (unix seconds) is closest to `target`; earliest on ties.
    """
    if not entries:
        raise ValueError("Forecast contains no entries")
    target_ts = target.timestamp()
    return min(entries, key=lambda e: abs(e["dt"] - target_ts))


def reading_from_openweather(item: Dict[str, Any], lat: float, lng: float) -> WeatherReading:
    """
    Build an untagged reading from an OpenWeather current/forecast entry.
    """
    main = item["main"]
    wind = item.get("wind") or {}
    rain = item.get("rain") or {}
    condition = item["weather"][0]

    timestamp = None
    if item.get("dt") is not None:
        timestamp = datetime.fromtimestamp(item["dt"], tz=timezone.utc).isoformat()

    return WeatherReading(
        location=Location(lat=lat, lng=lng),
        temperature_c=main["temp"],
        feels_like_c=main["feels_like"],
        humidity=main["humidity"],
        wind_speed_ms=wind["speed"],
        wind_direction_deg=wind.get("deg") or 0,
        visibility_m=item.get("visibility") or 10_000,
        description=condition["description"],
        icon=condition["icon"],
        precipitation_mm_h=rain.get("1h") or rain.get("3h") or 0,
        timestamp=timestamp,
    )


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes from clients are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
