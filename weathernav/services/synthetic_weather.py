# weathernav/services/synthetic_weather.py
import random
from typing import Optional

from weathernav.models.trip import Location, WeatherReading
from weathernav.services.severity import classify

# Placeholder conditions, one per severity tier. Only determinism and a
# plausible spread of tiers matter here; this is not a weather model.
SYNTHETIC_CONDITIONS = (
    {"description": "clear sky", "icon": "01d", "precipitation": 0.0, "wind": 3.0, "visibility": 10_000.0},
    {"description": "light rain", "icon": "10d", "precipitation": 2.0, "wind": 5.0, "visibility": 8_000.0},
    {"description": "heavy rain", "icon": "09d", "precipitation": 8.0, "wind": 8.0, "visibility": 5_000.0},
    {"description": "thunderstorm", "icon": "11d", "precipitation": 15.0, "wind": 12.0, "visibility": 2_000.0},
)


def synthetic_reading(
    lat: float,
    lng: float,
    offset_hours: int = 0,
    timestamp: Optional[str] = None,
) -> WeatherReading:
    """
    Generate a stand-in reading for a point when no real weather is available.

    The condition is picked from |lat + lng| + offset_hours modulo the number
    of conditions; jitter comes from a generator seeded with the rounded
    coordinates and offset, so the same input always yields the same reading.
    """
    condition = SYNTHETIC_CONDITIONS[int(abs(lat + lng) + offset_hours) % len(SYNTHETIC_CONDITIONS)]
    rng = random.Random(f"{lat:.5f}:{lng:.5f}:{offset_hours}")

    reading = WeatherReading(
        location=Location(lat=lat, lng=lng),
        temperature_c=20 + rng.random() * 10,
        feels_like_c=22 + rng.random() * 8,
        humidity=40 + rng.random() * 40,
        wind_speed_ms=condition["wind"] + rng.random() * 3,
        wind_direction_deg=rng.random() * 360,
        visibility_m=condition["visibility"],
        description=condition["description"],
        icon=condition["icon"],
        precipitation_mm_h=condition["precipitation"],
        timestamp=timestamp,
    )
    return reading.model_copy(update={"severity": classify(reading)})
