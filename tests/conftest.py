# tests/conftest.py
import os
import sys

# Add the project root directory to sys.path so that "import weathernav" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Blank provider credentials before the app is imported so every service
# takes its offline path (Nominatim aside, which tests always mock).
for key in ("MAPBOX_TOKEN", "OPENROUTE_API_KEY", "OPENWEATHER_API_KEY"):
    os.environ[key] = ""


import pytest  # noqa: E402

from weathernav.models.trip import Location, WeatherReading  # noqa: E402


@pytest.fixture
def make_reading():
    """
    Factory for readings with calm, clear defaults; override any field by keyword.
    """

    def _make(lat=0.0, lng=0.0, **overrides):
        fields = dict(
            location=Location(lat=lat, lng=lng),
            temperature_c=15.0,
            feels_like_c=15.0,
            humidity=50.0,
            wind_speed_ms=0.0,
            wind_direction_deg=0.0,
            visibility_m=10_000.0,
            description="clear sky",
            icon="01d",
            precipitation_mm_h=0.0,
        )
        fields.update(overrides)
        return WeatherReading(**fields)

    return _make
