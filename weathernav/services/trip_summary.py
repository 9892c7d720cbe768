# weathernav/services/trip_summary.py
from typing import Sequence

from weathernav.core.errors import InvalidInputError
from weathernav.models.trip import TripSummary, WeatherReading, worst_tier
from weathernav.services.severity import effective_severity


def summarize_trip(readings: Sequence[WeatherReading]) -> TripSummary:
    """
    Reduce the readings along one trip to trip-level statistics.

    alert_count is the total number of alerts across all readings, not the
    number of readings that carry alerts.
    """
    if not readings:
        raise InvalidInputError("Cannot summarise a trip without weather readings")

    temps = [r.temperature_c for r in readings]
    tiers = [effective_severity(r) for r in readings]
    worst = worst_tier(*tiers)
    # First reading at the worst tier names the conditions
    worst_reading = readings[tiers.index(worst)]
    alert_count = sum(len(r.alerts) for r in readings)

    return TripSummary(
        worst_severity=worst,
        worst_description=worst_reading.description,
        temp_min_c=min(temps),
        temp_max_c=max(temps),
        temp_avg_c=sum(temps) / len(temps),
        max_precipitation_mm_h=max(r.precipitation_mm_h or 0.0 for r in readings),
        max_wind_speed_ms=max(r.wind_speed_ms for r in readings),
        alert_count=alert_count,
        has_alerts=alert_count > 0,
        reading_count=len(readings),
    )
