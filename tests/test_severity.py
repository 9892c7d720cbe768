# tests/test_severity.py
import pytest

from weathernav.models.trip import SeverityTier, WeatherAlert, worst_tier
from weathernav.services.severity import (
    classify,
    effective_severity,
    matching_rule,
    severity_color,
    tag_readings,
)


def mph(value: float) -> float:
    """Wind speed in m/s for a given mph value."""
    return value / 2.237


ALERT = WeatherAlert(event="Flood Warning", description="River flooding", severity="severe")


def test_calm_clear_reading_is_clear(make_reading):
    reading = make_reading()
    assert classify(reading) == SeverityTier.CLEAR
    assert matching_rule(reading) == "default"


def test_alerts_win_over_everything(make_reading):
    reading = make_reading(alerts=[ALERT], visibility_m=0.0)
    assert classify(reading) == SeverityTier.SEVERE
    assert matching_rule(reading) == "alerts"


def test_low_visibility_is_severe(make_reading):
    reading = make_reading(visibility_m=500.0, precipitation_mm_h=0.0)
    assert classify(reading) == SeverityTier.SEVERE
    assert matching_rule(reading) == "visibility<1000m"


def test_visibility_of_exactly_1000m_is_not_severe(make_reading):
    assert classify(make_reading(visibility_m=1000.0)) == SeverityTier.CLEAR


def test_precipitation_is_checked_before_wind(make_reading):
    reading = make_reading(precipitation_mm_h=6.0, wind_speed_ms=mph(50))
    assert classify(reading) == SeverityTier.WARNING
    assert matching_rule(reading) == "precipitation>5"


@pytest.mark.parametrize(
    "precipitation, expected",
    [
        (0.1, SeverityTier.CAUTION),
        (5.0, SeverityTier.CAUTION),
        (5.1, SeverityTier.WARNING),
        (10.0, SeverityTier.WARNING),
        (10.1, SeverityTier.SEVERE),
    ],
)
def test_precipitation_thresholds_are_strict(make_reading, precipitation, expected):
    assert classify(make_reading(precipitation_mm_h=precipitation)) == expected


def test_missing_precipitation_counts_as_zero(make_reading):
    assert classify(make_reading(precipitation_mm_h=None)) == SeverityTier.CLEAR


@pytest.mark.parametrize(
    "wind_ms, expected",
    [
        (8.9, SeverityTier.CLEAR),      # 19.9 mph
        (9.0, SeverityTier.CAUTION),    # 20.1 mph
        (14.0, SeverityTier.WARNING),   # 31.3 mph
        (18.0, SeverityTier.SEVERE),    # 40.3 mph
    ],
)
def test_wind_thresholds_in_mph(make_reading, wind_ms, expected):
    assert classify(make_reading(wind_speed_ms=wind_ms)) == expected


def test_wind_is_checked_before_description(make_reading):
    reading = make_reading(wind_speed_ms=mph(25), description="tornado")
    assert classify(reading) == SeverityTier.CAUTION


@pytest.mark.parametrize(
    "description, expected",
    [
        ("Thunderstorm with light rain", SeverityTier.SEVERE),
        ("HURRICANE", SeverityTier.SEVERE),
        ("light snow", SeverityTier.WARNING),
        ("freezing fog and ice", SeverityTier.WARNING),
        ("Light Drizzle", SeverityTier.CAUTION),
        ("moderate rain", SeverityTier.CAUTION),
        ("overcast clouds", SeverityTier.CLEAR),
    ],
)
def test_description_keywords(make_reading, description, expected):
    assert classify(make_reading(description=description)) == expected


def test_effective_severity_keeps_source_tier(make_reading):
    reading = make_reading(precipitation_mm_h=20.0, severity=SeverityTier.CAUTION)
    assert effective_severity(reading) == SeverityTier.CAUTION
    assert effective_severity(make_reading(precipitation_mm_h=20.0)) == SeverityTier.SEVERE


def test_tag_readings_fills_only_missing_tiers(make_reading):
    preset = make_reading(severity=SeverityTier.WARNING)
    untagged = make_reading(description="light rain")

    tagged = tag_readings([preset, untagged])

    assert [r.severity for r in tagged] == [SeverityTier.WARNING, SeverityTier.CAUTION]
    assert untagged.severity is None


def test_tiers_are_totally_ordered():
    assert SeverityTier.CLEAR < SeverityTier.CAUTION < SeverityTier.WARNING < SeverityTier.SEVERE
    assert sorted([SeverityTier.SEVERE, SeverityTier.CLEAR, SeverityTier.WARNING]) == [
        SeverityTier.CLEAR,
        SeverityTier.WARNING,
        SeverityTier.SEVERE,
    ]
    assert worst_tier(SeverityTier.CAUTION, SeverityTier.WARNING, SeverityTier.CLEAR) == SeverityTier.WARNING
    assert worst_tier() == SeverityTier.CLEAR


def test_severity_colors():
    assert severity_color(SeverityTier.CLEAR) == "#22c55e"
    assert severity_color(SeverityTier.CAUTION) == "#eab308"
    assert severity_color(SeverityTier.WARNING) == "#f97316"
    assert severity_color(SeverityTier.SEVERE) == "#ef4444"
