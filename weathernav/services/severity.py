# weathernav/services/severity.py
from typing import Callable, Dict, List, Sequence, Tuple

from weathernav.models.trip import SeverityTier, WeatherReading

MS_TO_MPH = 2.237

SEVERITY_COLORS: Dict[SeverityTier, str] = {
    SeverityTier.CLEAR: "#22c55e",
    SeverityTier.CAUTION: "#eab308",
    SeverityTier.WARNING: "#f97316",
    SeverityTier.SEVERE: "#ef4444",
}


def _precipitation(reading: WeatherReading) -> float:
    return reading.precipitation_mm_h or 0.0


def _wind_mph(reading: WeatherReading) -> float:
    return reading.wind_speed_ms * MS_TO_MPH


def _description_has(*words: str) -> Callable[[WeatherReading], bool]:
    def predicate(reading: WeatherReading) -> bool:
        desc = reading.description.lower()
        return any(word in desc for word in words)

    return predicate


# Evaluated top to bottom, first match wins. Order matters: a reading with
# 6 mm/h of rain and 50 mph wind is WARNING because precipitation is checked
# before wind.
SEVERITY_RULES: List[Tuple[str, Callable[[WeatherReading], bool], SeverityTier]] = [
    ("alerts", lambda r: len(r.alerts) > 0, SeverityTier.SEVERE),
    ("visibility<1000m", lambda r: r.visibility_m < 1000, SeverityTier.SEVERE),
    ("precipitation>10", lambda r: _precipitation(r) > 10, SeverityTier.SEVERE),
    ("precipitation>5", lambda r: _precipitation(r) > 5, SeverityTier.WARNING),
    ("precipitation>0", lambda r: _precipitation(r) > 0, SeverityTier.CAUTION),
    ("wind>40mph", lambda r: _wind_mph(r) > 40, SeverityTier.SEVERE),
    ("wind>30mph", lambda r: _wind_mph(r) > 30, SeverityTier.WARNING),
    ("wind>20mph", lambda r: _wind_mph(r) > 20, SeverityTier.CAUTION),
    ("storm", _description_has("storm", "tornado", "hurricane"), SeverityTier.SEVERE),
    ("snow/ice", _description_has("snow", "ice", "blizzard"), SeverityTier.WARNING),
    ("rain", _description_has("rain", "drizzle"), SeverityTier.CAUTION),
]


def matching_rule(reading: WeatherReading) -> str:
    """
    Name of the first rule that fires for `reading`, or "default".
    """
    for name, predicate, _ in SEVERITY_RULES:
        if predicate(reading):
            return name
    return "default"


def classify(reading: WeatherReading) -> SeverityTier:
    """
    Map one weather reading to its severity tier.
    """
    for _, predicate, tier in SEVERITY_RULES:
        if predicate(reading):
            return tier
    return SeverityTier.CLEAR


def effective_severity(reading: WeatherReading) -> SeverityTier:
    """
    The reading's own tier if the data source set one, otherwise the classified tier.
    """
    if reading.severity is not None:
        return reading.severity
    return classify(reading)


def tag_readings(readings: Sequence[WeatherReading]) -> List[WeatherReading]:
    """
    Copies of `readings` with every missing severity filled in by `classify`.
    """
    return [
        r if r.severity is not None else r.model_copy(update={"severity": classify(r)})
        for r in readings
    ]


def severity_color(tier: SeverityTier) -> str:
    return SEVERITY_COLORS[tier]
