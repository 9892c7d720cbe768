# weathernav/models/trip.py

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (longitude, latitude) in decimal degrees.
# Every geometry array in the pipeline uses this order; Location uses named
# lat/lng fields instead, so conversions only happen through Location helpers.
Coordinate = Tuple[float, float]


class SeverityTier(str, Enum):
    """
    Ordered weather-risk level: clear < caution < warning < severe.

    The str mixin keeps JSON output as plain strings, so comparisons are
    redefined on `rank` instead of falling back to string ordering.
    """

    CLEAR = "clear"
    CAUTION = "caution"
    WARNING = "warning"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_ORDER = (
    SeverityTier.CLEAR,
    SeverityTier.CAUTION,
    SeverityTier.WARNING,
    SeverityTier.SEVERE,
)


def worst_tier(*tiers: SeverityTier) -> SeverityTier:
    """
    Worst (highest) tier among the arguments; CLEAR when called with none.
    """
    return max(tiers, key=lambda t: t.rank, default=SeverityTier.CLEAR)


class Location(BaseModel):
    """
    Latitude/longitude point with an optional human-readable label.
    """
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)
    address: Optional[str] = None

    def to_coordinate(self) -> Coordinate:
        return (self.lng, self.lat)

    @classmethod
    def from_coordinate(cls, coord: Coordinate, address: Optional[str] = None) -> "Location":
        lng, lat = coord
        return cls(lat=lat, lng=lng, address=address)


class RouteInstruction(BaseModel):
    """
    One turn-by-turn step as reported by the routing provider.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    distance_m: float = 0.0
    duration_s: float = 0.0
    type: str = ""


class Route(BaseModel):
    """
    A driving route between two locations.

    geometry is a list of (lon, lat) coordinates; first ~ origin, last ~ destination.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    origin: Location
    destination: Location
    distance_m: float = Field(ge=0.0)
    duration_s: float = Field(ge=0.0)
    geometry: List[Coordinate] = Field(min_length=1)
    instructions: List[RouteInstruction] = Field(default_factory=list)
    alternative_routes: List["Route"] = Field(default_factory=list)


class WaypointSample(BaseModel):
    """
    A point along a route annotated with cumulative distance and estimated
    elapsed time from the route start.
    """
    point: Coordinate
    distance_m: float
    estimated_time_s: float

    @field_validator("point")
    @classmethod
    def validate_point(cls, point: Coordinate) -> Coordinate:
        lon, lat = point
        if not (-180.0 <= lon <= 180.0):
            raise ValueError(f"lon out of range [-180,180]: {lon}")
        if not (-90.0 <= lat <= 90.0):
            raise ValueError(f"lat out of range [-90,90]: {lat}")
        return point


class WeatherAlert(BaseModel):
    event: str
    start: Optional[str] = None
    end: Optional[str] = None
    description: str = ""
    severity: str = ""


class WeatherReading(BaseModel):
    """
    Weather conditions at one waypoint sample.

    `severity` is None until the reading has been tagged by the classifier
    (or by the data source).
    """
    location: Location
    temperature_c: float
    feels_like_c: float
    humidity: float
    wind_speed_ms: float
    wind_direction_deg: float = 0.0
    visibility_m: float = 10_000.0
    description: str = ""
    icon: str = ""
    precipitation_mm_h: Optional[float] = 0.0
    severity: Optional[SeverityTier] = None
    alerts: List[WeatherAlert] = Field(default_factory=list)
    timestamp: Optional[str] = None


class RouteSegment(BaseModel):
    """
    Slice of route geometry colored by the worse of its two bounding readings.
    """
    coordinates: List[Coordinate]
    severity: SeverityTier
    color: str


class TripSummary(BaseModel):
    worst_severity: SeverityTier
    worst_description: str
    temp_min_c: float
    temp_max_c: float
    temp_avg_c: float
    max_precipitation_mm_h: float
    max_wind_speed_ms: float
    alert_count: int
    has_alerts: bool
    reading_count: int


class GeocodeResult(BaseModel):
    """
    One geocoding match. `center` is (lon, lat).
    """
    place_name: str
    center: Coordinate
    place_type: List[str] = Field(default_factory=list)
    address: Optional[str] = None

    def to_location(self) -> Location:
        return Location.from_coordinate(self.center, address=self.address or self.place_name)
