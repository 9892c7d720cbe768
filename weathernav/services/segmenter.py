# weathernav/services/segmenter.py
from typing import List, Sequence

from weathernav.models.trip import Route, RouteSegment, WeatherReading, worst_tier
from weathernav.services.geometry import nearest_index
from weathernav.services.severity import effective_severity, severity_color


def segment_route(route: Route, readings: Sequence[WeatherReading]) -> List[RouteSegment]:
    """
    Split the route geometry into slices between consecutive weather readings.

    Each slice runs from the geometry point nearest reading i to the point
    nearest reading i+1 (both inclusive) and takes the worse of the two tiers.
    Pairs whose nearest points are not strictly increasing along the geometry
    produce no segment.
    """
    segments: List[RouteSegment] = []
    if len(readings) < 2:
        return segments

    geometry = route.geometry
    for start, end in zip(readings[:-1], readings[1:]):
        start_idx = nearest_index(geometry, start.location.to_coordinate())
        end_idx = nearest_index(geometry, end.location.to_coordinate())
        if start_idx >= end_idx:
            continue

        tier = worst_tier(effective_severity(start), effective_severity(end))
        segments.append(
            RouteSegment(
                coordinates=list(geometry[start_idx:end_idx + 1]),
                severity=tier,
                color=severity_color(tier),
            )
        )

    return segments
