# weathernav/services/waypoint_sampler.py
import math
from typing import List, Sequence

from weathernav.core.errors import InvalidInputError
from weathernav.models.trip import Coordinate, WaypointSample
from weathernav.services.geometry import haversine_distance_m

# Sample every 50 miles or 30 minutes of driving, whichever comes first.
DISTANCE_INTERVAL_M = 80_467.0
TIME_INTERVAL_S = 1_800.0


def sample_waypoints(
    geometry: Sequence[Coordinate],
    total_distance_m: float,
    total_duration_s: float,
) -> List[WaypointSample]:
    """
    Pick the route points where weather should be looked up.

    Walks the geometry accumulating great-circle distance and, at the route's
    average speed, elapsed time. A point is emitted whenever the distance since
    the previous emitted point reaches the sampling interval. The first and
    last geometry points are always emitted; the last one carries the route
    totals.

    Intermediate samples carry the summed haversine length, the appended end
    sample carries the provider's totals. If the provider reports less than
    the summed length, the end sample can therefore be smaller than the one
    before it; the totals are passed through unchanged.

    Zero-distance and zero-duration routes have no usable average speed and
    are rejected; use `endpoint_samples` for those.
    """
    _check_totals(geometry, total_distance_m, total_duration_s)
    if total_duration_s == 0 or total_distance_m == 0:
        raise InvalidInputError(
            "Cannot sample a route with zero distance or duration "
            f"(distance={total_distance_m} m, duration={total_duration_s} s)"
        )

    avg_speed_mps = total_distance_m / total_duration_s
    interval_m = min(DISTANCE_INTERVAL_M, avg_speed_mps * TIME_INTERVAL_S)

    samples: List[WaypointSample] = [
        WaypointSample(point=tuple(geometry[0]), distance_m=0.0, estimated_time_s=0.0)
    ]

    accumulated_m = 0.0
    accumulated_s = 0.0
    last_sampled_m = 0.0

    for i in range(1, len(geometry)):
        segment_m = haversine_distance_m(geometry[i - 1], geometry[i])
        accumulated_m += segment_m
        accumulated_s += segment_m / avg_speed_mps

        if accumulated_m - last_sampled_m >= interval_m:
            samples.append(
                WaypointSample(
                    point=tuple(geometry[i]),
                    distance_m=accumulated_m,
                    estimated_time_s=accumulated_s,
                )
            )
            last_sampled_m = accumulated_m

    last_point = tuple(geometry[-1])
    if samples[-1].point != last_point:
        samples.append(
            WaypointSample(
                point=last_point,
                distance_m=total_distance_m,
                estimated_time_s=total_duration_s,
            )
        )

    return samples


def endpoint_samples(
    geometry: Sequence[Coordinate],
    total_distance_m: float,
    total_duration_s: float,
) -> List[WaypointSample]:
    """
    Start and end samples only, for routes `sample_waypoints` cannot handle.

    Returns a single sample when the route starts and ends on the same point.
    """
    if len(geometry) < 1:
        raise InvalidInputError("Route geometry is empty")
    if not (math.isfinite(total_distance_m) and math.isfinite(total_duration_s)):
        raise InvalidInputError("Route totals must be finite numbers")

    start = WaypointSample(point=tuple(geometry[0]), distance_m=0.0, estimated_time_s=0.0)
    end_point = tuple(geometry[-1])
    if end_point == start.point:
        return [start]
    return [
        start,
        WaypointSample(
            point=end_point,
            distance_m=total_distance_m,
            estimated_time_s=total_duration_s,
        ),
    ]


def _check_totals(
    geometry: Sequence[Coordinate],
    total_distance_m: float,
    total_duration_s: float,
) -> None:
    if len(geometry) < 2:
        raise InvalidInputError(
            f"Route geometry needs at least 2 points to sample, got {len(geometry)}"
        )
    for name, value in (("distance", total_distance_m), ("duration", total_duration_s)):
        if not math.isfinite(value) or value < 0:
            raise InvalidInputError(f"Route {name} must be a finite non-negative number, got {value}")
