# weathernav/services/geometry.py
import math
from typing import List, Sequence

import polyline

from weathernav.core.errors import InvalidInputError
from weathernav.models.trip import Coordinate, Location

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance_m(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance between two (lon, lat) points in degrees, in metres.
    """
    lon1, lat1 = a
    lon2, lat2 = b
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)

    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def polyline_length_m(points: Sequence[Coordinate]) -> float:
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_distance_m(points[i - 1], points[i])
    return total


def nearest_index(points: Sequence[Coordinate], target: Coordinate) -> int:
    """
    Index of the point closest to `target`, first one on ties.

    Uses planar Euclidean distance in lon/lat degree space rather than
    geodesic distance. This is only accurate while the points are dense
    relative to route curvature, which holds for provider geometries.
    """
    if not points:
        raise InvalidInputError("Cannot search an empty geometry")

    best_idx = 0
    best_d2 = float("inf")
    tx, ty = target
    for i, (x, y) in enumerate(points):
        dx = x - tx
        dy = y - ty
        d2 = dx * dx + dy * dy
        if d2 < best_d2:
            best_d2 = d2
            best_idx = i
    return best_idx


def straight_line_path(origin: Location, destination: Location, num_points: int) -> List[Coordinate]:
    """
    Linearly interpolate `num_points` segments between origin and destination.

    Returns num_points + 1 (lon, lat) coordinates, both endpoints included.
    """
    if num_points < 1:
        raise InvalidInputError(f"num_points must be >= 1, got {num_points}")

    path: List[Coordinate] = []
    for i in range(num_points + 1):
        t = i / num_points
        lng = origin.lng + (destination.lng - origin.lng) * t
        lat = origin.lat + (destination.lat - origin.lat) * t
        path.append((lng, lat))
    return path


def decode_polyline(encoded: str, precision: int = 5) -> List[Coordinate]:
    """
    Decode a Google encoded polyline into (lon, lat) coordinates.
    """
    return [(lng, lat) for lng, lat in polyline.decode(encoded, precision, geojson=True)]
