# tests/test_segmenter.py
import pytest

from weathernav.models.trip import Location, Route, SeverityTier
from weathernav.services.segmenter import segment_route


@pytest.fixture
def route():
    # 11 points along the equator from lon 0.0 to 1.0
    return Route(
        id="route-0",
        origin=Location(lat=0.0, lng=0.0),
        destination=Location(lat=0.0, lng=1.0),
        distance_m=111_194.93,
        duration_s=3_600.0,
        geometry=[(round(i * 0.1, 1), 0.0) for i in range(11)],
    )


def test_one_segment_per_forward_pair(route, make_reading):
    readings = [
        make_reading(lng=0.0, severity=SeverityTier.CLEAR),
        make_reading(lng=0.5, severity=SeverityTier.CAUTION),
        make_reading(lng=1.0, severity=SeverityTier.CLEAR),
    ]

    segments = segment_route(route, readings)

    assert len(segments) == 2
    assert segments[0].coordinates == route.geometry[0:6]
    assert segments[1].coordinates == route.geometry[5:11]
    assert all(s.severity == SeverityTier.CAUTION for s in segments)
    assert segments[0].color == "#eab308"


def test_backward_pair_is_dropped(route, make_reading):
    readings = [
        make_reading(lng=0.0, severity=SeverityTier.CLEAR),
        make_reading(lng=0.5, severity=SeverityTier.WARNING),
        make_reading(lng=0.2, severity=SeverityTier.SEVERE),
    ]

    segments = segment_route(route, readings)

    assert len(segments) == 1
    assert segments[0].coordinates == route.geometry[0:6]
    assert segments[0].severity == SeverityTier.WARNING
    assert segments[0].color == "#f97316"


def test_pair_matching_the_same_point_is_dropped(route, make_reading):
    readings = [
        make_reading(lng=0.30),
        make_reading(lng=0.31),
    ]
    assert segment_route(route, readings) == []


def test_readings_off_the_route_snap_to_nearest_point(route, make_reading):
    readings = [
        make_reading(lat=0.02, lng=0.19),
        make_reading(lat=-0.03, lng=0.42),
    ]

    segments = segment_route(route, readings)

    assert len(segments) == 1
    assert segments[0].coordinates == route.geometry[2:5]


def test_untagged_readings_are_classified(route, make_reading):
    readings = [
        make_reading(lng=0.0),
        make_reading(lng=1.0, description="heavy snow"),
    ]

    segments = segment_route(route, readings)

    assert segments[0].severity == SeverityTier.WARNING
    assert segments[0].coordinates == route.geometry


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_readings_give_no_segments(route, make_reading, count):
    readings = [make_reading(lng=0.0)] * count
    assert segment_route(route, readings) == []
