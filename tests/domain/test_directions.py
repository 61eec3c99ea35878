import pytest

from mapnav.domain.entities.graph import GraphBuilder, RoadGraph
from mapnav.domain.entities.navigation import UNKNOWN_ROAD, Direction
from mapnav.domain.routing.directions import classify_bearing, to_directions


@pytest.fixture
def city() -> RoadGraph:
    #   1 - 2 - 3 - 4   "Shattuck Avenue" running north
    #               \
    #                5 - 6  "Dwight Way" then an unnamed service road
    b = GraphBuilder()
    b.add_vertex(1, -122.268, 37.860)
    b.add_vertex(2, -122.268, 37.862)
    b.add_vertex(3, -122.268, 37.864)
    b.add_vertex(4, -122.268, 37.866)
    b.add_vertex(5, -122.265, 37.866)
    b.add_vertex(6, -122.262, 37.867)
    b.add_way("Shattuck Avenue", [1, 2, 3, 4])
    b.add_way("Dwight Way", [4, 5])
    b.add_edge(5, 6)
    return b.freeze()


@pytest.mark.parametrize(
    "deg, expected",
    [
        (0.0, Direction.STRAIGHT),
        (15.0, Direction.STRAIGHT),
        (-15.0, Direction.STRAIGHT),
        (15.5, Direction.SLIGHT_RIGHT),
        (30.0, Direction.SLIGHT_RIGHT),
        (-15.5, Direction.SLIGHT_LEFT),
        (-30.0, Direction.SLIGHT_LEFT),
        (30.5, Direction.RIGHT),
        (100.0, Direction.RIGHT),
        (-30.5, Direction.LEFT),
        (-100.0, Direction.LEFT),
        (100.5, Direction.SHARP_RIGHT),
        (180.0, Direction.SHARP_RIGHT),
        (-100.5, Direction.SHARP_LEFT),
        (-180.0, Direction.SHARP_LEFT),
    ],
)
def test_bearing_buckets(deg, expected):
    assert classify_bearing(deg) is expected


def test_same_way_merges_into_one_step(city):
    steps = to_directions(city, [1, 2, 3, 4])
    assert len(steps) == 1
    (s,) = steps
    assert s.direction is Direction.START
    assert s.way == "Shattuck Avenue"
    expected = city.distance(1, 2) + city.distance(2, 3) + city.distance(3, 4)
    assert s.distance == pytest.approx(expected, rel=1e-12)


def test_turn_measured_on_previous_hop_labels_next_step(city):
    steps = to_directions(city, [1, 2, 3, 4, 5, 6])
    assert [s.way for s in steps] == ["Shattuck Avenue", "Dwight Way", UNKNOWN_ROAD]
    assert steps[0].direction is Direction.START
    assert steps[1].direction is classify_bearing(city.bearing(4, 3))
    assert steps[2].direction is classify_bearing(city.bearing(5, 4))
    assert steps[1].distance == pytest.approx(city.distance(4, 5))
    assert steps[2].distance == pytest.approx(city.distance(5, 6))


def test_northbound_hop_reads_as_sharp_right(city):
    # bearing from 4 back to 3 is due south
    steps = to_directions(city, [3, 4, 5])
    assert steps[1].direction is Direction.SHARP_RIGHT


def test_short_paths_yield_nothing(city):
    assert to_directions(city, []) == []
    assert to_directions(city, [3]) == []


def test_missing_way_name_uses_unknown_road(city):
    (s,) = to_directions(city, [5, 6])
    assert s.way == UNKNOWN_ROAD
    assert s.direction is Direction.START
