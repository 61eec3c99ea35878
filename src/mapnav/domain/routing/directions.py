# domain/routing/directions.py
from collections.abc import Sequence

from mapnav.app.protocols import GraphView
from mapnav.domain.entities.navigation import UNKNOWN_ROAD, Direction, NavigationStep


def classify_bearing(deg: float) -> Direction:
    """Bucket a signed bearing in degrees into one of the turn classes."""
    if -15.0 <= deg <= 15.0:
        return Direction.STRAIGHT
    if -30.0 <= deg <= 30.0:
        return Direction.SLIGHT_LEFT if deg < 0.0 else Direction.SLIGHT_RIGHT
    if -100.0 <= deg <= 100.0:
        return Direction.LEFT if deg < 0.0 else Direction.RIGHT
    return Direction.SHARP_LEFT if deg < 0.0 else Direction.SHARP_RIGHT


def to_directions(graph: GraphView, path: Sequence[int]) -> list[NavigationStep]:
    """
    Collapse a vertex path into instructions, one per run of same-named ways.
    The turn measured on one hop labels the step that starts on the next hop;
    the first step is always START.
    """
    steps: list[NavigationStep] = []
    if len(path) < 2:
        return steps

    pending = Direction.START
    prev: NavigationStep | None = None
    for cur, nxt in zip(path[:-1], path[1:]):
        way = graph.way_name(cur, nxt)
        step = NavigationStep(pending, UNKNOWN_ROAD if way is None else way, graph.distance(cur, nxt))
        # bearing is taken from the next vertex back to the current one
        pending = classify_bearing(graph.bearing(nxt, cur))
        if prev is not None and prev.way == step.way:
            prev.distance += step.distance
        else:
            steps.append(step)
            prev = step
    return steps
