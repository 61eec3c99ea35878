from collections import deque

import numpy as np

from mapnav.synth.networks import grid_network, two_islands
from mapnav.synth.rng import RNGRegistry


def reachable(g, src):
    seen, q = {src}, deque([src])
    while q:
        u = q.popleft()
        for v in g.adjacent(u):
            if v not in seen:
                seen.add(v)
                q.append(v)
    return seen


def test_named_streams_are_deterministic():
    a1 = RNGRegistry(123, scenario="A").stream("grid").random(5)
    a2 = RNGRegistry(123, scenario="A").stream("grid").random(5)
    assert np.allclose(a1, a2)


def test_streams_and_workers_are_independent():
    reg = RNGRegistry(123)
    assert not np.allclose(reg.stream("grid").random(5), reg.stream("pairs").random(5))
    w0 = RNGRegistry(123, worker=0).stream("grid").random(5)
    w1 = RNGRegistry(123, worker=1).stream("grid").random(5)
    assert not np.allclose(w0, w1)


def test_substreams_are_order_invariant():
    reg = RNGRegistry(123)
    g17, g42 = reg.substream("trial", 17), reg.substream("trial", 42)
    reg2 = RNGRegistry(123)
    g42b, g17b = reg2.substream("trial", 42), reg2.substream("trial", 17)
    assert np.allclose(g17.random(3), g17b.random(3))
    assert np.allclose(g42.random(3), g42b.random(3))


def test_grid_stays_connected_when_dropping_blocks():
    g = grid_network(7, 9, rng=RNGRegistry(4).stream("grid"), drop_p=0.8)
    assert len(g) == 63
    assert reachable(g, 0) == set(g.vertices())
    assert g.way_name(0, 1) == "Row Street 0"
    assert g.way_name(0, 9) == "Column Avenue 0"


def test_two_islands_are_disconnected():
    g, west, east = two_islands(3, 3, rng=RNGRegistry(4).stream("islands"))
    assert reachable(g, west[0]) == set(west)
    assert reachable(g, east[0]) == set(east)
    assert max(g.lon(v) for v in west) < min(g.lon(v) for v in east)
