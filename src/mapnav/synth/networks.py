# synth/networks.py
import numpy as np

from mapnav.domain.entities.graph import GraphBuilder, RoadGraph


def _lattice(
    b: GraphBuilder,
    rows: int,
    cols: int,
    *,
    rng: np.random.Generator,
    origin: tuple[float, float],
    spacing_deg: float,
    jitter: float,
    drop_p: float,
    first_id: int,
) -> None:
    lon0, lat0 = origin

    def vid(i, j):
        return first_id + i * cols + j

    for i in range(rows):
        for j in range(cols):
            dx, dy = rng.uniform(-jitter, jitter, size=2) * spacing_deg
            # row 0 is the northern edge
            b.add_vertex(vid(i, j), lon0 + j * spacing_deg + dx, lat0 - i * spacing_deg + dy)

    # row streets are always kept so the lattice stays connected; avenue
    # blocks may be dropped except in column 0
    for i in range(rows):
        b.add_way(f"Row Street {i}", [vid(i, j) for j in range(cols)])
    for j in range(cols):
        for i in range(rows - 1):
            if j == 0 or rng.random() >= drop_p:
                b.add_edge(vid(i, j), vid(i + 1, j), f"Column Avenue {j}")


def grid_network(
    rows: int,
    cols: int,
    *,
    rng: np.random.Generator,
    origin: tuple[float, float] = (-122.29, 37.885),
    spacing_deg: float = 0.002,
    jitter: float = 0.2,
    drop_p: float = 0.0,
) -> RoadGraph:
    """Connected, jittered lon/lat lattice with named streets and avenues."""
    if rows < 1 or cols < 1:
        raise ValueError("grid needs at least one row and one column")
    b = GraphBuilder()
    _lattice(
        b,
        rows,
        cols,
        rng=rng,
        origin=origin,
        spacing_deg=spacing_deg,
        jitter=jitter,
        drop_p=drop_p,
        first_id=0,
    )
    return b.freeze()


def two_islands(
    rows: int,
    cols: int,
    *,
    rng: np.random.Generator,
    origin: tuple[float, float] = (-122.29, 37.885),
    spacing_deg: float = 0.002,
    gap_deg: float = 0.02,
) -> tuple[RoadGraph, range, range]:
    """Two disconnected lattices side by side. Returns (graph, west ids, east ids)."""
    n = rows * cols
    b = GraphBuilder()
    kw = dict(rng=rng, spacing_deg=spacing_deg, jitter=0.2, drop_p=0.0)
    _lattice(b, rows, cols, origin=origin, first_id=0, **kw)
    east = (origin[0] + cols * spacing_deg + gap_deg, origin[1])
    _lattice(b, rows, cols, origin=east, first_id=n, **kw)
    return b.freeze(), range(0, n), range(n, 2 * n)
