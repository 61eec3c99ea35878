# domain/entities/graph.py
import re
from bisect import bisect_left
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from mapnav.geo.geodesy import haversine_mi, haversine_mi_many, initial_bearing_deg

_NOT_LETTERS = re.compile(r"[^a-zA-Z ]")


def clean_name(s: str) -> str:
    """Lowercase and strip everything but ASCII letters and spaces."""
    return _NOT_LETTERS.sub("", s).lower()


class EmptyGraphError(LookupError):
    """Nearest-vertex lookup against a graph with no vertices."""


@dataclass(frozen=True)
class Vertex:
    id: int
    lon: float
    lat: float
    ways: Mapping[int, str | None]  # neighbor id -> way name

    @property
    def neighbors(self) -> Iterable[int]:
        return self.ways.keys()


class GraphBuilder:
    """
    Mutable side of the road graph. Collects vertices, ways and location
    names, then `freeze()` hands out a read-only RoadGraph.
    """

    def __init__(self):
        self._coords: dict[int, tuple[float, float]] = {}
        self._adj: dict[int, dict[int, str | None]] = {}
        self._locations: dict[str, list[int]] = {}

    def __len__(self) -> int:
        return len(self._coords)

    def __contains__(self, vid) -> bool:
        return vid in self._coords

    def add_vertex(self, vid: int, lon: float, lat: float) -> "GraphBuilder":
        self._coords[vid] = (float(lon), float(lat))
        self._adj.setdefault(vid, {})
        return self

    def add_edge(self, v: int, w: int, way: str | None = None) -> "GraphBuilder":
        if v not in self._coords or w not in self._coords:
            missing = v if v not in self._coords else w
            raise KeyError(f"unknown vertex {missing}")
        self._adj[v][w] = way
        self._adj[w][v] = way
        return self

    def add_way(self, name: str | None, node_ids: Iterable[int]) -> "GraphBuilder":
        """Connect consecutive nodes of a way."""
        ids = list(node_ids)
        for a, b in zip(ids[:-1], ids[1:]):
            self.add_edge(a, b, name)
        return self

    def set_location(self, name: str, vid: int) -> "GraphBuilder":
        if vid not in self._coords:
            raise KeyError(f"unknown vertex {vid}")
        self._locations.setdefault(clean_name(name), []).append(vid)
        return self

    def drop_isolated(self) -> int:
        isolated = [v for v, nbrs in self._adj.items() if not nbrs]
        for v in isolated:
            del self._coords[v]
            del self._adj[v]
        if isolated:
            gone = set(isolated)
            for name in list(self._locations):
                kept = [v for v in self._locations[name] if v not in gone]
                if kept:
                    self._locations[name] = kept
                else:
                    del self._locations[name]
        return len(isolated)

    def freeze(self) -> "RoadGraph":
        vertices = {
            vid: Vertex(vid, lon, lat, MappingProxyType(dict(self._adj[vid])))
            for vid, (lon, lat) in self._coords.items()
        }
        locations = {name: tuple(ids) for name, ids in self._locations.items()}
        return RoadGraph(vertices, locations)


class RoadGraph:
    """Read-only road graph. Safe to share between concurrent queries."""

    def __init__(self, vertices: dict[int, Vertex], locations: dict[str, tuple[int, ...]]):
        self._v = MappingProxyType(vertices)
        self._locations = MappingProxyType(locations)
        self._location_keys = sorted(locations)
        self._ids = np.fromiter(vertices.keys(), dtype=np.int64, count=len(vertices))
        self._lons = np.fromiter((v.lon for v in vertices.values()), dtype=float, count=len(vertices))
        self._lats = np.fromiter((v.lat for v in vertices.values()), dtype=float, count=len(vertices))

    def __reduce__(self):
        # mapping proxies don't pickle; ship plain dicts and rebuild
        coords = {vid: (v.lon, v.lat) for vid, v in self._v.items()}
        adj = {vid: dict(v.ways) for vid, v in self._v.items()}
        return _rebuild_graph, (coords, adj, dict(self._locations))

    def __len__(self) -> int:
        return len(self._v)

    def __contains__(self, vid) -> bool:
        return vid in self._v

    def vertices(self) -> Iterator[int]:
        return iter(self._v)

    def vertex(self, vid: int) -> Vertex:
        return self._v[vid]

    def lon(self, vid: int) -> float:
        return self._v[vid].lon

    def lat(self, vid: int) -> float:
        return self._v[vid].lat

    def adjacent(self, vid: int) -> Iterable[int]:
        return self._v[vid].neighbors

    def way_name(self, a: int, b: int) -> str | None:
        return self._v[a].ways.get(b)

    def distance(self, a: int, b: int) -> float:
        va, vb = self._v[a], self._v[b]
        return haversine_mi(va.lon, va.lat, vb.lon, vb.lat)

    def bearing(self, a: int, b: int) -> float:
        va, vb = self._v[a], self._v[b]
        return initial_bearing_deg(va.lon, va.lat, vb.lon, vb.lat)

    def nearest_vertex(self, lon: float, lat: float) -> int:
        if not len(self._ids):
            raise EmptyGraphError("nearest_vertex on an empty graph")
        d = haversine_mi_many(lon, lat, self._lons, self._lats)
        # argmin keeps the first minimum, i.e. first-inserted vertex wins ties
        return int(self._ids[int(np.argmin(d))])

    # ---------------- location names ----------------

    def locations_by_prefix(self, prefix: str) -> list[str]:
        p = clean_name(prefix)
        out = []
        for key in self._location_keys[bisect_left(self._location_keys, p) :]:
            if not key.startswith(p):
                break
            out.append(key)
        return out

    def location_vertices(self, name: str) -> tuple[int, ...]:
        return self._locations.get(clean_name(name), ())


def _rebuild_graph(coords, adj, locations) -> RoadGraph:
    vertices = {
        vid: Vertex(vid, lon, lat, MappingProxyType(adj[vid])) for vid, (lon, lat) in coords.items()
    }
    return RoadGraph(vertices, locations)
