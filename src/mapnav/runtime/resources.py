# mapnav/runtime/resources.py
import json
import pickle
from functools import lru_cache

from mapnav.domain.entities.graph import GraphBuilder, RoadGraph


def graph_from_document(doc: dict, *, drop_isolated: bool = True) -> RoadGraph:
    """
    Build a graph from a preprocessed map document:
      {"nodes": [{"id", "lon", "lat", "name"?}], "ways": [{"name"?, "nodes": [...]}]}
    """
    b = GraphBuilder()
    for n in doc.get("nodes", ()):
        b.add_vertex(int(n["id"]), n["lon"], n["lat"])
    for w in doc.get("ways", ()):
        b.add_way(w.get("name"), (int(v) for v in w["nodes"]))
    if drop_isolated:
        b.drop_isolated()
    for n in doc.get("nodes", ()):
        vid = int(n["id"])
        if n.get("name") and vid in b:
            b.set_location(n["name"], vid)
    return b.freeze()


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str, drop_isolated: bool = True) -> RoadGraph:
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            return graph_from_document(json.load(f), drop_isolated=drop_isolated)
    if fmt == "pickle":
        with open(file, "rb") as f:
            g = pickle.load(f)
        if not isinstance(g, RoadGraph):
            raise TypeError(f"{file} does not hold a RoadGraph")
        return g
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
