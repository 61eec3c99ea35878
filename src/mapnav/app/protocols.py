from collections.abc import Iterable
from typing import Protocol, runtime_checkable


# ------------- Graph collaborator --------------------
@runtime_checkable
class GraphView(Protocol):
    """
    Read-only view of the road graph the engines query.
    Units: degrees for lon/lat and bearings; miles for distances.
    """

    def adjacent(self, vid: int) -> Iterable[int]: ...
    def distance(self, a: int, b: int) -> float: ...
    def bearing(self, a: int, b: int) -> float:
        """Initial bearing from a towards b in (-180, 180]."""

    def nearest_vertex(self, lon: float, lat: float) -> int:
        """Closest vertex id; raises on an empty graph."""

    def way_name(self, a: int, b: int) -> str | None: ...

