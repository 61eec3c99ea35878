# mapnav/app/backend.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from mapnav.domain.entities.graph import RoadGraph
from mapnav.domain.entities.navigation import NavigationStep
from mapnav.domain.raster.rasterer import Rasterer
from mapnav.domain.routing.directions import to_directions
from mapnav.domain.routing.pathfinder import shortest_path
from mapnav.engine.hooks import NoopHooks, QueryHooks


@dataclass
class MapBackend:
    """
    Convenience façade over the frozen graph and the tile rasterer; this is
    what a transport layer calls. Holds no per-query state.
    """

    graph: RoadGraph
    rasterer: Rasterer
    hooks: QueryHooks = field(default_factory=NoopHooks)
    max_expansions: int | None = None

    def route(self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float) -> list[int]:
        return shortest_path(
            self.graph,
            start_lon,
            start_lat,
            dest_lon,
            dest_lat,
            hooks=self.hooks,
            max_expansions=self.max_expansions,
        )

    def directions(self, path: Sequence[int]) -> list[NavigationStep]:
        return to_directions(self.graph, path)

    def route_with_directions(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> tuple[list[int], list[NavigationStep]]:
        path = self.route(start_lon, start_lat, dest_lon, dest_lat)
        return path, self.directions(path)

    def raster(self, params: Mapping[str, float]) -> dict:
        return self.rasterer.raster_params(params)

    def search_locations(self, prefix: str) -> list[str]:
        return self.graph.locations_by_prefix(prefix)

    def location_nodes(self, name: str) -> list[dict]:
        g = self.graph
        return [
            {"id": vid, "lon": g.lon(vid), "lat": g.lat(vid), "name": name}
            for vid in g.location_vertices(name)
        ]
