# domain/raster/rasterer.py
from collections.abc import Mapping

from mapnav.config.models import MapBoundsModel
from mapnav.domain.entities.tiles import BoundingBox, RasterResult, Tile, tile_name
from mapnav.engine.hooks import NoopHooks, QueryHooks

MAX_ZOOM_STEPS = 100


class Rasterer:
    """
    Picks the grid of map tiles covering a query box at the coarsest depth
    whose resolution (lon degrees per pixel) is at least as fine as the
    viewport's. Tiles are addressed, never rendered.
    """

    def __init__(self, bounds: MapBoundsModel | None = None, *, hooks: QueryHooks | None = None):
        self.bounds = bounds or MapBoundsModel()
        self.hooks = hooks or NoopHooks()
        b = self.bounds
        self.root_box = BoundingBox(b.ul_lon, b.ul_lat, b.lr_lon, b.lr_lat)
        self.root = Tile(0, 0, 0, self.root_box, b.root_lon_dpp)

    # ---------------- zoom ------------------------------

    def zoom(self, query: BoundingBox, query_lon_dpp: float) -> Tile | None:
        """Descend towards the query center until resolution is met. None on divergence."""
        lon, lat = query.center
        tile, steps = self.root, 0
        while not (tile.in_resolution(query_lon_dpp, self.bounds.max_depth) and tile.contains(lon, lat)):
            steps += 1
            if steps > MAX_ZOOM_STEPS:
                return None
            if tile.depth >= self.bounds.max_depth:
                break
            child = tile.child_containing(lon, lat)
            if child is None:
                # center on a tile edge (or off the map): settle for this tile
                break
            tile = child
        return tile

    # ---------------- edge walks ------------------------
    # Each walk starts at a root edge and steps one tile at a time while the
    # tile edge is still outside the query edge; the last such edge is kept.

    def _walk_left(self, n: int, span: float, query_lon: float) -> tuple[int, float]:
        x1, covered, edge = 0, self.root_box.ul_lon, self.root_box.ul_lon
        for i in range(n):
            if not edge < query_lon:
                break
            x1, covered = i, edge
            edge += span
        return x1, covered

    def _walk_right(self, n: int, span: float, query_lon: float) -> tuple[int, float]:
        x2, covered, edge = n - 1, self.root_box.lr_lon, self.root_box.lr_lon
        for i in range(n - 1, -1, -1):
            if not edge > query_lon:
                break
            x2, covered = i, edge
            edge -= span
        return x2, covered

    def _walk_top(self, n: int, span: float, query_lat: float) -> tuple[int, float]:
        y1, covered, edge = 0, self.root_box.ul_lat, self.root_box.ul_lat
        for i in range(n):
            if not edge > query_lat:
                break
            y1, covered = i, edge
            edge -= span
        return y1, covered

    def _walk_bottom(self, n: int, span: float, query_lat: float) -> tuple[int, float]:
        y2, covered, edge = n - 1, self.root_box.lr_lat, self.root_box.lr_lat
        for i in range(n - 1, -1, -1):
            if not edge < query_lat:
                break
            y2, covered = i, edge
            edge += span
        return y2, covered

    # ---------------- query -----------------------------

    def _fail(self, query: BoundingBox, reason: str) -> RasterResult:
        self.hooks.raster_end(success=False, depth=0, reason=reason, tiles=0)
        return RasterResult.failed(query, reason)

    def raster(self, query: BoundingBox, width_px: float) -> RasterResult:
        if width_px <= 0 or query.is_degenerate:
            return self._fail(query, "invalid_query")
        if not query.overlaps(self.root_box):
            return self._fail(query, "out_of_bounds")

        query_lon_dpp = (query.lr_lon - query.ul_lon) / width_px
        tile = self.zoom(query, query_lon_dpp)
        if tile is None:
            return self._fail(query, "zoom_divergence")

        depth = tile.depth
        n = 2**depth
        lon_span = (self.root_box.lr_lon - self.root_box.ul_lon) / n
        lat_span = (self.root_box.ul_lat - self.root_box.lr_lat) / n

        x1, ul_lon = self._walk_left(n, lon_span, query.ul_lon)
        x2, lr_lon = self._walk_right(n, lon_span, query.lr_lon)
        y1, ul_lat = self._walk_top(n, lat_span, query.ul_lat)
        y2, lr_lat = self._walk_bottom(n, lat_span, query.lr_lat)

        grid = [[tile_name(depth, x, y) for x in range(x1, x2 + 1)] for y in range(y1, y2 + 1)]
        self.hooks.raster_end(success=True, depth=depth, reason=None, tiles=len(grid) * (x2 - x1 + 1))
        return RasterResult(grid, BoundingBox(ul_lon, ul_lat, lr_lon, lr_lat), depth, True)

    def raster_params(self, params: Mapping[str, float]) -> dict:
        """Presentation-layer entry: `ullon, ullat, lrlon, lrlat, w` in, result dict out."""
        return self.raster(BoundingBox.from_params(params), float(params["w"])).to_dict()
