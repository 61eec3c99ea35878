# domain/entities/tiles.py
from collections.abc import Mapping
from dataclasses import dataclass, field


def tile_name(depth: int, x: int, y: int) -> str:
    return f"d{depth}_x{x}_y{y}.png"


def _half(a: float, b: float) -> float:
    return (a + b) / 2


@dataclass(frozen=True)
class BoundingBox:
    ul_lon: float
    ul_lat: float
    lr_lon: float
    lr_lat: float

    @classmethod
    def from_params(cls, params: Mapping[str, float]) -> "BoundingBox":
        return cls(
            float(params["ullon"]),
            float(params["ullat"]),
            float(params["lrlon"]),
            float(params["lrlat"]),
        )

    @property
    def center(self) -> tuple[float, float]:
        return _half(self.ul_lon, self.lr_lon), _half(self.ul_lat, self.lr_lat)

    @property
    def is_degenerate(self) -> bool:
        return not (self.ul_lon < self.lr_lon and self.ul_lat > self.lr_lat)

    def overlaps(self, other: "BoundingBox") -> bool:
        return not (
            self.ul_lon > other.lr_lon
            or self.lr_lon < other.ul_lon
            or self.lr_lat > other.ul_lat
            or self.ul_lat < other.lr_lat
        )

    def contains_box(self, other: "BoundingBox") -> bool:
        return (
            self.ul_lon <= other.ul_lon
            and self.lr_lon >= other.lr_lon
            and self.ul_lat >= other.ul_lat
            and self.lr_lat <= other.lr_lat
        )


@dataclass(frozen=True)
class Tile:
    """One quadtree cell. Depth 0 is the whole map."""

    x: int
    y: int
    depth: int
    box: BoundingBox
    lon_dpp: float

    @property
    def name(self) -> str:
        return tile_name(self.depth, self.x, self.y)

    def in_resolution(self, query_lon_dpp: float, max_depth: int) -> bool:
        return self.lon_dpp <= query_lon_dpp or self.depth >= max_depth

    def contains(self, lon: float, lat: float) -> bool:
        # strict: a point on a tile edge belongs to neither neighbour
        b = self.box
        return b.ul_lon < lon < b.lr_lon and b.lr_lat < lat < b.ul_lat

    def children(self) -> tuple["Tile", "Tile", "Tile", "Tile"]:
        """NW, NE, SE, SW."""
        b = self.box
        mid_lon, mid_lat = b.center
        d, dpp = self.depth + 1, self.lon_dpp / 2
        x, y = 2 * self.x, 2 * self.y
        return (
            Tile(x, y, d, BoundingBox(b.ul_lon, b.ul_lat, mid_lon, mid_lat), dpp),
            Tile(x + 1, y, d, BoundingBox(mid_lon, b.ul_lat, b.lr_lon, mid_lat), dpp),
            Tile(x + 1, y + 1, d, BoundingBox(mid_lon, mid_lat, b.lr_lon, b.lr_lat), dpp),
            Tile(x, y + 1, d, BoundingBox(b.ul_lon, mid_lat, mid_lon, b.lr_lat), dpp),
        )

    def child_containing(self, lon: float, lat: float) -> "Tile | None":
        for child in self.children():
            if child.contains(lon, lat):
                return child
        return None


@dataclass
class RasterResult:
    render_grid: list[list[str]]
    box: BoundingBox
    depth: int
    query_success: bool
    reason: str | None = field(default=None, compare=False)

    @classmethod
    def failed(cls, query: BoundingBox, reason: str) -> "RasterResult":
        return cls([], query, 0, False, reason)

    def to_dict(self) -> dict:
        return {
            "render_grid": self.render_grid,
            "raster_ul_lon": self.box.ul_lon,
            "raster_ul_lat": self.box.ul_lat,
            "raster_lr_lon": self.box.lr_lon,
            "raster_lr_lat": self.box.lr_lat,
            "depth": self.depth,
            "query_success": self.query_success,
        }
