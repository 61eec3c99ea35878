import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

# Berkeley extent served by the default tile set
ROOT_ULLON = -122.2998046875
ROOT_ULLAT = 37.892195547244356
ROOT_LRLON = -122.2119140625
ROOT_LRLAT = 37.82280243352756


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1000


# ----------------- RASTER ---------------------


class MapBoundsModel(BaseModel):
    """Fixed root extent of the tile quadtree plus tile geometry."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    ul_lon: float = ROOT_ULLON
    ul_lat: float = ROOT_ULLAT
    lr_lon: float = ROOT_LRLON
    lr_lat: float = ROOT_LRLAT
    tile_size_px: int = 256
    max_depth: int = 7

    @field_validator("tile_size_px")
    @classmethod
    def _positive(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("max_depth")
    @classmethod
    def _nonneg(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @model_validator(mode="after")
    def _check_extent(self):
        if not self.ul_lon < self.lr_lon:
            raise ValueError("ul_lon must be west of lr_lon")
        if not self.ul_lat > self.lr_lat:
            raise ValueError("ul_lat must be north of lr_lat")
        return self

    @property
    def root_lon_dpp(self) -> float:
        return (self.lr_lon - self.ul_lon) / self.tile_size_px

    def lon_dpp(self, depth: int) -> float:
        return self.root_lon_dpp / (2**depth)


# ----------------- GRAPH ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["json", "pickle"] = "json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_expansions: int | None = None  # None => search until the frontier empties
    drop_isolated: bool = True

    @field_validator("max_expansions")
    @classmethod
    def _positive_budget(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("max_expansions must be > 0 or null")
        return v


# ------------------------------------------------------------------


class BackendModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "mapnav"
    run_id: str = "local"
    bounds: MapBoundsModel = Field(default_factory=MapBoundsModel)
    graph: GraphByPath | None = None
    log: LogModel = LogModel()
    routing: RoutingModel = Field(default_factory=RoutingModel)
