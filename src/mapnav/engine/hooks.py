# engine/hooks.py
from typing import Protocol


class QueryHooks(Protocol):
    def search_start(self, *, start: int, dest: int): ...
    def node_expanded(self, *, vertex: int, cost: float, frontier: int): ...
    def search_end(self, *, found: bool, expanded: int, path_len: int, wall_ms: float): ...
    def raster_end(self, *, success: bool, depth: int, reason: str | None, tiles: int): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def node_expanded(self, **_):
        pass

    def search_end(self, **_):
        pass

    def raster_end(self, **_):
        pass

    def error(self, **_):
        pass
