# domain/routing/pathfinder.py
import heapq
import time
from dataclasses import dataclass

from mapnav.app.protocols import GraphView
from mapnav.engine.hooks import NoopHooks, QueryHooks


class SearchBudgetExceeded(RuntimeError):
    """Caller-imposed expansion budget ran out before the search finished."""


@dataclass(frozen=True)
class SearchNode:
    vertex_id: int
    origin_id: int
    destination_id: int
    cost_so_far: float  # miles from origin along the tree
    estimate_to_goal: float  # straight-line miles to destination
    parent: int | None  # arena handle of the node that produced this one

    @property
    def priority(self) -> float:
        return self.cost_so_far + self.estimate_to_goal

    @property
    def arrived(self) -> bool:
        return self.vertex_id == self.destination_id


class SearchArena:
    """Owns every SearchNode of one query; nodes refer to parents by handle."""

    def __init__(self):
        self._nodes: list[SearchNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, handle: int) -> SearchNode:
        return self._nodes[handle]

    def add(self, node: SearchNode) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def unwind(self, handle: int) -> list[int]:
        """Vertex ids from the root to `handle`."""
        out = []
        h: int | None = handle
        while h is not None:
            node = self._nodes[h]
            out.append(node.vertex_id)
            h = node.parent
        out.reverse()
        return out


def astar(
    graph: GraphView,
    start: int,
    dest: int,
    *,
    hooks: QueryHooks | None = None,
    max_expansions: int | None = None,
) -> list[int]:
    """
    A* between two vertex ids. The heuristic is the great-circle distance to
    `dest`, which never exceeds the road distance. Returns [] if `dest` is
    unreachable.
    """
    hooks = hooks or NoopHooks()
    t0 = time.perf_counter()
    hooks.search_start(start=start, dest=dest)

    arena = SearchArena()
    root = arena.add(SearchNode(start, start, dest, 0.0, graph.distance(start, dest), None))
    # (priority, handle): handles grow monotonically so ties pop in insertion order
    frontier: list[tuple[float, int]] = [(arena[root].priority, root)]
    visited: set[int] = set()
    expanded = 0

    while frontier:
        _, h = heapq.heappop(frontier)
        node = arena[h]
        if node.vertex_id in visited:
            continue
        visited.add(node.vertex_id)
        expanded += 1
        hooks.node_expanded(vertex=node.vertex_id, cost=node.cost_so_far, frontier=len(frontier))

        if node.arrived:
            path = arena.unwind(h)
            hooks.search_end(
                found=True,
                expanded=expanded,
                path_len=len(path),
                wall_ms=(time.perf_counter() - t0) * 1000,
            )
            return path

        if max_expansions is not None and expanded >= max_expansions:
            hooks.error(reason="budget_exceeded", expanded=expanded, start=start, dest=dest)
            raise SearchBudgetExceeded(f"gave up after {expanded} expansions")

        back = arena[node.parent].vertex_id if node.parent is not None else None
        for nbr in graph.adjacent(node.vertex_id):
            if nbr in visited or nbr == back:
                continue
            child = SearchNode(
                nbr,
                start,
                dest,
                node.cost_so_far + graph.distance(node.vertex_id, nbr),
                graph.distance(nbr, dest),
                h,
            )
            c = arena.add(child)
            heapq.heappush(frontier, (child.priority, c))

    hooks.search_end(
        found=False, expanded=expanded, path_len=0, wall_ms=(time.perf_counter() - t0) * 1000
    )
    return []


def shortest_path(
    graph: GraphView,
    start_lon: float,
    start_lat: float,
    dest_lon: float,
    dest_lat: float,
    *,
    hooks: QueryHooks | None = None,
    max_expansions: int | None = None,
) -> list[int]:
    """Shortest path between the vertices nearest to two lon/lat points."""
    start = graph.nearest_vertex(start_lon, start_lat)
    dest = graph.nearest_vertex(dest_lon, dest_lat)
    return astar(graph, start, dest, hooks=hooks, max_expansions=max_expansions)
