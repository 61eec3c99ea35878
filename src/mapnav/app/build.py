# mapnav/app/build.py
import os
from collections.abc import Mapping

from mapnav.app.backend import MapBackend
from mapnav.config.models import BackendModel
from mapnav.domain.entities.graph import GraphBuilder, RoadGraph
from mapnav.domain.raster.rasterer import Rasterer
from mapnav.engine.hooks import NoopHooks
from mapnav.io.query_logging import QueryLogging
from mapnav.runtime.resources import load_graph_from_path


def _resolve_graph(model: BackendModel, graph: RoadGraph | None) -> RoadGraph:
    if graph is not None:
        return graph
    ref = model.graph
    if ref is None:
        return GraphBuilder().freeze()
    if not os.path.exists(ref.file):
        if ref.must_exist:
            raise FileNotFoundError(ref.file)
        return GraphBuilder().freeze()
    return load_graph_from_path(ref.file, ref.fmt, model.routing.drop_isolated)


def build(
    cfg: BackendModel | Mapping | None = None,
    *,
    graph: RoadGraph | None = None,
    use_logging: bool = True,
) -> MapBackend:
    # 0) Validate config
    if cfg is None:
        model = BackendModel()
    else:
        model = cfg if isinstance(cfg, BackendModel) else BackendModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Graph (an explicit graph wins over the configured file)
    g = _resolve_graph(model, graph)

    # 3) Engines
    rasterer = Rasterer(model.bounds, hooks=hooks)
    return MapBackend(g, rasterer, hooks=hooks, max_expansions=model.routing.max_expansions)
