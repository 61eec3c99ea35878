import json
import logging

from mapnav.domain.raster.rasterer import Rasterer
from mapnav.domain.entities.tiles import BoundingBox
from mapnav.domain.routing.pathfinder import astar
from mapnav.io.query_logging import QueryLogging, _default_json_logger
from mapnav.synth.networks import grid_network, two_islands
from mapnav.synth.rng import RNGRegistry


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


def _logger(name):
    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    log.propagate = False
    h = ListHandler()
    log.handlers = [h]
    return log, h


def test_search_lifecycle_is_logged():
    log, h = _logger("mapnav.test.search")
    hooks = QueryLogging(run_id="r1", logger=log, debug=True, sample_every=1)
    g = grid_network(4, 4, rng=RNGRegistry(1).stream("grid"))
    astar(g, 0, 15, hooks=hooks)
    msgs = [r.getMessage() for r in h.records]
    assert msgs[0] == "search_start"
    assert msgs[-1] == "search_end"
    assert "expand" in msgs
    assert all(r.extra["run_id"] == "r1" for r in h.records)
    assert h.records[0].extra["start"] == 0 and h.records[0].extra["dest"] == 15


def test_expansions_are_quiet_without_debug():
    log, h = _logger("mapnav.test.quiet")
    hooks = QueryLogging(logger=log)
    g = grid_network(4, 4, rng=RNGRegistry(1).stream("grid"))
    astar(g, 0, 15, hooks=hooks)
    assert [r.getMessage() for r in h.records] == ["search_start", "search_end"]


def test_no_path_is_a_warning():
    log, h = _logger("mapnav.test.nopath")
    g, west, east = two_islands(2, 2, rng=RNGRegistry(2).stream("islands"))
    astar(g, west[0], east[0], hooks=QueryLogging(logger=log))
    last = h.records[-1]
    assert last.getMessage() == "no_path"
    assert last.levelno == logging.WARNING


def test_raster_failures_carry_reason():
    log, h = _logger("mapnav.test.raster")
    r = Rasterer(hooks=QueryLogging(logger=log))
    r.raster(BoundingBox(-100.0, 40.0, -99.0, 39.0), 500)
    assert h.records[-1].getMessage() == "raster_failed"
    assert h.records[-1].extra["reason"] == "out_of_bounds"


def test_json_formatter():
    log = _default_json_logger(name="mapnav.test.json", level="INFO")
    fmt = log.handlers[0].formatter
    rec = log.makeRecord(log.name, logging.INFO, __file__, 1, "raster", (), None, extra={"extra": {"depth": 3}})
    payload = json.loads(fmt.format(rec))
    assert payload == {"level": "INFO", "msg": "raster", "logger": "mapnav.test.json", "depth": 3}
