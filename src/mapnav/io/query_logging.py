# io/query_logging.py
import json
import logging
import sys

from mapnav.engine.hooks import NoopHooks


def _default_json_logger(name="mapnav", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class QueryLogging(NoopHooks):
    """
    Structured JSON logs for route searches and raster queries.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._expanded = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # ---------------- routing ------------------------

    def search_start(self, *, start: int, dest: int):
        self._expanded = 0
        self._emit("INFO", "search_start", start=start, dest=dest)

    def node_expanded(self, *, vertex: int, cost: float, frontier: int):
        self._expanded += 1
        if self.debug and (self._expanded % self.sample_every) == 0:
            self._emit("DEBUG", "expand", vertex=vertex, cost=cost, frontier=frontier)

    def search_end(self, *, found: bool, expanded: int, path_len: int, wall_ms: float):
        self._emit(
            "INFO" if found else "WARNING",
            "search_end" if found else "no_path",
            expanded=expanded,
            path_len=path_len,
            wall_ms=wall_ms,
        )

    # ---------------- raster -------------------------

    def raster_end(self, *, success: bool, depth: int, reason: str | None, tiles: int):
        if success:
            self._emit("INFO", "raster", depth=depth, tiles=tiles)
        else:
            self._emit("WARNING", "raster_failed", reason=reason)

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "query_error", reason=reason, **kw)
