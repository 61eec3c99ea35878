# synth/rng.py
from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Named numpy Generators derived from one master seed, so a synthetic
    network built from stream "grid" is the same no matter what else drew
    random numbers first.
    Derivation path: [master_seed, scenario, worker, stream, *parts]
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0, worker: int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _tag(str(scenario))
        self.worker = _u32(worker)

    @cache
    def _generator(self, key: tuple[int, ...]) -> np.random.Generator:
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, self.worker, *key])
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self._generator((_tag(name),))

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        key = [_tag(name)]
        for p in parts:
            key.append(_u32(int(p)) if isinstance(p, (int, np.integer)) else _tag(repr(p)))
        return self._generator(tuple(key))
