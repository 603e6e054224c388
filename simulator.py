# simulator.py
from collections import namedtuple

from cache import LRUCache
from config import CACHE_LATENCIES, DEFAULT_CONFIG, CacheConfig, InvalidConfiguration
from patterns import AccessPatternGenerator, DEFAULT_SEED

AccessResult = namedtuple("AccessResult", ["block_id", "hit_level", "is_hit", "latency"])

LEVELS = ("L1", "L2", "L3", "RAM")

COUNTERS = ("total_accesses", "l1_hits", "l1_misses", "l2_hits", "l2_misses",
            "l3_hits", "l3_misses", "ram_accesses")


def empty_metrics():
    metrics = dict.fromkeys(COUNTERS, 0)
    metrics["miss_rate"] = 0.0
    metrics["cpi"] = 1.0
    return metrics


class CacheSimulator:
    """
    Three-level inclusive LRU hierarchy in front of main memory.

    Each call to access() is one complete, synchronous step: the block id is
    drawn from the pattern generator, L1, L2 and L3 are probed in order, and
    every level faster than the one that served the request gets a copy of
    the block. A full miss fills all three levels.
    """

    def __init__(self, config: CacheConfig = DEFAULT_CONFIG, dataset_size=256, seed=DEFAULT_SEED):
        if not isinstance(config, CacheConfig):
            raise InvalidConfiguration("config needs to be a CacheConfig object")
        config.validate()
        self._config = config
        self._seed = seed
        self.l1 = LRUCache(config.l1_size)
        self.l2 = LRUCache(config.l2_size)
        self.l3 = LRUCache(config.l3_size)
        self.pattern_generator = AccessPatternGenerator(dataset_size, seed=seed)
        self.metrics = empty_metrics()

    @property
    def config(self):
        return self._config

    @property
    def dataset_size(self):
        return self.pattern_generator.dataset_size

    def _result(self, block_id, level):
        return AccessResult(block_id, level, level != "RAM", CACHE_LATENCIES[level])

    def access(self, pattern, optimized=False):
        """Perform one memory access and return its AccessResult."""
        block_id = self.pattern_generator.next_access(pattern, optimized)
        m = self.metrics
        m["total_accesses"] += 1

        if self.l1.access(block_id):
            m["l1_hits"] += 1
            return self._result(block_id, "L1")
        m["l1_misses"] += 1

        if self.l2.access(block_id):
            m["l2_hits"] += 1
            self.l1.insert(block_id)
            return self._result(block_id, "L2")
        m["l2_misses"] += 1

        if self.l3.access(block_id):
            m["l3_hits"] += 1
            self.l1.insert(block_id)
            self.l2.insert(block_id)
            return self._result(block_id, "L3")
        m["l3_misses"] += 1

        # Cold miss: fetch from RAM and fill the whole hierarchy
        m["ram_accesses"] += 1
        self.l1.insert(block_id)
        self.l2.insert(block_id)
        self.l3.insert(block_id)
        self._update_derived_metrics()
        return self._result(block_id, "RAM")

    def _update_derived_metrics(self):
        m = self.metrics
        total = m["total_accesses"]
        # "miss rate" here is the L1 miss rate
        m["miss_rate"] = 100.0 * m["l1_misses"] / total if total else 0.0
        denom = max(1, total)
        m["cpi"] = (1.0
                    + 0.1 * (m["l2_misses"] / denom)
                    + 0.3 * (m["l3_misses"] / denom)
                    + 1.5 * (m["ram_accesses"] / denom))

    def get_metrics(self):
        self._update_derived_metrics()
        return dict(self.metrics)

    def get_cache_state(self):
        """Block ids per level, most recently used first."""
        return {
            "l1": self.l1.get_blocks(),
            "l2": self.l2.get_blocks(),
            "l3": self.l3.get_blocks(),
        }

    def reset(self):
        """Empty every level, rewind the pattern generator and zero the metrics."""
        for level in (self.l1, self.l2, self.l3):
            level.clear()
        self.pattern_generator.reset(self._seed)
        self.metrics = empty_metrics()

    def dispose(self):
        """Release cached state. The instance may be reused afterwards, as after reset()."""
        self.reset()

    def update_config(self, l1_size=None, l2_size=None, l3_size=None, line_size=None):
        """
        Resize any subset of the levels. Shrinking a level evicts its LRU
        entries. Metrics are kept.
        """
        new_config = self._config.merged(l1_size=l1_size, l2_size=l2_size,
                                         l3_size=l3_size, line_size=line_size)
        self.l1.set_capacity(new_config.l1_size)
        self.l2.set_capacity(new_config.l2_size)
        self.l3.set_capacity(new_config.l3_size)
        self._config = new_config

    def set_dataset_size(self, size):
        self.pattern_generator.set_dataset_size(size)

    def levels(self):
        """Return (name, level) pairs for the three cache levels."""
        return [("L1", self.l1), ("L2", self.l2), ("L3", self.l3)]

    def __repr__(self):
        return "CacheSimulator({!r}, dataset_size={!r}, seed={!r})".format(
            self._config, self.dataset_size, self._seed)
