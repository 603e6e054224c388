# benchmark.py
import os
import json
import time
import threading
from collections import deque, Counter
import numpy as np
from config import (CacheConfig, InvalidConfiguration, PATTERNS, check_pattern, check_positive,
                    resolve_dataset_size)
from patterns import DEFAULT_SEED
from simulator import CacheSimulator, LEVELS


class BenchmarkRunner:
    """
    Runs every configured access pattern twice (unoptimized and optimized),
    each on its own CacheSimulator, and summarises the outcome.
    """

    def __init__(self, cfg):
        self.cfg = cfg
        bench_cfg = cfg.get("benchmark", {})
        self.cache_config = CacheConfig.from_dict(cfg.get("cache", {}))
        self.dataset_size = resolve_dataset_size(bench_cfg.get("dataset_size", "medium"))
        self.num_requests = check_positive("num_requests", bench_cfg.get("num_requests", 1000))
        self.history_size = check_positive("history_size", bench_cfg.get("history_size", 101))
        self.seed = bench_cfg.get("seed", DEFAULT_SEED)
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise InvalidConfiguration(f"seed must be an integer, got {self.seed!r}")
        self.patterns = [check_pattern(p) for p in bench_cfg.get("patterns", PATTERNS)]
        if not self.patterns:
            raise InvalidConfiguration("patterns must name at least one access pattern")
        self.results_lock = threading.Lock()
        self.runs = {}
        self.errors = []

    def _run_key(self, pattern, optimized):
        return f"{pattern}/{'optimized' if optimized else 'baseline'}"

    def _worker(self, pattern, optimized):
        try:
            self._simulate(pattern, optimized)
        except Exception as exc:
            with self.results_lock:
                self.errors.append(exc)

    def _simulate(self, pattern, optimized):
        # each worker owns its simulator; nothing is shared but the results dict
        sim = CacheSimulator(self.cache_config, self.dataset_size, seed=self.seed)
        latencies = np.empty(self.num_requests, dtype=np.int64)
        hit_levels = Counter()
        history = deque(maxlen=self.history_size)
        for i in range(self.num_requests):
            result = sim.access(pattern, optimized)
            latencies[i] = result.latency
            hit_levels[result.hit_level] += 1
            history.append(sim.get_metrics())

        run = {
            "pattern": pattern,
            "optimized": optimized,
            "metrics": sim.get_metrics(),
            "latencies": latencies,
            "hit_levels": {level: hit_levels[level] for level in LEVELS},
            "history": list(history),
            "occupancy": {name: level.stats()["used_blocks"] for name, level in sim.levels()},
        }
        with self.results_lock:
            self.runs[self._run_key(pattern, optimized)] = run

    def run(self):
        threads = []
        start = time.time()
        for pattern in self.patterns:
            for optimized in (False, True):
                t = threading.Thread(target=self._worker, args=(pattern, optimized))
                t.start()
                threads.append(t)
        for t in threads:
            t.join()
        end = time.time()
        if self.errors:
            raise self.errors[0]

        summary = {
            "cache": self.cache_config.to_dict(),
            "dataset_size": self.dataset_size,
            "num_requests": self.num_requests,
            "duration_s": end - start,
            "patterns": {},
        }
        for pattern in self.patterns:
            baseline = self._summarize(self.runs[self._run_key(pattern, False)])
            optimized = self._summarize(self.runs[self._run_key(pattern, True)])
            speedup = (baseline["avg_latency_cycles"] / optimized["avg_latency_cycles"]
                       if optimized["avg_latency_cycles"] else 0)
            summary["patterns"][pattern] = {
                "baseline": baseline,
                "optimized": optimized,
                "speedup": speedup,
            }
        return summary, self.runs

    @staticmethod
    def _summarize(run):
        latencies = run["latencies"]
        return {
            "avg_latency_cycles": float(np.mean(latencies)),
            "p95_latency_cycles": float(np.percentile(latencies, 95)),
            "total_cycles": int(np.sum(latencies)),
            "hit_levels": dict(run["hit_levels"]),
            "occupancy": dict(run["occupancy"]),
            "metrics": dict(run["metrics"]),
        }

    def save_results(self, summary, out_cfg):
        results_dir = out_cfg.get("results_dir", "results")
        os.makedirs(results_dir, exist_ok=True)
        path = os.path.join(results_dir, out_cfg.get("results_file", "results.json"))
        with open(path, "w") as f:
            json.dump(summary, f, indent=2)
        return path
