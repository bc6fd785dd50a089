"""Run metrics for generation: durations, counters and structure sizes."""

import time
from contextlib import contextmanager
from typing import Any, Dict, List

import numpy as np


class MetricsCollector:
    """
    Timers, counters and observed values for a sequence of generation runs.

    Timers keep the last duration under `timers` and every duration under
    `history`, so repeated runs of the same stage can be summarized.
    """

    def __init__(self):
        self.counters: Dict[str, int] = {}
        self.timers: Dict[str, float] = {}
        self.history: Dict[str, List[float]] = {}
        self.observations: Dict[str, List[float]] = {}
        self._started: Dict[str, float] = {}

    def increment_counter(self, name: str, delta: int = 1):
        self.counters[name] = self.counters.get(name, 0) + delta

    def observe(self, name: str, value: float):
        """Record a value such as n_sites or n_bonds of a generated structure."""
        self.observations.setdefault(name, []).append(float(value))

    def start_timer(self, name: str):
        self._started[name] = time.perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop a timer and record its duration; 0.0 if it was never started."""
        started = self._started.pop(name, None)
        if started is None:
            return 0.0
        duration = time.perf_counter() - started
        self.timers[name] = duration
        self.history.setdefault(name, []).append(duration)
        return duration

    @contextmanager
    def timer(self, name: str):
        self.start_timer(name)
        try:
            yield
        finally:
            self.stop_timer(name)

    def get_all_metrics(self) -> Dict[str, Any]:
        return {
            "counters": dict(self.counters),
            "timers": dict(self.timers),
            "observations": {k: list(v) for k, v in self.observations.items()},
        }

    def reset(self):
        self.counters.clear()
        self.timers.clear()
        self.history.clear()
        self.observations.clear()
        self._started.clear()

    def summary_stats(self) -> Dict[str, Any]:
        """Totals plus mean/max per timer and per observed quantity."""
        def describe(values: List[float]) -> Dict[str, float]:
            arr = np.asarray(values)
            return {"count": len(arr), "mean": float(arr.mean()), "max": float(arr.max())}

        return {
            "total_counters": len(self.counters),
            "total_timers": len(self.timers),
            "counter_sum": sum(self.counters.values()),
            "timer_total": sum(sum(v) for v in self.history.values()),
            "durations": {k: describe(v) for k, v in self.history.items()},
            "sizes": {k: describe(v) for k, v in self.observations.items()},
        }
