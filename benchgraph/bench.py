"""
Minimal micro-benchmark engine.

A Bench runs named callables for a number of epochs and keeps one
Result per call to run(). Results are what render() feeds into the
double-brace templates.
"""

import copy
import time
import numpy as np
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field


# Measures a Result can report, keyed by the names templates use.
MEASURES = ("elapsed", "iterations")


@dataclass
class BenchConfig:
    """Configuration shared by every run of a Bench"""
    title: str = "benchmark"
    name: str = "noname"
    unit: str = "op"
    batch: float = 1.0
    epochs: int = 11
    epoch_iterations: int = 0
    min_epoch_iterations: int = 1
    min_epoch_time: float = 0.001
    max_epoch_time: float = 0.1
    warmup: int = 0
    relative: bool = False
    context: Dict[str, str] = field(default_factory=dict)


@dataclass
class Measurement:
    """One timed epoch"""
    elapsed_seconds: float
    iterations: int


class Result:
    """Measurements of one named benchmark"""

    def __init__(self, config: BenchConfig, measurements: Optional[List[Measurement]] = None):
        self.config = copy.deepcopy(config)
        self.measurements: List[Measurement] = list(measurements or [])

    @classmethod
    def from_samples(cls, name: str, samples, config: Optional[BenchConfig] = None) -> "Result":
        """Build a result from per-unit elapsed times measured elsewhere"""
        config = copy.deepcopy(config) if config is not None else BenchConfig()
        config.name = name
        measurements = [Measurement(float(s) * config.batch, 1) for s in samples]
        config.epochs = len(measurements)
        return cls(config, measurements)

    @property
    def name(self) -> str:
        return self.config.name

    def __len__(self) -> int:
        return len(self.measurements)

    def has(self, measure: str) -> bool:
        return measure in MEASURES

    def get(self, idx: int, measure: str) -> float:
        """Value of `measure` for epoch `idx`"""
        m = self.measurements[idx]
        if measure == "elapsed":
            return m.elapsed_seconds / (m.iterations * self.config.batch)
        if measure == "iterations":
            return float(m.iterations)
        raise KeyError(measure)

    def values(self, measure: str) -> np.ndarray:
        if not self.has(measure):
            raise KeyError(measure)
        return np.array([self.get(i, measure) for i in range(len(self))], dtype=np.float64)

    def median(self, measure: str) -> float:
        return float(np.median(self.values(measure))) if len(self) else 0.0

    def average(self, measure: str) -> float:
        return float(np.mean(self.values(measure))) if len(self) else 0.0

    def minimum(self, measure: str) -> float:
        return float(np.min(self.values(measure))) if len(self) else 0.0

    def maximum(self, measure: str) -> float:
        return float(np.max(self.values(measure))) if len(self) else 0.0

    def sum(self, measure: str) -> float:
        return float(np.sum(self.values(measure)))

    def sum_product(self, m1: str, m2: str) -> float:
        return float(np.sum(self.values(m1) * self.values(m2)))

    def median_absolute_percent_error(self, measure: str) -> float:
        """Median of |x - median| / x over all epochs"""
        data = self.values(measure)
        if data.size == 0:
            return 0.0
        med = np.median(data)
        with np.errstate(divide="ignore", invalid="ignore"):
            errors = np.abs((data - med) / data)
        return float(np.median(errors))


class Bench:
    """Runs benchmarks and collects their results"""

    def __init__(self, config: Optional[BenchConfig] = None):
        self.config = config if config is not None else BenchConfig()
        self._results: List[Result] = []
        self._timer = time.perf_counter

    def _set(self, **kwargs) -> "Bench":
        for key, value in kwargs.items():
            setattr(self.config, key, value)
        return self

    def title(self, title: str) -> "Bench":
        return self._set(title=title)

    def name(self, name: str) -> "Bench":
        return self._set(name=name)

    def unit(self, unit: str) -> "Bench":
        return self._set(unit=unit)

    def batch(self, batch: float) -> "Bench":
        return self._set(batch=float(batch))

    def epochs(self, epochs: int) -> "Bench":
        return self._set(epochs=int(epochs))

    def epoch_iterations(self, iterations: int) -> "Bench":
        return self._set(epoch_iterations=int(iterations))

    def min_epoch_iterations(self, iterations: int) -> "Bench":
        return self._set(min_epoch_iterations=max(1, int(iterations)))

    def min_epoch_time(self, seconds: float) -> "Bench":
        return self._set(min_epoch_time=float(seconds))

    def max_epoch_time(self, seconds: float) -> "Bench":
        return self._set(max_epoch_time=float(seconds))

    def warmup(self, iterations: int) -> "Bench":
        return self._set(warmup=int(iterations))

    def relative(self, enabled: bool) -> "Bench":
        return self._set(relative=bool(enabled))

    def context(self, key: str, value: Any) -> "Bench":
        self.config.context[key] = str(value)
        return self

    def _time(self, fn: Callable[[], Any], iterations: int) -> float:
        start = self._timer()
        for _ in range(iterations):
            fn()
        return self._timer() - start

    def _calibrate(self, fn: Callable[[], Any]) -> int:
        """Find an iteration count whose epoch lasts at least min_epoch_time"""
        iterations = self.config.min_epoch_iterations
        while True:
            elapsed = self._time(fn, iterations)
            if elapsed >= self.config.min_epoch_time:
                return iterations
            if elapsed * 2 > self.config.max_epoch_time:
                return iterations
            iterations *= 2

    def run(self, name: str, fn: Callable[[], Any]) -> "Bench":
        """Benchmark `fn` under `name` and store its result"""
        if not callable(fn):
            raise ValueError(f"benchmark '{name}' needs a callable")
        if self.config.epochs < 1:
            raise ValueError("a benchmark needs at least one epoch")

        for _ in range(self.config.warmup):
            fn()

        iterations = self.config.epoch_iterations or self._calibrate(fn)

        measurements = []
        for _ in range(self.config.epochs):
            measurements.append(Measurement(self._time(fn, iterations), iterations))

        config = copy.deepcopy(self.config)
        config.name = name
        self._results.append(Result(config, measurements))
        return self

    def add_result(self, result: Result) -> "Bench":
        """Add a result measured outside of run()"""
        self._results.append(result)
        return self

    def results(self) -> List[Result]:
        return self._results
