"""Time the four stochastic-universal-sampling entry points.

Default workload: 500 samples with weights 1..500, 1200 picks
for the allocating variants and one full-length resample for the in-place ones.
Timings are best-of-repeats per call, printed in microseconds.
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
import sys
from typing import Callable, Dict, List

import numpy as np

# Ensure src/ is on sys.path for direct script execution.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sus.resampling import systematic_indices
from sus.selection import (
    random_choice_f32,
    random_choice_f64,
    random_choice_in_place_f32,
    random_choice_in_place_f64,
)
from sus.uniform import GeneratorSource


@dataclass(frozen=True)
class BenchmarkResult:
    """Best and median wall time of one entry point."""

    name: str
    best_us: float
    median_us: float


def _time_call(fn: Callable[[], object], repeats: int) -> List[float]:
    timings: List[float] = []
    for _ in range(repeats):
        start = time.perf_counter()
        fn()
        timings.append((time.perf_counter() - start) * 1e6)
    return timings


def run_benchmarks(capacity: int = 500, n: int = 1200, repeats: int = 20, seed: int = 0) -> List[BenchmarkResult]:
    """Run every entry point on the same inputs and collect timings."""
    source = GeneratorSource(seed=seed)
    samples64 = [float(i + 1) for i in range(capacity)]
    weights64 = np.arange(1, capacity + 1, dtype=np.float64)
    weights32 = weights64.astype(np.float32)
    buffer64 = list(samples64)
    buffer32 = list(samples64)

    cases: Dict[str, Callable[[], object]] = {
        "random_choice_f64": lambda: random_choice_f64(samples64, weights64, n, source=source),
        "random_choice_in_place_f64": lambda: random_choice_in_place_f64(buffer64, weights64, source=source),
        "random_choice_f32": lambda: random_choice_f32(samples64, weights32, n, source=source),
        "random_choice_in_place_f32": lambda: random_choice_in_place_f32(buffer32, weights32, source=source),
        "systematic_indices_f64": lambda: systematic_indices(weights64, n, source=source),
    }
    results: List[BenchmarkResult] = []
    for name, fn in cases.items():
        timings = _time_call(fn, repeats)
        results.append(BenchmarkResult(name=name, best_us=float(np.min(timings)), median_us=float(np.median(timings))))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark stochastic universal sampling.")
    parser.add_argument("--capacity", type=int, default=500, help="Number of samples/weights.")
    parser.add_argument("--n", type=int, default=1200, help="Picks per allocating call.")
    parser.add_argument("--repeats", type=int, default=20, help="Timed calls per entry point.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the uniform source.")
    args = parser.parse_args()
    for res in run_benchmarks(capacity=args.capacity, n=args.n, repeats=args.repeats, seed=args.seed):
        print(f"{res.name:<28} best {res.best_us:10.1f} us   median {res.median_us:10.1f} us")


if __name__ == "__main__":
    main()
