"""Benchmark the HSD interior-point solver against SciPy's HiGHS.

Run: python benchmarks/bench_vs_highs.py
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Tuple

import numpy as np

from hsdlp import linprog_hsd, reference_linprog

LP = Tuple[np.ndarray, np.ndarray, np.ndarray]


@dataclass
class BenchmarkResult:
    solver: str
    m: int
    n: int
    time_ms: float
    nit: int
    objective: float
    status: str


def random_lp(m: int, n: int, seed: int = 0) -> LP:
    """Random LP with strictly feasible primal and dual."""
    rng = np.random.default_rng(seed)
    a_mat = rng.standard_normal((m, n))
    b = a_mat @ rng.uniform(0.5, 1.5, size=n)
    c = a_mat.T @ rng.standard_normal(m) + rng.uniform(0.5, 1.5, size=n)
    return c, a_mat, b


def time_solve(func: Callable, n_iterations: int = 5, warmup: int = 1) -> Tuple[float, object]:
    """Average wall-clock time of ``func`` in milliseconds, plus its last result."""
    for _ in range(warmup):
        func()
    start = time.perf_counter()
    for _ in range(n_iterations):
        result = func()
    end = time.perf_counter()
    return (end - start) / n_iterations * 1000, result


def run(shapes: List[Tuple[int, int]]) -> List[BenchmarkResult]:
    results = []
    solvers = {
        "hsdlp[scipy]": lambda c, a, b: linprog_hsd(c, a, b),
        "hsdlp[torch]": lambda c, a, b: linprog_hsd(c, a, b, backend="torch"),
        "highs": reference_linprog,
    }
    for m, n in shapes:
        c, a_mat, b = random_lp(m, n)
        for name, solver in solvers.items():
            elapsed, res = time_solve(lambda: solver(c, a_mat, b))
            results.append(
                BenchmarkResult(
                    solver=name,
                    m=m,
                    n=n,
                    time_ms=elapsed,
                    nit=res.nit,
                    objective=res.fun,
                    status=res.status.name,
                )
            )
    return results


def main():
    """Run all benchmarks."""
    print("=" * 80)
    print("LP BENCHMARK: hsdlp vs HiGHS")
    print("=" * 80)
    results = run([(10, 30), (50, 150), (100, 300), (200, 600)])
    print(f"{'solver':<14}{'m':>6}{'n':>6}{'time [ms]':>12}{'nit':>6}{'objective':>22}  status")
    for r in results:
        print(
            f"{r.solver:<14}{r.m:>6}{r.n:>6}{r.time_ms:>12.2f}{r.nit:>6}"
            f"{r.objective:>22.12e}  {r.status}"
        )


if __name__ == "__main__":
    main()
