"""
Batch fitness evaluation of many networks against one shared problem.

Problems are immutable, so a single instance is handed to every worker.
Results always come back in the order the networks were given.
"""

import logging
import time
from dataclasses import dataclass, asdict
from multiprocessing import Pool, cpu_count
from multiprocessing.pool import ThreadPool
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .problems.base import NeuroProblem

logger = logging.getLogger(__name__)


@dataclass
class EvaluationConfig:
    """Configuration for batch evaluation."""
    # Parallelization (None = cpu_count - 1, 1 = sequential in-process)
    n_workers: Optional[int] = None
    chunksize: int = 1

    # Worker processes need picklable networks; threads do not
    use_processes: bool = True

    def __post_init__(self):
        if self.n_workers is not None and self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.chunksize < 1:
            raise ValueError(f"chunksize must be >= 1, got {self.chunksize}")

    @property
    def resolved_workers(self) -> int:
        return self.n_workers or max(1, cpu_count() - 1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EvaluationResult:
    """Fitness values for one batch plus summary statistics."""
    fitnesses: List[float]
    best_index: int
    best_fitness: float
    mean_fitness: float
    runtime_seconds: float
    minimize: bool = True
    problem: str = ''

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            f"Problem: {self.problem}",
            f"Networks evaluated: {len(self.fitnesses)}",
            f"Best fitness: {self.best_fitness:.6g} (network #{self.best_index})",
            f"Mean fitness: {self.mean_fitness:.6g}",
            f"Runtime: {self.runtime_seconds:.3f}s",
        ]
        return '\n'.join(lines)


def _evaluate_worker(args: tuple) -> float:
    """
    Worker function for parallel fitness evaluation.

    This is a module-level function to enable pickling for multiprocessing.
    """
    problem, network = args
    return problem.compute(network)


def evaluate_networks(
    problem: NeuroProblem,
    networks: Sequence[Any],
    config: Optional[EvaluationConfig] = None,
) -> List[float]:
    """
    Evaluate networks against a problem, in parallel when configured.

    Args:
        problem: Shared problem instance
        networks: Networks exposing compute(inputs) -> outputs
        config: Parallelization settings (default: EvaluationConfig())

    Returns:
        Fitness per network, in input order
    """
    config = config or EvaluationConfig()
    networks = list(networks)
    if not networks:
        return []

    n_workers = min(config.resolved_workers, len(networks))
    if n_workers == 1:
        logger.debug("Evaluating %d networks sequentially on %r", len(networks), problem)
        return [problem.compute(net) for net in networks]

    logger.debug(
        "Evaluating %d networks on %r with %d %s",
        len(networks), problem, n_workers,
        'processes' if config.use_processes else 'threads',
    )
    args_list = [(problem, net) for net in networks]
    pool_cls = Pool if config.use_processes else ThreadPool
    with pool_cls(n_workers) as pool:
        return pool.map(_evaluate_worker, args_list, chunksize=config.chunksize)


def summarize(
    fitnesses: Sequence[float],
    runtime_seconds: float = 0.0,
    minimize: bool = True,
    problem: str = '',
) -> EvaluationResult:
    """
    Build an EvaluationResult from raw fitness values.

    The best network is the lowest fitness when minimizing, the highest
    otherwise. Ties resolve to the earliest network. NaN fitnesses never
    win and are left out of the mean; an all-NaN batch reports network 0
    and a NaN mean.
    """
    if len(fitnesses) == 0:
        raise ValueError("Cannot summarize an empty batch")

    values = np.asarray(fitnesses, dtype=np.float64)
    valid = ~np.isnan(values)
    if valid.any():
        best_index = int(np.nanargmin(values) if minimize else np.nanargmax(values))
        mean_fitness = float(np.mean(values[valid]))
    else:
        best_index = 0
        mean_fitness = float('nan')

    return EvaluationResult(
        fitnesses=[float(f) for f in fitnesses],
        best_index=best_index,
        best_fitness=float(values[best_index]),
        mean_fitness=mean_fitness,
        runtime_seconds=runtime_seconds,
        minimize=minimize,
        problem=problem,
    )


def run_evaluation(
    problem: NeuroProblem,
    networks: Sequence[Any],
    config: Optional[EvaluationConfig] = None,
) -> EvaluationResult:
    """Evaluate a batch and summarize it, timing the whole run."""
    start_time = time.time()
    fitnesses = evaluate_networks(problem, networks, config)
    runtime = time.time() - start_time

    result = summarize(
        fitnesses,
        runtime_seconds=runtime,
        minimize=problem.minimize,
        problem=repr(problem),
    )
    logger.info(
        "%s: best %.6g, mean %.6g over %d networks in %.3fs",
        result.problem, result.best_fitness, result.mean_fitness,
        len(result.fitnesses), runtime,
    )
    return result


def compare_fitness(a: float, b: float, minimize: bool = True, tol: float = 0.0) -> int:
    """
    Compare two fitness values.

    Returns:
        1 if a is better
        -1 if b is better
        0 if equal (within tolerance)

    NaN ranks worse than any number; two NaNs compare equal.
    """
    a_nan, b_nan = np.isnan(a), np.isnan(b)
    if a_nan or b_nan:
        if a_nan and b_nan:
            return 0
        return -1 if a_nan else 1
    if abs(a - b) <= tol:
        return 0
    a_better = a < b if minimize else a > b
    return 1 if a_better else -1
