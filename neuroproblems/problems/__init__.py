"""
Problem definitions scored by an evolutionary driver.

Problems are looked up by name:

    from neuroproblems.problems import get_problem

    problem = get_problem('sr_f')
    fitness = problem.compute(network)
"""

from typing import Callable, Dict, List

from .base import (
    Problem,
    NeuroProblem,
    ProblemError,
    UnknownProblemTypeError,
    UnsupportedEvaluationError,
    ShapeMismatchError,
)
from .symbolic_regression import (
    SymbolicRegressionProblem,
    TargetFunction,
    target_f,
    target_g,
    target_h,
    sample_points,
    POINTS_COUNT,
    SAMPLE_SEED,
)


# Registry of available problems
PROBLEMS: Dict[str, Callable[[], NeuroProblem]] = {
    'sr_f': SymbolicRegressionProblem.new_f,
    'sr_g': SymbolicRegressionProblem.new_g,
    'sr_h': SymbolicRegressionProblem.new_h,
}


def get_problem(name: str) -> NeuroProblem:
    """
    Create a problem by registry name.

    Args:
        name: One of list_problems()

    Returns:
        A new problem instance
    """
    if name not in PROBLEMS:
        available = ', '.join(PROBLEMS.keys())
        raise ValueError(f"Unknown problem '{name}'. Available: {available}")
    return PROBLEMS[name]()


def list_problems() -> List[str]:
    """List all registered problem names."""
    return list(PROBLEMS.keys())


__all__ = [
    'Problem',
    'NeuroProblem',
    'ProblemError',
    'UnknownProblemTypeError',
    'UnsupportedEvaluationError',
    'ShapeMismatchError',
    'SymbolicRegressionProblem',
    'TargetFunction',
    'target_f',
    'target_g',
    'target_h',
    'sample_points',
    'POINTS_COUNT',
    'SAMPLE_SEED',
    'PROBLEMS',
    'get_problem',
    'list_problems',
]
