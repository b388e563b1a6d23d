"""
Symbolic regression benchmarks for evolved networks.

Three univariate polynomials commonly used to test genetic programming
algorithms (see Luke S., Essentials of Metaheuristics):

    f(x) = x^4 + x^3 + x^2 + x
    g(x) = x^5 - 2x^3 + x
    h(x) = x^6 - 2x^4 + x^2

A network is scored by the summed absolute error between its output and the
target over a fixed sample of points. The sample comes from a generator
seeded with a constant, rebuilt on every call, so the same network always
receives the same score and scores are comparable across individuals and
generations.

All arithmetic is float32.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np

from .base import NeuroProblem, UnknownProblemTypeError, UnsupportedEvaluationError

logger = logging.getLogger(__name__)


# Number of sample points per evaluation
POINTS_COUNT = 20

# Seed for the sample generator. Changing it changes every fitness value.
SAMPLE_SEED = 0

_TWO = np.float32(2)


def target_f(x):
    """x^4 + x^3 + x^2 + x"""
    x = np.asarray(x, dtype=np.float32)
    x2 = x * x
    return x2 * x2 + x2 * x + x2 + x


def target_g(x):
    """x^5 - 2x^3 + x"""
    x = np.asarray(x, dtype=np.float32)
    x2 = x * x
    return x2 * x2 * x - _TWO * x2 * x + x


def target_h(x):
    """x^6 - 2x^4 + x^2"""
    x = np.asarray(x, dtype=np.float32)
    x2 = x * x
    return x2 * x2 * x2 - _TWO * x2 * x2 + x2


class TargetFunction(Enum):
    """Closed set of regression targets, keyed by single-character tag."""
    F = 'f'
    G = 'g'
    H = 'h'

    @classmethod
    def from_tag(cls, tag: Union[str, 'TargetFunction']) -> 'TargetFunction':
        """Resolve a tag (or an existing member) to a target function."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownProblemTypeError(
                'symbolic regression problem', tag, [m.value for m in cls]
            ) from None

    @property
    def formula(self) -> str:
        return _FORMULAS[self]

    def __call__(self, x):
        """Evaluate the target on a scalar or array, elementwise, in float32."""
        return _TARGETS[self](x)


_TARGETS = {
    TargetFunction.F: target_f,
    TargetFunction.G: target_g,
    TargetFunction.H: target_h,
}

_FORMULAS = {
    TargetFunction.F: 'x^4 + x^3 + x^2 + x',
    TargetFunction.G: 'x^5 - 2x^3 + x',
    TargetFunction.H: 'x^6 - 2x^4 + x^2',
}


def sample_points(n_points: int = POINTS_COUNT, seed: int = SAMPLE_SEED) -> np.ndarray:
    """
    Draw the evaluation inputs.

    Samples are uniform on [0, 1) in float32. Each call builds its own
    generator, so the sequence for a given seed never changes and calls
    never share generator state.

    Args:
        n_points: Number of points to draw
        seed: Generator seed

    Returns:
        float32 array of shape (n_points,)
    """
    rng = np.random.default_rng(seed)
    return rng.random(n_points, dtype=np.float32)


@dataclass(frozen=True)
class SymbolicRegressionProblem(NeuroProblem):
    """
    Score a 1-in/1-out network by how well it approximates a target polynomial.

    Construct with a tag: SymbolicRegressionProblem('f'), ('g') or ('h').
    Any other tag raises UnknownProblemTypeError. Instances are immutable
    and hold no evaluation state, so one instance can be shared by any
    number of concurrent evaluations.

    Fitness is the sum (not the mean) of |network(x) - target(x)| over
    POINTS_COUNT sample points. Lower is better; zero is a perfect fit.
    """
    target: TargetFunction

    def __post_init__(self):
        object.__setattr__(self, 'target', TargetFunction.from_tag(self.target))

    @classmethod
    def new_f(cls) -> 'SymbolicRegressionProblem':
        return cls(TargetFunction.F)

    @classmethod
    def new_g(cls) -> 'SymbolicRegressionProblem':
        return cls(TargetFunction.G)

    @classmethod
    def new_h(cls) -> 'SymbolicRegressionProblem':
        return cls(TargetFunction.H)

    @property
    def tag(self) -> str:
        return self.target.value

    def get_inputs_count(self) -> int:
        return 1

    def get_outputs_count(self) -> int:
        return 1

    def compute_from_ind(self, individual: Any) -> float:
        raise UnsupportedEvaluationError(self, 'compute_from_ind')

    def sample_points(self) -> np.ndarray:
        """The fixed inputs every network is evaluated on."""
        return sample_points()

    def compute(self, network) -> float:
        """
        Summed absolute error of a network against the target.

        Args:
            network: Object exposing compute(inputs) -> outputs, 1 in / 1 out

        Returns:
            Non-negative error sum (float32 precision, returned as float)
        """
        self.check_network(network)

        xs = self.sample_points()
        ys = self.target(xs)

        error = np.float32(0)
        for x, y in zip(xs, ys):
            output = self.read_outputs(network, network.compute([x]))
            error += np.abs(output[0] - y)

        fitness = float(error)
        if not np.isfinite(fitness):
            logger.warning(
                "Non-finite fitness %s for %r on target %s", fitness, network, self.tag
            )
        else:
            logger.debug("Target %s: error sum %.6g for %r", self.tag, fitness, network)
        return fitness

    def __repr__(self) -> str:
        return f"SymbolicRegressionProblem({self.tag!r}: {self.target.formula})"
