"""
Problem contract between optimization problems and an evolutionary driver.

A driver scores candidates through one of two entry points:

- Problem.compute_from_ind(individual): generic genome representations
- NeuroProblem.compute(network): neural networks, scored directly

NeuroProblem also declares the network shape it expects, so a driver can
build compatible networks before any evaluation happens.
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class ProblemError(Exception):
    """Base class for problem definition and evaluation errors."""


class UnknownProblemTypeError(ProblemError, ValueError):
    """Raised when a problem is constructed with a tag outside its variant set."""

    def __init__(self, problem_name: str, problem_type: Any, valid_types):
        self.problem_type = problem_type
        self.valid_types = tuple(valid_types)
        super().__init__(
            f"Unknown problem type for {problem_name}: {problem_type!r} "
            f"(expected one of {', '.join(repr(t) for t in self.valid_types)})"
        )


class UnsupportedEvaluationError(ProblemError, NotImplementedError):
    """Raised when a problem is asked to score a representation it does not support."""

    def __init__(self, problem: 'Problem', entry_point: str):
        self.problem = problem
        self.entry_point = entry_point
        super().__init__(
            f"{type(problem).__name__} does not support {entry_point}(); "
            f"it only scores neural networks via compute(network)"
        )


class ShapeMismatchError(ProblemError, ValueError):
    """Raised when a network's arity does not match the problem's shape contract."""


class Problem(ABC):
    """
    Anything that can produce a scalar fitness for an individual.

    Subclasses fix the direction of optimization once through ``minimize``;
    it must not change during a run.
    """

    minimize: bool = True

    @abstractmethod
    def compute_from_ind(self, individual: Any) -> float:
        """
        Score a generic individual.

        Args:
            individual: Genome in whatever representation the driver uses

        Returns:
            Scalar fitness
        """


class NeuroProblem(Problem):
    """
    Problem whose candidates are neural networks with a fixed arity.

    Subclasses implement compute() plus the two shape queries. The shape
    must be available without evaluating anything and must stay constant
    for the lifetime of the instance.
    """

    @abstractmethod
    def compute(self, network) -> float:
        """
        Score a network directly.

        Args:
            network: Object exposing compute(inputs) -> outputs

        Returns:
            Scalar fitness
        """

    @abstractmethod
    def get_inputs_count(self) -> int:
        """Number of inputs the network must accept."""

    @abstractmethod
    def get_outputs_count(self) -> int:
        """Number of outputs the network must produce."""

    @property
    def inputs_count(self) -> int:
        return self.get_inputs_count()

    @property
    def outputs_count(self) -> int:
        return self.get_outputs_count()

    def check_network(self, network) -> None:
        """
        Validate a network's declared arity against this problem.

        Networks that do not declare ``inputs_count``/``outputs_count`` pass;
        their outputs are still checked during evaluation.
        """
        for attr, expected in (
            ('inputs_count', self.get_inputs_count()),
            ('outputs_count', self.get_outputs_count()),
        ):
            declared = getattr(network, attr, None)
            if declared is not None and declared != expected:
                raise ShapeMismatchError(
                    f"{type(self).__name__} needs {attr}={expected}, "
                    f"network {network!r} has {declared}"
                )

    def read_outputs(self, network, outputs) -> np.ndarray:
        """Convert a network's raw outputs to float32 and check their length."""
        outputs = np.asarray(outputs, dtype=np.float32).reshape(-1)
        if outputs.shape[0] != self.get_outputs_count():
            raise ShapeMismatchError(
                f"Network {network!r} returned {outputs.shape[0]} outputs, "
                f"expected {self.get_outputs_count()}"
            )
        return outputs
