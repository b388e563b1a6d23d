"""
Neuro Problems - fitness evaluation for evolved neural networks.

This package defines the contract an optimization problem satisfies to be
scored by an evolutionary driver, and a deterministic symbolic regression
benchmark family that implements it.

Key components:
- Problem / NeuroProblem: scoring contract and network shape queries
- SymbolicRegressionProblem: targets f, g, h scored by summed absolute error
- NeuralNetwork: reference fixed-weight network for demos and tests
- evaluate_networks: score a batch of networks in parallel

Example usage:
    from neuroproblems import SymbolicRegressionProblem, create_network_for

    problem = SymbolicRegressionProblem('f')
    network = create_network_for(problem, hidden_layers=[8], seed=0)
    fitness = problem.compute(network)  # lower is better
"""

from .problems import (
    Problem,
    NeuroProblem,
    ProblemError,
    UnknownProblemTypeError,
    UnsupportedEvaluationError,
    ShapeMismatchError,
    SymbolicRegressionProblem,
    TargetFunction,
    get_problem,
    list_problems,
)
from .core import NeuralNetwork, FunctionNetwork, create_network_for
from .evaluation import (
    EvaluationConfig,
    EvaluationResult,
    evaluate_networks,
    run_evaluation,
    compare_fitness,
)

__version__ = '0.1.0'

__all__ = [
    # Problem contract
    'Problem',
    'NeuroProblem',
    'ProblemError',
    'UnknownProblemTypeError',
    'UnsupportedEvaluationError',
    'ShapeMismatchError',
    # Benchmarks
    'SymbolicRegressionProblem',
    'TargetFunction',
    'get_problem',
    'list_problems',
    # Networks
    'NeuralNetwork',
    'FunctionNetwork',
    'create_network_for',
    # Evaluation
    'EvaluationConfig',
    'EvaluationResult',
    'evaluate_networks',
    'run_evaluation',
    'compare_fitness',
]
