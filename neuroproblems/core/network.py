"""
Reference feed-forward networks consumed by neuro problems.

A problem only needs a network to expose ``compute(inputs) -> outputs``. The
classes here provide that contract for demos and tests:

- NeuralNetwork: fixed-weight multilayer perceptron evaluated in float32
- FunctionNetwork: wraps a plain Python callable as a single-output network

Networks never change state during ``compute``, so a single instance can be
evaluated from several threads at once.
"""

import numpy as np
from typing import Callable, List, Optional, Sequence
from dataclasses import dataclass

from .activations import get_activation


@dataclass
class NetworkConfig:
    """Shape configuration for a feed-forward network."""
    input_dim: int
    output_dim: int
    hidden_layers: List[int]
    activation: str = 'tanh'

    @property
    def depth(self) -> int:
        """Number of hidden layers."""
        return len(self.hidden_layers)

    @property
    def layer_dims(self) -> List[int]:
        return [self.input_dim] + list(self.hidden_layers) + [self.output_dim]

    @property
    def total_params(self) -> int:
        """Total number of weights and biases."""
        dims = self.layer_dims
        return sum(dims[i] * dims[i + 1] + dims[i + 1] for i in range(len(dims) - 1))


class NeuralNetwork:
    """
    Fixed-weight multilayer perceptron.

    Hidden layers apply the configured activation; the output layer is
    linear so the network can produce unbounded regression targets.
    All parameters and arithmetic are float32.
    """

    def __init__(
        self,
        input_dim: int = 1,
        output_dim: int = 1,
        hidden_layers: Optional[List[int]] = None,
        activation: str = 'tanh',
        seed: Optional[int] = None,
    ):
        if input_dim < 1 or output_dim < 1:
            raise ValueError(
                f"Network dimensions must be positive, got {input_dim}->{output_dim}"
            )
        self.config = NetworkConfig(
            input_dim=input_dim,
            output_dim=output_dim,
            hidden_layers=list(hidden_layers) if hidden_layers is not None else [8],
            activation=activation,
        )
        self.activation_fn = get_activation(activation)
        self.seed = seed
        self._init_weights()

    def _init_weights(self):
        """Initialize weights with Xavier scaling from a private generator."""
        rng = np.random.default_rng(self.seed)

        self.weights: List[np.ndarray] = []
        self.biases: List[np.ndarray] = []

        dims = self.config.layer_dims
        for i in range(len(dims) - 1):
            fan_in, fan_out = dims[i], dims[i + 1]
            std = np.sqrt(2.0 / (fan_in + fan_out))
            W = (rng.standard_normal((fan_in, fan_out)) * std).astype(np.float32)
            b = np.zeros(fan_out, dtype=np.float32)
            self.weights.append(W)
            self.biases.append(b)

    @classmethod
    def from_weights(
        cls,
        weights: Sequence[np.ndarray],
        biases: Sequence[np.ndarray],
        activation: str = 'tanh',
    ) -> 'NeuralNetwork':
        """
        Build a network from explicit parameters.

        Args:
            weights: Per-layer matrices of shape (fan_in, fan_out)
            biases: Per-layer vectors of length fan_out
            activation: Hidden-layer activation name

        Returns:
            NeuralNetwork using copies of the given parameters
        """
        if len(weights) == 0 or len(weights) != len(biases):
            raise ValueError(
                f"Need matching non-empty weights and biases, got "
                f"{len(weights)} weights and {len(biases)} biases"
            )
        weights = [np.array(W, dtype=np.float32, ndmin=2) for W in weights]
        biases = [np.array(b, dtype=np.float32, ndmin=1) for b in biases]

        for i, (W, b) in enumerate(zip(weights, biases)):
            if i > 0 and W.shape[0] != weights[i - 1].shape[1]:
                raise ValueError(
                    f"Layer {i} expects {W.shape[0]} inputs but layer {i - 1} "
                    f"produces {weights[i - 1].shape[1]}"
                )
            if b.shape != (W.shape[1],):
                raise ValueError(
                    f"Layer {i} bias has shape {b.shape}, expected ({W.shape[1]},)"
                )

        network = cls.__new__(cls)
        network.config = NetworkConfig(
            input_dim=weights[0].shape[0],
            output_dim=weights[-1].shape[1],
            hidden_layers=[W.shape[1] for W in weights[:-1]],
            activation=activation,
        )
        network.activation_fn = get_activation(activation)
        network.seed = None
        network.weights = weights
        network.biases = biases
        return network

    @property
    def inputs_count(self) -> int:
        return self.config.input_dim

    @property
    def outputs_count(self) -> int:
        return self.config.output_dim

    @property
    def n_params(self) -> int:
        return self.config.total_params

    def forward(self, X: np.ndarray) -> np.ndarray:
        """
        Batch forward pass.

        Args:
            X: Input array of shape (n_samples, input_dim)

        Returns:
            Output array of shape (n_samples, output_dim), float32
        """
        current = np.asarray(X, dtype=np.float32)
        last = len(self.weights) - 1
        for i, (W, b) in enumerate(zip(self.weights, self.biases)):
            z = current @ W + b
            current = self.activation_fn(z) if i < last else z
        return current

    def compute(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Evaluate the network on a single input vector.

        Args:
            inputs: Sequence of length input_dim

        Returns:
            float32 array of length output_dim
        """
        x = np.asarray(inputs, dtype=np.float32).reshape(-1)
        if x.shape[0] != self.config.input_dim:
            raise ValueError(
                f"Expected {self.config.input_dim} inputs, got {x.shape[0]}"
            )
        return self.forward(x.reshape(1, -1))[0]

    def __repr__(self) -> str:
        layers = '-'.join(str(d) for d in self.config.layer_dims)
        return f"NeuralNetwork({self.config.activation}[{layers}], params={self.n_params})"


class FunctionNetwork:
    """
    Single-input, single-output network backed by a Python callable.

    Useful for checking a problem against a known function, e.g. a
    network that reproduces a target exactly must score zero error.
    """

    inputs_count = 1
    outputs_count = 1

    def __init__(self, func: Callable[[np.float32], float], name: Optional[str] = None):
        self.func = func
        self.name = name or getattr(func, '__name__', 'function')

    def compute(self, inputs: Sequence[float]) -> np.ndarray:
        x = np.asarray(inputs, dtype=np.float32).reshape(-1)
        if x.shape[0] != 1:
            raise ValueError(f"Expected 1 input, got {x.shape[0]}")
        return np.array([self.func(x[0])], dtype=np.float32)

    def __repr__(self) -> str:
        return f"FunctionNetwork({self.name})"


def create_network_for(
    problem,
    hidden_layers: Optional[List[int]] = None,
    activation: str = 'tanh',
    seed: Optional[int] = None,
) -> NeuralNetwork:
    """
    Create a randomly initialized network shaped for a neuro problem.

    Args:
        problem: Object exposing get_inputs_count() and get_outputs_count()
        hidden_layers: Hidden layer widths (default [8])
        activation: Hidden-layer activation name
        seed: Seed for weight initialization

    Returns:
        NeuralNetwork with the problem's input/output arity
    """
    return NeuralNetwork(
        input_dim=problem.get_inputs_count(),
        output_dim=problem.get_outputs_count(),
        hidden_layers=hidden_layers,
        activation=activation,
        seed=seed,
    )
