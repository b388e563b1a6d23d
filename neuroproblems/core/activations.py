"""
Activation functions for reference networks.

All functions operate elementwise on numpy arrays and preserve the input
dtype, so networks built in float32 stay in float32 end to end.
"""

import numpy as np
from typing import Callable, Dict


def linear(x: np.ndarray) -> np.ndarray:
    """Identity activation - no nonlinearity."""
    return x


def relu(x: np.ndarray) -> np.ndarray:
    """Rectified Linear Unit."""
    return np.maximum(x, 0).astype(x.dtype, copy=False)


def tanh(x: np.ndarray) -> np.ndarray:
    """Hyperbolic tangent - smooth, bounded (-1, 1)."""
    return np.tanh(x)


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Sigmoid - smooth, bounded (0, 1)."""
    # Clip to avoid overflow
    x = np.clip(x, -80, 80)
    return (1 / (1 + np.exp(-x))).astype(x.dtype, copy=False)


def sine(x: np.ndarray) -> np.ndarray:
    """Sinusoidal activation - periodic."""
    return np.sin(x)


class Activation:
    """Wrapper for an activation function with its metadata."""

    def __init__(
        self,
        name: str,
        func: Callable,
        family: str,
        bounded: bool,
    ):
        self.name = name
        self.func = func
        self.family = family
        self.bounded = bounded

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return self.func(x)

    def __repr__(self):
        return f"Activation({self.name}, family={self.family})"


# Registry of all activation functions
ACTIVATIONS: Dict[str, Activation] = {
    'linear': Activation('linear', linear, family='linear', bounded=False),
    'relu': Activation('relu', relu, family='rectified', bounded=False),
    'tanh': Activation('tanh', tanh, family='smooth', bounded=True),
    'sigmoid': Activation('sigmoid', sigmoid, family='smooth', bounded=True),
    'sine': Activation('sine', sine, family='periodic', bounded=True),
}


def get_activation(name: str) -> Activation:
    """Get an activation function by name."""
    if name not in ACTIVATIONS:
        available = ', '.join(ACTIVATIONS.keys())
        raise ValueError(f"Unknown activation '{name}'. Available: {available}")
    return ACTIVATIONS[name]


def list_activations() -> Dict[str, str]:
    """Map each activation name to its family."""
    return {name: act.family for name, act in ACTIVATIONS.items()}
