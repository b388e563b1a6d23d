"""Visualization utilities for regression problems."""

from .plots import (
    plot_target_functions,
    plot_approximation,
)

__all__ = [
    'plot_target_functions',
    'plot_approximation',
]
