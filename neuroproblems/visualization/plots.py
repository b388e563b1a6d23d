"""
Matplotlib-based visualization for regression problems.

These functions create static plots for analysis and documentation.
"""

import numpy as np
from typing import Optional, Tuple

# Matplotlib imports with non-GUI backend
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ..problems.symbolic_regression import TargetFunction


TARGET_COLORS = {
    TargetFunction.F: '#e74c3c',
    TargetFunction.G: '#3498db',
    TargetFunction.H: '#2ecc71',
}


def plot_target_functions(
    x_range: Tuple[float, float] = (-1.5, 1.5),
    resolution: int = 200,
    figsize: Tuple[int, int] = (8, 5),
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot the three symbolic regression targets on one axis.

    Args:
        x_range: Range for x-axis
        resolution: Number of points per curve
        figsize: Figure size
        ax: Existing axes to plot on

    Returns:
        matplotlib Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    x = np.linspace(x_range[0], x_range[1], resolution, dtype=np.float32)
    for target in TargetFunction:
        ax.plot(x, target(x), color=TARGET_COLORS[target], linewidth=2,
                label=f'{target.value}(x) = {target.formula}')

    ax.axhline(0, color='gray', linewidth=0.5)
    ax.axvline(0, color='gray', linewidth=0.5)
    ax.set_xlim(x_range)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title('Symbolic Regression Targets')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig


def plot_approximation(
    problem,
    network,
    x_range: Tuple[float, float] = (0.0, 1.0),
    resolution: int = 200,
    title: Optional[str] = None,
    figsize: Tuple[int, int] = (8, 5),
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot a network's output against a problem's target.

    The problem's sample points are marked, with a vertical segment for each
    point's absolute error; the segments sum to the network's fitness.

    Args:
        problem: SymbolicRegressionProblem
        network: Network exposing compute(inputs) -> outputs
        x_range: Range for x-axis
        resolution: Number of points per curve
        title: Plot title
        figsize: Figure size
        ax: Existing axes to plot on

    Returns:
        matplotlib Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    x = np.linspace(x_range[0], x_range[1], resolution, dtype=np.float32)
    y_target = problem.target(x)
    y_net = np.array([network.compute([xi])[0] for xi in x], dtype=np.float32)

    ax.plot(x, y_target, color=TARGET_COLORS[problem.target], linewidth=2,
            label=f'target {problem.tag}(x)')
    ax.plot(x, y_net, color='black', linewidth=1.5, linestyle='--', label='network')

    xs = problem.sample_points()
    ys = problem.target(xs)
    outs = np.array([network.compute([xi])[0] for xi in xs], dtype=np.float32)
    ax.vlines(xs, ys, outs, colors='#95a5a6', linewidths=1)
    ax.scatter(xs, ys, color=TARGET_COLORS[problem.target], edgecolors='white',
               s=40, zorder=10, label='sample points')

    ax.set_xlim(x_range)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    if title:
        ax.set_title(title)
    else:
        ax.set_title(f'{problem!r} - error sum {problem.compute(network):.4g}')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig
