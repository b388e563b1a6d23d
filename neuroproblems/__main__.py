"""
Score randomly initialized networks on the symbolic regression benchmarks.

Usage:
    python -m neuroproblems [options]

Options:
    --problem T [T...]  Target tags to evaluate: f, g, h (default: all)
    --networks N        Number of random networks per target (default: 20)
    --hidden W [W...]   Hidden layer widths (default: 8)
    --activation NAME   Hidden activation (default: tanh)
    --seed N            Seed for network initialization (default: 0)
    --workers N         Parallel workers (default: cpu_count - 1)
    --plot DIR          Save a plot of the best network per target to DIR
    --verbose           Enable debug logging
"""

import argparse
import logging
from pathlib import Path

from .core.activations import ACTIVATIONS
from .core.network import create_network_for
from .evaluation import EvaluationConfig, run_evaluation
from .problems.symbolic_regression import SymbolicRegressionProblem, TargetFunction

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Score random networks on symbolic regression targets'
    )
    parser.add_argument(
        '--problem', nargs='+', default=[t.value for t in TargetFunction],
        choices=[t.value for t in TargetFunction],
        help='Target tags to evaluate (default: f g h)'
    )
    parser.add_argument(
        '--networks', type=positive_int, default=20,
        help='Number of random networks per target (default: 20)'
    )
    parser.add_argument(
        '--hidden', type=positive_int, nargs='+', default=[8],
        help='Hidden layer widths (default: 8)'
    )
    parser.add_argument(
        '--activation', default='tanh', choices=sorted(ACTIVATIONS),
        help='Hidden activation (default: tanh)'
    )
    parser.add_argument(
        '--seed', type=int, default=0,
        help='Seed for network initialization (default: 0)'
    )
    parser.add_argument(
        '--workers', type=positive_int, default=None,
        help='Number of parallel workers (default: cpu_count - 1)'
    )
    parser.add_argument(
        '--plot', type=str, default=None,
        help='Directory to save approximation plots to'
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    config = EvaluationConfig(n_workers=args.workers)
    plot_dir = Path(args.plot) if args.plot else None
    if plot_dir is not None:
        plot_dir.mkdir(parents=True, exist_ok=True)

    for tag in args.problem:
        problem = SymbolicRegressionProblem(tag)
        networks = [
            create_network_for(
                problem,
                hidden_layers=args.hidden,
                activation=args.activation,
                seed=args.seed + i,
            )
            for i in range(args.networks)
        ]
        result = run_evaluation(problem, networks, config)

        print("=" * 60)
        print(result.summary())
        print(f"Best network: {networks[result.best_index]!r}")

        if plot_dir is not None:
            from .visualization.plots import plot_approximation
            import matplotlib.pyplot as plt

            fig = plot_approximation(problem, networks[result.best_index])
            output_path = plot_dir / f'sr_{tag}_best.png'
            fig.savefig(output_path, dpi=120, bbox_inches='tight')
            plt.close(fig)
            logger.info("Saved: %s", output_path)

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
