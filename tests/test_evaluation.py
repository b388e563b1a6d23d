"""
Tests for batch evaluation, plots and the command line entry point.

Run with: python -m pytest tests/test_evaluation.py -v
"""

import numpy as np
import pytest

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from neuroproblems.__main__ import main, parse_args
from neuroproblems.core.network import FunctionNetwork, create_network_for
from neuroproblems.evaluation import (
    EvaluationConfig,
    EvaluationResult,
    evaluate_networks,
    run_evaluation,
    summarize,
    compare_fitness,
)
from neuroproblems.problems import SymbolicRegressionProblem, UnsupportedEvaluationError
from neuroproblems.visualization import plot_target_functions, plot_approximation


@pytest.fixture
def problem():
    return SymbolicRegressionProblem('g')


@pytest.fixture
def networks(problem):
    return [create_network_for(problem, hidden_layers=[5], seed=s) for s in range(6)]


class TestEvaluationConfig:
    """Tests for evaluation configuration."""

    def test_defaults(self):
        config = EvaluationConfig()
        assert config.n_workers is None
        assert config.resolved_workers >= 1
        assert config.to_dict() == {'n_workers': None, 'chunksize': 1, 'use_processes': True}

    def test_explicit_workers(self):
        assert EvaluationConfig(n_workers=3).resolved_workers == 3

    def test_validation(self):
        with pytest.raises(ValueError):
            EvaluationConfig(n_workers=0)
        with pytest.raises(ValueError):
            EvaluationConfig(chunksize=0)


class TestEvaluateNetworks:
    """Tests for batch evaluation."""

    def test_sequential(self, problem, networks):
        results = evaluate_networks(problem, networks, EvaluationConfig(n_workers=1))
        assert results == [problem.compute(net) for net in networks]

    def test_threads_match_sequential(self, problem, networks):
        sequential = evaluate_networks(problem, networks, EvaluationConfig(n_workers=1))
        threaded = evaluate_networks(
            problem, networks, EvaluationConfig(n_workers=3, use_processes=False)
        )
        assert threaded == sequential

    def test_processes_match_sequential(self, problem, networks):
        sequential = evaluate_networks(problem, networks, EvaluationConfig(n_workers=1))
        parallel = evaluate_networks(
            problem, networks, EvaluationConfig(n_workers=2, chunksize=2)
        )
        assert parallel == sequential

    def test_empty(self, problem):
        assert evaluate_networks(problem, []) == []

    def test_errors_propagate(self, problem):
        """Test a failing evaluation surfaces instead of becoming a fitness."""

        class Broken:
            def compute(self, inputs):
                raise RuntimeError('forward pass failed')

        with pytest.raises(RuntimeError, match='forward pass failed'):
            evaluate_networks(problem, [Broken()], EvaluationConfig(n_workers=1))


class TestSummaries:
    """Tests for result summaries and comparisons."""

    def test_summarize_minimize(self):
        result = summarize([3.0, 1.0, 2.0, 1.0], runtime_seconds=0.5, problem='p')

        assert isinstance(result, EvaluationResult)
        assert result.best_index == 1
        assert result.best_fitness == 1.0
        assert result.mean_fitness == pytest.approx(1.75)
        assert 'Best fitness: 1 (network #1)' in result.summary()

    def test_summarize_maximize(self):
        result = summarize([3.0, 1.0, 2.0], minimize=False)
        assert result.best_index == 0
        assert result.best_fitness == 3.0

    def test_summarize_empty(self):
        with pytest.raises(ValueError):
            summarize([])

    def test_run_evaluation(self, problem, networks):
        result = run_evaluation(problem, networks, EvaluationConfig(n_workers=1))

        assert len(result.fitnesses) == len(networks)
        assert result.best_fitness == min(result.fitnesses)
        assert result.minimize is True
        assert result.problem == repr(problem)
        assert result.runtime_seconds >= 0

    def test_exact_network_wins(self, problem, networks):
        batch = networks + [FunctionNetwork(problem.target)]
        result = run_evaluation(problem, batch, EvaluationConfig(n_workers=1))

        assert result.best_index == len(networks)
        assert result.best_fitness == 0.0

    def test_compare_fitness(self):
        assert compare_fitness(1.0, 2.0) == 1
        assert compare_fitness(2.0, 1.0) == -1
        assert compare_fitness(1.0, 1.0) == 0
        assert compare_fitness(1.0, 1.05, tol=0.1) == 0
        assert compare_fitness(1.0, 2.0, minimize=False) == -1

    def test_compare_fitness_nan(self):
        """Test NaN ranks worse than any number in both directions."""
        nan = float('nan')
        assert compare_fitness(nan, 1.0) == -1
        assert compare_fitness(1.0, nan) == 1
        assert compare_fitness(nan, 1.0, minimize=False) == -1
        assert compare_fitness(1.0, nan, minimize=False) == 1
        assert compare_fitness(nan, nan) == 0

    def test_summarize_skips_nan(self):
        nan = float('nan')
        result = summarize([nan, 3.0, 1.0, nan])

        assert result.best_index == 2
        assert result.best_fitness == 1.0
        assert result.mean_fitness == pytest.approx(2.0)

        result = summarize([nan, 3.0, 1.0], minimize=False)
        assert result.best_index == 1

    def test_summarize_all_nan(self):
        result = summarize([float('nan'), float('nan')])

        assert result.best_index == 0
        assert np.isnan(result.best_fitness)
        assert np.isnan(result.mean_fitness)

    def test_nan_network_never_best(self, problem):
        """Test a diverging network is not reported as the batch winner."""

        class NanNetwork:
            def compute(self, inputs):
                return [float('nan')]

        batch = [create_network_for(problem, seed=0), NanNetwork()]
        result = run_evaluation(problem, batch, EvaluationConfig(n_workers=1))

        assert np.isnan(result.fitnesses[1])
        assert result.best_index == 0
        assert result.best_fitness == result.fitnesses[0]
        assert result.mean_fitness == result.fitnesses[0]


class TestPlots:
    """Tests for matplotlib figures."""

    def test_plot_target_functions(self):
        fig = plot_target_functions(resolution=50)
        ax = fig.axes[0]
        assert len(ax.get_lines()) >= 3
        plt.close(fig)

    def test_plot_approximation(self, problem, networks, tmp_path):
        fig = plot_approximation(problem, networks[0], resolution=50)
        assert fig.axes[0].get_title().startswith("SymbolicRegressionProblem('g'")

        path = tmp_path / 'approx.png'
        fig.savefig(path)
        assert path.exists()
        plt.close(fig)


class TestCommandLine:
    """Tests for python -m neuroproblems."""

    def test_parse_defaults(self):
        args = parse_args([])
        assert args.problem == ['f', 'g', 'h']
        assert args.networks == 20
        assert args.hidden == [8]

    def test_rejects_unknown_target(self):
        with pytest.raises(SystemExit):
            parse_args(['--problem', 'x'])

    @pytest.mark.parametrize('argv', [
        ['--networks', '0'],
        ['--networks', '-2'],
        ['--workers', '0'],
        ['--hidden', '8', '0'],
        ['--networks', 'many'],
    ])
    def test_rejects_non_positive_counts(self, argv, capsys):
        """Test bad counts end in a usage error, not a traceback."""
        with pytest.raises(SystemExit) as excinfo:
            main(argv)

        assert excinfo.value.code == 2
        assert 'usage:' in capsys.readouterr().err

    def test_main(self, tmp_path, capsys):
        code = main([
            '--problem', 'f', 'h',
            '--networks', '3',
            '--workers', '1',
            '--plot', str(tmp_path),
        ])

        assert code == 0
        out = capsys.readouterr().out
        assert 'Networks evaluated: 3' in out
        assert (tmp_path / 'sr_f_best.png').exists()
        assert (tmp_path / 'sr_h_best.png').exists()


class TestIntegration:
    """Integration tests."""

    def test_driver_round_trip(self):
        """Test the shape-query, build, score loop a driver runs."""
        problem = SymbolicRegressionProblem('h')
        population = [
            create_network_for(problem, hidden_layers=[4], seed=s) for s in range(4)
        ]

        fitnesses = evaluate_networks(problem, population, EvaluationConfig(n_workers=1))
        ranked = sorted(range(len(population)), key=lambda i: fitnesses[i])

        assert all(np.isfinite(fitnesses))
        assert compare_fitness(fitnesses[ranked[0]], fitnesses[ranked[-1]]) in (0, 1)

        with pytest.raises(UnsupportedEvaluationError):
            problem.compute_from_ind(population[0])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
