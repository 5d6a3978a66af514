"""Tests for Hamiltonian Monte Carlo (HMC) sampler."""

import pytest
import mlx.core as mx
import numpy as np

from mlx_bayes import DegenerateChainWarning, ParameterError, TargetEvaluationError
from mlx_bayes.distributions import Normal
from mlx_bayes.kernels.hmc import hmc, leapfrog


def normal_log_prob(params):
    return Normal(0, 1).log_prob(params['x'])


def normal_grad(params):
    return {'x': -params['x']}


class TestHMC:
    """Tests for HMC sampler."""

    def test_simple_normal(self):
        """Test HMC on standard normal distribution."""
        samples, accept_rate = hmc(
            normal_log_prob,
            normal_grad,
            {'x': 0.5},
            num_samples=1000,
            step_size=0.1,
            num_leapfrog_steps=10,
            key=mx.random.key(42),
        )

        # Check shape
        assert samples['x'].shape == (1000,)

        # Check acceptance rate is reasonable
        assert 0.5 <= accept_rate <= 1.0

        # Check sample statistics (should be close to N(0,1))
        sample_mean = float(mx.mean(samples['x']))
        sample_std = float(mx.std(samples['x']))

        assert np.isclose(sample_mean, 0.0, atol=0.15)
        assert np.isclose(sample_std, 1.0, atol=0.15)

    def test_multivariate_normal(self):
        """Test HMC on a two-parameter normal model."""

        def log_prob(params):
            lp = Normal(0, 1).log_prob(params['x'])
            lp += Normal(2, 0.5).log_prob(params['y'])
            return lp

        def grad(params):
            return {'x': -params['x'], 'y': -(params['y'] - 2) / 0.25}

        samples, accept_rate = hmc(
            log_prob,
            grad,
            {'x': 0.0, 'y': 2.0},
            num_samples=2000,
            step_size=0.1,
            num_leapfrog_steps=10,
            key=mx.random.key(123),
        )

        # Check shapes
        assert samples['x'].shape == (2000,)
        assert samples['y'].shape == (2000,)

        # Check acceptance rate
        assert accept_rate > 0.5

        # Check x ~ N(0, 1)
        assert np.isclose(float(mx.mean(samples['x'])), 0.0, atol=0.15)
        assert np.isclose(float(mx.std(samples['x'])), 1.0, atol=0.15)

        # Check y ~ N(2, 0.5)
        assert np.isclose(float(mx.mean(samples['y'])), 2.0, atol=0.15)
        assert np.isclose(float(mx.std(samples['y'])), 0.5, atol=0.1)

    def test_reproducible(self):
        """The same seed gives the same chain."""
        a, _ = hmc(normal_log_prob, normal_grad, {'x': 0.0}, num_samples=100, seed=8)
        b, _ = hmc(normal_log_prob, normal_grad, {'x': 0.0}, num_samples=100, seed=8)
        assert np.array_equal(np.array(a['x']), np.array(b['x']))

    def test_huge_step_size_never_accepts(self):
        """A wildly unstable integrator gives a frozen chain and a warning."""
        with pytest.warns(DegenerateChainWarning):
            samples, accept_rate = hmc(
                normal_log_prob, normal_grad, {'x': 0.0},
                num_samples=20, step_size=50.0, num_leapfrog_steps=3, seed=0,
            )
        assert accept_rate == 0.0
        assert np.all(np.array(samples['x']) == 0.0)


class TestLeapfrog:
    """Tests for the leapfrog integrator."""

    def test_energy_approximately_conserved(self):
        """On a harmonic oscillator H drifts only slightly."""
        params = {'x': mx.array(1.0)}
        momentum = {'x': mx.array(0.5)}
        new_params, new_momentum = leapfrog(normal_grad, params, momentum, 0.05, 40)

        def energy(q, p):
            return 0.5 * float(q['x']) ** 2 + 0.5 * float(p['x']) ** 2

        assert np.isclose(energy(new_params, new_momentum), energy(params, momentum), atol=1e-3)

    def test_reversible(self):
        """Integrating back with negated momentum returns to the start."""
        params = {'x': mx.array(0.3)}
        momentum = {'x': mx.array(-1.2)}
        q1, p1 = leapfrog(normal_grad, params, momentum, 0.1, 15)
        q2, p2 = leapfrog(normal_grad, q1, {'x': -p1['x']}, 0.1, 15)
        assert np.isclose(float(q2['x']), 0.3, atol=1e-4)
        assert np.isclose(float(p2['x']), 1.2, atol=1e-4)


class TestErrors:
    """Invalid tuning and failing callables."""

    def test_missing_gradient(self):
        """A gradient dict lacking a parameter raises TargetEvaluationError."""
        with pytest.raises(TargetEvaluationError):
            hmc(normal_log_prob, lambda params: {}, {'x': 0.0}, num_samples=5, seed=0)

    def test_nan_log_density(self):
        """A NaN log density raises TargetEvaluationError."""
        with pytest.raises(TargetEvaluationError):
            hmc(lambda params: float('nan'), normal_grad, {'x': 0.0}, num_samples=5, seed=0)

    @pytest.mark.parametrize("kwargs", [
        {'step_size': 0.0},
        {'num_leapfrog_steps': 0},
        {'num_samples': -1},
    ])
    def test_invalid_tuning(self, kwargs):
        """Non-positive tuning values raise ParameterError."""
        with pytest.raises(ParameterError):
            hmc(normal_log_prob, normal_grad, {'x': 0.0}, seed=0, **kwargs)
