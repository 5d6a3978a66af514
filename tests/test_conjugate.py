"""Tests for closed-form conjugate updates."""

import math

import pytest
import numpy as np

from mlx_bayes import ParameterError
from mlx_bayes.distributions import Beta, Gamma, Normal
from mlx_bayes.inference import (
    beta_binomial_update,
    gamma_poisson_update,
    normal_known_variance_update,
)


class TestBetaBinomial:
    """Beta prior, binomial likelihood."""

    def test_exact_update(self):
        """Beta(1, 1) with 7 of 10 successes gives Beta(8, 4)."""
        posterior = beta_binomial_update(Beta(1, 1), successes=7, trials=10)
        assert isinstance(posterior, Beta)
        assert float(posterior.alpha) == 8.0
        assert float(posterior.beta) == 4.0

    def test_no_data_keeps_prior(self):
        """Zero trials leave the prior unchanged."""
        posterior = beta_binomial_update(Beta(2.5, 3.5), successes=0, trials=0)
        assert float(posterior.alpha) == 2.5
        assert float(posterior.beta) == 3.5

    def test_sequential_equals_batch(self):
        """Updating twice equals one update on the pooled data."""
        step = beta_binomial_update(beta_binomial_update(Beta(1, 1), 3, 5), 4, 5)
        batch = beta_binomial_update(Beta(1, 1), 7, 10)
        assert float(step.alpha) == float(batch.alpha)
        assert float(step.beta) == float(batch.beta)

    @pytest.mark.parametrize("successes,trials", [(11, 10), (-1, 5)])
    def test_invalid_counts(self, successes, trials):
        """successes must lie in [0, trials]."""
        with pytest.raises(ParameterError):
            beta_binomial_update(Beta(1, 1), successes, trials)


class TestNormalKnownVariance:
    """Normal prior on the mean, known observation noise."""

    def test_exact_update(self):
        """Prior N(0, 1), noise 1, data [2, 2] gives N(4/3, 1/sqrt(3))."""
        posterior = normal_known_variance_update(Normal(0, 1), [2.0, 2.0], noise_scale=1.0)
        assert np.isclose(float(posterior.loc), 4 / 3, atol=1e-6)
        assert np.isclose(float(posterior.scale), 1 / math.sqrt(3), atol=1e-6)

    def test_summaries_match_data(self):
        """Passing n and total equals passing the observations."""
        data = [0.5, 1.5, -0.2, 2.1]
        a = normal_known_variance_update(Normal(1, 2), data, noise_scale=0.5)
        b = normal_known_variance_update(Normal(1, 2), noise_scale=0.5, n=4, total=sum(data))
        assert np.isclose(float(a.loc), float(b.loc))
        assert np.isclose(float(a.scale), float(b.scale))

    def test_no_data_keeps_prior(self):
        """n = 0 leaves the prior unchanged."""
        posterior = normal_known_variance_update(Normal(1.5, 0.7), noise_scale=2.0, n=0, total=0.0)
        assert np.isclose(float(posterior.loc), 1.5)
        assert np.isclose(float(posterior.scale), 0.7)

    def test_many_observations_concentrate(self):
        """With lots of data the posterior mean approaches the sample mean."""
        data = np.full(10_000, 4.0)
        posterior = normal_known_variance_update(Normal(0, 1), data, noise_scale=1.0)
        assert np.isclose(float(posterior.loc), 4.0, atol=1e-3)
        assert float(posterior.scale) < 0.011

    def test_missing_data(self):
        """Neither data nor summaries is an error."""
        with pytest.raises(ParameterError):
            normal_known_variance_update(Normal(0, 1), noise_scale=1.0)

    def test_invalid_noise(self):
        """noise_scale must be positive."""
        with pytest.raises(ParameterError):
            normal_known_variance_update(Normal(0, 1), [1.0], noise_scale=0.0)


class TestGammaPoisson:
    """Gamma prior on a Poisson rate."""

    def test_exact_update(self):
        """Gamma(2, scale=1) with counts [1, 2, 3] gives Gamma(8, scale=1/4)."""
        posterior = gamma_poisson_update(Gamma(2, 1), [1, 2, 3])
        assert isinstance(posterior, Gamma)
        assert float(posterior.shape) == 8.0
        assert np.isclose(float(posterior.scale), 0.25)

    def test_no_counts_keeps_prior(self):
        """An empty count vector leaves the prior unchanged."""
        posterior = gamma_poisson_update(Gamma(3, 0.5), [])
        assert float(posterior.shape) == 3.0
        assert np.isclose(float(posterior.scale), 0.5)

    def test_sequential_equals_batch(self):
        """Two updates compose into one."""
        step = gamma_poisson_update(gamma_poisson_update(Gamma(1, 2), [4]), [0, 5])
        batch = gamma_poisson_update(Gamma(1, 2), [4, 0, 5])
        assert np.isclose(float(step.shape), float(batch.shape))
        assert np.isclose(float(step.scale), float(batch.scale))

    @pytest.mark.parametrize("counts", [[-1, 2], [1.5]])
    def test_invalid_counts(self, counts):
        """Counts must be non-negative integers."""
        with pytest.raises(ParameterError):
            gamma_poisson_update(Gamma(1, 1), counts)
