"""Tests for probability distributions."""

import math

import pytest
import mlx.core as mx
import numpy as np
from scipy import stats as sp_stats

from mlx_bayes import ParameterError
from mlx_bayes.distributions import (
    Bernoulli,
    Beta,
    Binomial,
    Categorical,
    Cauchy,
    ChiSquared,
    DiscreteUniform,
    Exponential,
    FDistribution,
    Gamma,
    Geometric,
    HalfNormal,
    Laplace,
    LogNormal,
    Mixture,
    Multinomial,
    Normal,
    Pareto,
    Poisson,
    StudentT,
    Triangular,
    Uniform,
    Weibull,
    Zipf,
)

N = 200_000

# (law, expected mean, expected variance)
MOMENTS = [
    (Normal(0, 1), 0.0, 1.0),
    (Normal(-3, 0.5), -3.0, 0.25),
    (LogNormal(0, 0.5), math.exp(0.125), (math.exp(0.25) - 1) * math.exp(0.25)),
    (HalfNormal(2), 2 * math.sqrt(2 / math.pi), 4 * (1 - 2 / math.pi)),
    (Exponential(2), 0.5, 0.25),
    (Weibull(1.5, 2.0), 1.5 * math.gamma(1.5), 2.25 * (1 - math.gamma(1.5) ** 2)),
    (Laplace(1, 2), 1.0, 8.0),
    (Uniform(2, 5), 3.5, 0.75),
    (Triangular(0, 1, 0.5), 0.5, 1 / 24),
    (Gamma(3, 2), 6.0, 12.0),
    (Gamma(0.5, 1), 0.5, 0.5),
    (ChiSquared(4), 4.0, 8.0),
    (StudentT(10), 0.0, 1.25),
    (FDistribution(10, 20), 20 / 18, 2 * 400 * 28 / (10 * 324 * 16)),
    (Beta(2, 5), 2 / 7, 10 / (49 * 8)),
    (Bernoulli(0.3), 0.3, 0.21),
    (Binomial(10, 0.3), 3.0, 2.1),
    (Geometric(0.25), 4.0, 12.0),
    (Poisson(4), 4.0, 4.0),
    (DiscreteUniform(1, 6), 3.5, 35 / 12),
]


class TestMoments:
    """Sample moments agree with the closed forms."""

    @pytest.mark.parametrize("dist,expected_mean,expected_var", MOMENTS, ids=repr)
    def test_mean(self, dist, expected_mean, expected_var):
        """Sample mean lies within six standard errors of the true mean."""
        samples = np.array(dist.sample(mx.random.key(0), shape=(N,)), dtype=np.float64)
        atol = 6 * math.sqrt(expected_var / N)
        assert np.isclose(samples.mean(), expected_mean, atol=atol)

    @pytest.mark.parametrize("dist,expected_mean,expected_var", MOMENTS, ids=repr)
    def test_variance(self, dist, expected_mean, expected_var):
        """Sample variance is within a few percent of the true variance."""
        samples = np.array(dist.sample(mx.random.key(1), shape=(N,)), dtype=np.float64)
        assert np.isclose(samples.var(), expected_var, rtol=0.05)

    def test_pareto_mean(self):
        """Pareto(scale=1, shape=3) has mean 1.5."""
        samples = np.array(Pareto(1, 3).sample(mx.random.key(2), shape=(N,)), dtype=np.float64)
        assert samples.min() >= 1.0
        assert np.isclose(samples.mean(), 1.5, atol=0.02)

    def test_cauchy_median(self):
        """Cauchy has no mean; its sample median estimates loc."""
        samples = np.array(Cauchy(2, 1).sample(mx.random.key(3), shape=(N,)))
        assert np.isclose(np.median(samples), 2.0, atol=0.02)
        # interquartile range of Cauchy(loc, scale) is 2 * scale
        q1, q3 = np.percentile(samples, [25, 75])
        assert np.isclose(q3 - q1, 2.0, atol=0.05)

    def test_normal_end_to_end(self):
        """One million Normal(5, 2) draws: mean within 0.01, std within 0.01."""
        samples = np.array(Normal(5, 2).sample(mx.random.key(2024), shape=(1_000_000,)),
                           dtype=np.float64)
        assert 4.99 <= samples.mean() <= 5.01
        assert 1.99 <= samples.std() <= 2.01

    def test_standard_normal_matches_scipy(self):
        """Kolmogorov-Smirnov test against the standard normal CDF."""
        samples = np.array(Normal(0, 1).sample(mx.random.key(5), shape=(20_000,)))
        result = sp_stats.kstest(samples, "norm")
        assert result.pvalue > 0.001


class TestSupport:
    """Samples stay inside each law's support."""

    def test_beta_open_interval(self):
        """Beta samples lie in (0, 1), including for small parameters."""
        samples = Beta(0.5, 0.5).sample(mx.random.key(0), shape=(10_000,))
        assert mx.all(samples >= 0).item()
        assert mx.all(samples <= 1).item()

    def test_beta_tiny_shapes_split_between_ends(self):
        """Beta(0.01, 0.01) has no NaN draws and puts about half its mass near each end."""
        samples = np.array(Beta(0.01, 0.01).sample(mx.random.key(0), shape=(10_000,)))
        assert not np.any(np.isnan(samples))
        assert samples.min() > 0 and samples.max() < 1
        assert np.isclose(np.mean(samples < 0.5), 0.5, atol=0.03)
        assert np.mean((samples < 0.01) | (samples > 0.99)) > 0.9

    def test_gamma_tiny_shape_stays_positive(self):
        """Gamma(0.01, 1) draws are strictly positive with finite log density."""
        dist = Gamma(0.01, 1.0)
        samples = dist.sample(mx.random.key(1), shape=(10_000,))
        assert mx.all(samples > 0).item()
        assert mx.all(mx.isfinite(dist.log_prob(samples))).item()

    def test_geometric_starts_at_one(self):
        """Geometric counts trials, so the smallest value is 1."""
        samples = np.array(Geometric(0.9).sample(mx.random.key(0), shape=(10_000,)))
        assert samples.min() == 1

    def test_geometric_certain_success(self):
        """With p = 1 every draw is exactly 1."""
        samples = np.array(Geometric(1.0).sample(mx.random.key(0), shape=(100,)))
        assert np.all(samples == 1)

    def test_discrete_uniform_covers_range(self):
        """Both endpoints of DiscreteUniform are reachable."""
        samples = np.array(DiscreteUniform(-2, 2).sample(mx.random.key(0), shape=(10_000,)))
        assert set(np.unique(samples)) == {-2, -1, 0, 1, 2}

    def test_discrete_uniform_wide_range_parity(self):
        """Over 10**8 values odd and even draws are equally likely."""
        dist = DiscreteUniform(0, 100_000_000)
        samples = np.array(dist.sample(mx.random.key(5), shape=(200_000,)))
        assert samples.min() >= 0 and samples.max() <= 100_000_000
        assert np.isclose(np.mean(samples % 2), 0.5, atol=0.01)
        assert np.isfinite(float(dist.log_prob(mx.array(99_999_999))))

    def test_triangular_bounds(self):
        """Triangular samples stay within [low, high]."""
        samples = np.array(Triangular(1, 4, 3).sample(mx.random.key(0), shape=(10_000,)))
        assert samples.min() >= 1 and samples.max() <= 4

    def test_poisson_nonnegative_integers(self):
        """Poisson draws are non-negative integers."""
        samples = np.array(Poisson(0.5).sample(mx.random.key(0), shape=(10_000,)))
        assert samples.min() >= 0
        assert np.all(np.floor(samples) == samples)


class TestDiscreteLaws:
    """Frequencies of discrete laws."""

    def test_binomial_and_poisson_at_documented_scale(self):
        """Binomial(2000, p) and Poisson(1000) draw correctly at the top of their range."""
        binomial = np.array(Binomial(2000, 0.3).sample(mx.random.key(8), shape=(2000,)))
        assert binomial.min() >= 0 and binomial.max() <= 2000
        assert np.isclose(binomial.mean(), 600, atol=2)
        poisson = np.array(Poisson(1000).sample(mx.random.key(9), shape=(2000,)))
        assert np.isclose(poisson.mean(), 1000, atol=3)
        assert np.isclose(poisson.var(), 1000, rtol=0.15)

    def test_categorical_frequencies(self):
        """Category frequencies match the probability vector."""
        probs = [0.1, 0.2, 0.3, 0.4]
        samples = np.array(Categorical(probs).sample(mx.random.key(7), shape=(N,)))
        freqs = np.bincount(samples, minlength=4) / N
        assert np.allclose(freqs, probs, atol=0.005)

    def test_categorical_from_logits(self):
        """Logits are normalised by softmax."""
        dist = Categorical(logits=np.log([1.0, 3.0]))
        assert np.allclose(np.array(dist.probs), [0.25, 0.75], atol=1e-6)

    def test_categorical_zero_weight_never_drawn(self):
        """A zero-probability category never appears."""
        samples = np.array(Categorical([0.5, 0.0, 0.5]).sample(mx.random.key(0), shape=(10_000,)))
        assert not np.any(samples == 1)

    def test_categorical_trailing_zero_weights_never_drawn(self):
        """Zero-probability categories after the last positive one never appear."""
        dist = Categorical([0.3, 0.7, 0.0, 0.0])
        samples = np.array(dist.sample(mx.random.key(1), shape=(20_000,)))
        assert samples.max() <= 1

    def test_categorical_entropy_and_mode(self):
        """Entropy of a uniform categorical is log K; mode is the argmax."""
        assert np.isclose(float(Categorical([1, 1, 1, 1]).entropy()), math.log(4), atol=1e-5)
        assert int(Categorical([0.2, 0.5, 0.3]).mode()) == 1

    def test_multinomial_rows_sum_to_n(self):
        """Each multinomial draw has K counts summing to n."""
        samples = np.array(Multinomial(20, [0.2, 0.3, 0.5]).sample(mx.random.key(0), shape=(500,)))
        assert samples.shape == (500, 3)
        assert np.all(samples.sum(axis=-1) == 20)
        assert np.allclose(samples.mean(axis=0), [4, 6, 10], atol=0.4)

    def test_zipf_frequencies(self):
        """Zipf frequencies follow k^-s normalised over 1..n."""
        n, s = 10, 1.2
        samples = np.array(Zipf(n, s).sample(mx.random.key(11), shape=(N,)))
        assert samples.min() >= 1 and samples.max() <= n
        expected = np.arange(1, n + 1, dtype=np.float64) ** -s
        expected /= expected.sum()
        freqs = np.bincount(samples, minlength=n + 1)[1:] / N
        assert np.allclose(freqs, expected, atol=0.005)

    def test_zipf_log_prob_normalised(self):
        """Zipf probabilities over the support sum to one."""
        dist = Zipf(25, 0.8)
        p = np.exp(np.array(dist.log_prob(mx.arange(1, 26))))
        assert np.isclose(p.sum(), 1.0, atol=1e-5)
        assert float(dist.log_prob(0)) == -np.inf

    def test_mixture_mean(self):
        """Mixture mean is the weighted component mean."""
        dist = Mixture([Normal(-2, 0.5), Normal(2, 0.5)], weights=[0.3, 0.7])
        samples = np.array(dist.sample(mx.random.key(3), shape=(N,)))
        assert np.isclose(samples.mean(), 0.8, atol=0.03)
        assert np.isclose((samples > 0).mean(), 0.7, atol=0.005)


class TestLogProb:
    """Log densities agree with scipy."""

    @pytest.mark.parametrize("dist,frozen", [
        (Normal(1, 2), sp_stats.norm(1, 2)),
        (Gamma(2.5, 1.5), sp_stats.gamma(2.5, scale=1.5)),
        (Beta(2, 3), sp_stats.beta(2, 3)),
        (Exponential(0.7), sp_stats.expon(scale=1 / 0.7)),
        (StudentT(4, 1, 2), sp_stats.t(4, 1, 2)),
        (Laplace(0, 1.5), sp_stats.laplace(0, 1.5)),
        (Cauchy(0, 2), sp_stats.cauchy(0, 2)),
    ], ids=lambda d: repr(d) if not hasattr(d, "dist") else d.dist.name)
    def test_continuous(self, dist, frozen):
        """Continuous log-pdf matches scipy at interior points."""
        x = np.array([0.2, 0.5, 1.3, 2.7])
        assert np.allclose(np.array(dist.log_prob(mx.array(x, dtype=mx.float32))), frozen.logpdf(x), atol=1e-4)

    def test_poisson_log_pmf(self):
        """Poisson log-pmf matches scipy."""
        k = np.arange(10)
        expected = sp_stats.poisson(3.0).logpmf(k)
        assert np.allclose(np.array(Poisson(3.0).log_prob(mx.array(k))), expected, atol=1e-4)

    def test_binomial_log_pmf(self):
        """Binomial log-pmf matches scipy."""
        k = np.arange(11)
        expected = sp_stats.binom(10, 0.4).logpmf(k)
        assert np.allclose(np.array(Binomial(10, 0.4).log_prob(mx.array(k))), expected, atol=1e-4)

    def test_outside_support(self):
        """Values outside the support have log density -inf."""
        assert float(Exponential(1).log_prob(-1.0)) == -np.inf
        assert float(Beta(2, 2).log_prob(1.5)) == -np.inf
        assert float(Uniform(0, 1).log_prob(2.0)) == -np.inf
        assert float(Poisson(2).log_prob(1.5)) == -np.inf


class TestParameterValidation:
    """Invalid parameters raise before any draw."""

    @pytest.mark.parametrize("factory", [
        lambda: Gamma(shape=-1, scale=1),
        lambda: Gamma(2, scale=0),
        lambda: Bernoulli(p=1.5),
        lambda: Normal(0, -1),
        lambda: Normal(float("nan"), 1),
        lambda: Beta(0, 1),
        lambda: Binomial(-1, 0.5),
        lambda: Binomial(2.5, 0.5),
        lambda: Geometric(0.0),
        lambda: Poisson(-2),
        lambda: Uniform(1, 1),
        lambda: DiscreteUniform(3, 1),
        lambda: Triangular(0, 1, 2),
        lambda: Categorical([0.0, 0.0]),
        lambda: Categorical([]),
        lambda: Categorical([-0.1, 1.1]),
        lambda: Zipf(0),
        lambda: Mixture([Normal(0, 1)], weights=[1.0, 2.0]),
    ])
    def test_invalid(self, factory):
        """Construction raises ParameterError."""
        with pytest.raises(ParameterError):
            factory()

    def test_parameter_error_is_value_error(self):
        """ParameterError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Bernoulli(p=-0.1)


class TestReproducibility:
    """The same key or seed yields the same draws."""

    def test_same_key_same_draws(self):
        """Two calls with one key agree exactly."""
        key = mx.random.key(99)
        a = np.array(Gamma(2, 1).sample(key, shape=(100,)))
        b = np.array(Gamma(2, 1).sample(key, shape=(100,)))
        assert np.array_equal(a, b)

    def test_seed_argument(self):
        """A seed is equivalent to the key built from it."""
        a = np.array(Normal(0, 1).sample(seed=5, shape=(50,)))
        b = np.array(Normal(0, 1).sample(mx.random.key(5), shape=(50,)))
        assert np.array_equal(a, b)

    def test_different_keys_differ(self):
        """Different keys give different draws."""
        a = np.array(Normal(0, 1).sample(mx.random.key(1), shape=(50,)))
        b = np.array(Normal(0, 1).sample(mx.random.key(2), shape=(50,)))
        assert not np.array_equal(a, b)

    def test_shape(self):
        """Sample shape follows the requested shape."""
        assert Normal(0, 1).sample(mx.random.key(0), shape=(3, 4)).shape == (3, 4)
        assert Poisson(1).sample(mx.random.key(0), shape=5).shape == (5,)
        assert Normal(0, 1).sample(mx.random.key(0)).shape == ()
