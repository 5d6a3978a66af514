"""Tests for the two-block Gibbs sampler."""

import pytest
import mlx.core as mx
import numpy as np

from mlx_bayes import ParameterError
from mlx_bayes.distributions import Beta, Binomial, Normal
from mlx_bayes.kernels.gibbs import gibbs


def bivariate_normal_conditional(rho):
    scale = (1 - rho ** 2) ** 0.5

    def conditional(key, other):
        return Normal(rho * float(other), scale).sample(key)

    return conditional


class TestGibbs:
    """Tests for Gibbs sampling."""

    def test_bivariate_normal(self):
        """Gibbs on a correlated bivariate normal recovers its moments."""
        rho = 0.8
        cond = bivariate_normal_conditional(rho)
        xs, ys = gibbs(cond, cond, 0.0, 0.0, num_samples=6000, key=mx.random.key(0))

        assert xs.shape == (6000,)
        assert ys.shape == (6000,)

        x, y = np.array(xs), np.array(ys)
        assert np.isclose(x.mean(), 0.0, atol=0.1)
        assert np.isclose(y.mean(), 0.0, atol=0.1)
        assert np.isclose(x.var(), 1.0, rtol=0.15)
        assert np.isclose(np.corrcoef(x, y)[0, 1], rho, atol=0.05)

    def test_beta_binomial_pair(self):
        """Beta-binomial Gibbs pair: marginal of p is the Beta prior."""
        n, a, b = 10, 2.0, 3.0

        def draw_k(key, p):
            return Binomial(n, float(p)).sample(key)

        def draw_p(key, k):
            k = float(k)
            return Beta(a + k, b + n - k).sample(key)

        ks, ps = gibbs(draw_k, draw_p, 0, 0.5, num_samples=5000, seed=1)
        assert np.isclose(np.array(ps).mean(), a / (a + b), atol=0.03)
        assert np.isclose(np.array(ks).mean(), n * a / (a + b), atol=0.3)

    def test_second_update_sees_first(self):
        """x2 is drawn from the freshly updated x1."""

        def first(key, other):
            return other + 1

        def second(key, x1):
            return x1 * 10

        xs, ys = gibbs(first, second, 0, 1, num_samples=3, seed=0)
        assert np.array(xs).tolist() == [2, 21, 211]
        assert np.array(ys).tolist() == [20, 210, 2110]

    def test_reproducible(self):
        """The same seed gives the same traces."""
        cond = bivariate_normal_conditional(0.5)
        a = gibbs(cond, cond, 0.0, 0.0, num_samples=200, seed=4)
        b = gibbs(cond, cond, 0.0, 0.0, num_samples=200, seed=4)
        assert np.array_equal(np.array(a[0]), np.array(b[0]))
        assert np.array_equal(np.array(a[1]), np.array(b[1]))

    def test_invalid_num_samples(self):
        """A non-positive sweep count raises ParameterError."""
        cond = bivariate_normal_conditional(0.5)
        with pytest.raises(ParameterError):
            gibbs(cond, cond, 0.0, 0.0, num_samples=0)
