"""Zipf distribution on a finite support."""

import math

import mlx.core as mx
import numpy as np
from mlx_bayes.distributions.base import Distribution, _check, _positive
from mlx_bayes.random import uniform


class Zipf(Distribution):
    """Zipf distribution: P(k) ∝ k^(-s) for k = 1, ..., n.

    Candidates come from inverting the continuous envelope g(x) ∝ x^(-s)
    on [1, n + 1) and flooring; candidate k is accepted with probability
    (t(k) / G(k)) / (t(1) / G(1)), where t(k) = k^(-s) and G(k) is the
    envelope mass on [k, k + 1). The ratio is largest at k = 1, so the
    acceptance probability is at most one.

    Parameters
    ----------
    n : int
        Number of ranks, at least 1
    exponent : float
        Exponent s, must be positive
    """

    def __init__(self, n, exponent=1.0):
        _check(int(n) == n and n >= 1, f"Zipf requires an integer n >= 1, got {n}")
        self.n = int(n)
        self.exponent = _positive(exponent, "exponent")
        s = float(exponent)
        ranks = np.arange(1, self.n + 1, dtype=np.float64)
        self._log_harmonic = math.log(np.sum(ranks ** -s))
        self._s = s
        self._top_ratio = 1.0 / self._bin_mass(1.0)

    def _bin_mass(self, k):
        """Envelope mass (unnormalised) of the interval [k, k + 1)."""
        s = self._s
        if abs(s - 1.0) < 1e-12:
            return math.log((k + 1) / k)
        return ((k + 1) ** (1 - s) - k ** (1 - s)) / (1 - s)

    def _envelope_inverse(self, u):
        s = self._s
        top = self.n + 1.0
        if abs(s - 1.0) < 1e-12:
            return mx.power(mx.array(top), u)
        span = top ** (1 - s) - 1.0
        return mx.power(1.0 + u * span, 1.0 / (1 - s))

    def log_prob(self, value):
        value = mx.array(value).astype(mx.float32)
        valid = (value >= 1) & (value <= self.n) & (mx.floor(value) == value)
        safe = mx.where(valid, value, 1)
        log_prob = -self._s * mx.log(safe.astype(mx.float32)) - self._log_harmonic
        return mx.where(valid, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        s = self._s
        result = mx.ones(shape, dtype=mx.int32)
        done = mx.zeros(shape, dtype=mx.bool_)
        while not mx.all(done).item():
            key, envelope_key, accept_key = mx.random.split(key, 3)
            x = self._envelope_inverse(uniform(envelope_key, shape))
            k = mx.clip(mx.floor(x), 1, self.n)
            if abs(s - 1.0) < 1e-12:
                mass = mx.log((k + 1) / k)
            else:
                mass = (mx.power(k + 1, 1 - s) - mx.power(k, 1 - s)) / (1 - s)
            ratio = mx.power(k, -s) / mass / self._top_ratio
            accept = uniform(accept_key, shape) < ratio
            result = mx.where(accept & mx.logical_not(done), k.astype(mx.int32), result)
            done = done | accept
        return result

    def __repr__(self):
        return f"Zipf(n={self.n}, exponent={self._s:.3f})"
