"""Poisson distribution."""

import mlx.core as mx
import numpy as np
from scipy.special import gammaln
from mlx_bayes.distributions.base import Distribution, _positive
from mlx_bayes.random import uniform


class Poisson(Distribution):
    """Poisson distribution with mean ``rate``.

    Sampled by counting unit-rate exponential inter-arrival times that fit
    in an interval of length ``rate``, so the expected number of draws per
    value is rate + 1. Each draw is one pass of a Python loop,
    so the call is suited to rates up to a few thousand.

    Parameters
    ----------
    rate : float
        Expected count λ, must be positive
    """

    def __init__(self, rate):
        self.rate = _positive(rate, "rate")

    def log_prob(self, value):
        k = np.asarray(value, dtype=np.float64)
        valid = (k >= 0) & (np.floor(k) == k)
        k_safe = np.where(valid, k, 0)
        k_mx = mx.array(k_safe, dtype=mx.float32)
        log_prob = (
            k_mx * mx.log(self.rate)
            - self.rate
            - mx.array(gammaln(k_safe + 1), dtype=mx.float32)
        )
        return mx.where(mx.array(valid), log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        shape = tuple(np.broadcast_shapes(shape, tuple(self.rate.shape)))
        count = mx.zeros(shape, dtype=mx.int32)
        elapsed = mx.zeros(shape, dtype=mx.float32)
        done = mx.zeros(shape, dtype=mx.bool_)
        while not mx.all(done).item():
            key, arrival_key = mx.random.split(key)
            elapsed = elapsed - mx.log(1 - uniform(arrival_key, shape))
            arrived = mx.logical_not(done) & (elapsed <= self.rate)
            count = count + arrived.astype(mx.int32)
            done = done | (elapsed > self.rate)
        return count

    def mean(self):
        return self.rate

    def variance(self):
        return self.rate

    def __repr__(self):
        return f"Poisson(rate={float(self.rate):.3f})"
