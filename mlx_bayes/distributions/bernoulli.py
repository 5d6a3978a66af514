"""Bernoulli, binomial and geometric distributions."""

import mlx.core as mx
import numpy as np
from scipy.special import gammaln
from mlx_bayes.distributions.base import Distribution, _check, _count, _probability
from mlx_bayes.random import uniform


def _log_or_neg_inf(x):
    return mx.where(x > 0, mx.log(mx.where(x > 0, x, 1.0)), mx.array(-mx.inf))


class Bernoulli(Distribution):
    """Bernoulli distribution: 1 with probability ``p``, else 0.

    Parameters
    ----------
    p : float
        Success probability in [0, 1]
    """

    def __init__(self, p):
        self.p = _probability(p)

    def log_prob(self, value):
        value = mx.array(value)
        log_p = mx.where(value == 1, _log_or_neg_inf(self.p), _log_or_neg_inf(1 - self.p))
        valid = (value == 0) | (value == 1)
        return mx.where(valid, log_p, mx.array(-mx.inf))

    def _sample(self, key, shape):
        return (uniform(key, shape) < self.p).astype(mx.int32)

    def mean(self):
        return self.p

    def variance(self):
        return self.p * (1 - self.p)

    def __repr__(self):
        return f"Bernoulli(p={float(self.p):.3f})"


class Binomial(Distribution):
    """Binomial distribution: number of successes in ``n`` Bernoulli trials.

    Sampled by summing ``n`` Bernoulli draws, one vectorised draw and one key
    split per trial, so a call costs O(n) Python steps whatever the sample
    shape. Suited to n up to a few thousand.

    Parameters
    ----------
    n : int
        Number of trials, non-negative
    p : float
        Success probability in [0, 1]
    """

    def __init__(self, n, p):
        self.n = _count(n, "n")
        self.p = _probability(p)

    def log_prob(self, value):
        k = np.asarray(value, dtype=np.float64)
        n = self.n
        valid = (k >= 0) & (k <= n) & (np.floor(k) == k)
        k_safe = np.where(valid, k, 0)
        log_choose = mx.array(
            gammaln(n + 1) - gammaln(k_safe + 1) - gammaln(n - k_safe + 1),
            dtype=mx.float32,
        )
        k_mx = mx.array(k_safe, dtype=mx.float32)
        # 0 * log(0) terms must vanish at p = 0 or p = 1
        success = mx.where(k_mx > 0, k_mx * _log_or_neg_inf(self.p), 0.0)
        failure = mx.where(n - k_mx > 0, (n - k_mx) * _log_or_neg_inf(1 - self.p), 0.0)
        log_prob = log_choose + success + failure
        return mx.where(mx.array(valid), log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        total = mx.zeros(shape, dtype=mx.int32)
        for trial_key in (mx.random.split(key, self.n) if self.n > 0 else []):
            total = total + (uniform(trial_key, shape) < self.p).astype(mx.int32)
        return total

    def mean(self):
        return self.n * self.p

    def variance(self):
        return self.n * self.p * (1 - self.p)

    def __repr__(self):
        return f"Binomial(n={self.n}, p={float(self.p):.3f})"


class Geometric(Distribution):
    """Geometric distribution: number of Bernoulli(p) trials up to and
    including the first success, with support {1, 2, ...}.

    Sampled by running the trials, so the expected number of draws per
    value is 1/p.

    Parameters
    ----------
    p : float
        Success probability in (0, 1]
    """

    def __init__(self, p):
        _check(np.asarray(p, dtype=np.float64) > 0, f"Geometric requires p > 0, got {p}")
        self.p = _probability(p)

    def log_prob(self, value):
        value = mx.array(value).astype(mx.float32)
        valid = (value >= 1) & (mx.floor(value) == value)
        log_prob = (value - 1) * _log_or_neg_inf(1 - self.p) + mx.log(self.p)
        # p = 1 puts all mass on 1, avoid 0 * -inf
        log_prob = mx.where(value == 1, mx.log(self.p), log_prob)
        return mx.where(valid, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        trials = mx.zeros(shape, dtype=mx.int32)
        done = mx.zeros(shape, dtype=mx.bool_)
        while not mx.all(done).item():
            key, trial_key = mx.random.split(key)
            success = uniform(trial_key, shape) < self.p
            trials = trials + mx.logical_not(done).astype(mx.int32)
            done = done | success
        return trials

    def mean(self):
        return 1.0 / self.p

    def variance(self):
        return (1 - self.p) / self.p ** 2

    def __repr__(self):
        return f"Geometric(p={float(self.p):.3f})"
