"""Base class for probability distributions."""

import mlx.core as mx
import numpy as np

from mlx_bayes.errors import ParameterError
from mlx_bayes.random import resolve_key, uniform

# smallest positive normal float32
FLOAT32_TINY = float(np.finfo(np.float32).tiny)


class Distribution:
    """Base class for all probability distributions.

    All distributions must implement:
    - log_prob(value): Compute log probability density/mass
    - _sample(key, shape): Draw samples from the distribution

    Parameters are validated in ``__init__``, so an invalid law raises
    :class:`~mlx_bayes.errors.ParameterError` before any draw is consumed.
    Instances are immutable after construction.
    """

    def log_prob(self, value):
        """
        Compute log probability density or mass function.

        Parameters
        ----------
        value : mlx.core.array or float
            Value(s) at which to evaluate log probability

        Returns
        -------
        log_prob : mlx.core.array
            Log probability at the given value(s)
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement log_prob()"
        )

    def sample(self, key=None, shape=(), seed=None):
        """
        Draw samples from the distribution.

        Parameters
        ----------
        key : mlx.core.array, optional
            Random key for sampling. If omitted, ``seed`` is used; with
            neither, a fresh non-reproducible key is drawn.
        shape : tuple, optional
            Shape of samples to draw
        seed : int, optional
            Seed used when no key is given

        Returns
        -------
        samples : mlx.core.array
            Samples from the distribution
        """
        return self._sample(resolve_key(key, seed), _as_shape(shape))

    def _sample(self, key, shape):
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _sample()"
        )

    def __repr__(self):
        """String representation of the distribution."""
        return f"{self.__class__.__name__}()"


def _as_shape(shape):
    if isinstance(shape, int):
        return (shape,)
    return tuple(shape)


def _check(condition, message):
    """Raise ParameterError unless ``condition`` holds for every element."""
    if not np.all(np.asarray(condition)):
        raise ParameterError(message)


def _param(value, name):
    """Convert a parameter to an MLX array, rejecting NaN."""
    arr = np.asarray(value, dtype=np.float64)
    if np.any(np.isnan(arr)):
        raise ParameterError(f"{name} must not be NaN")
    return mx.array(value, dtype=mx.float32)


def _positive(value, name):
    arr = np.asarray(value, dtype=np.float64)
    _check(np.isfinite(arr) & (arr > 0), f"{name} must be positive and finite, got {value}")
    return mx.array(value, dtype=mx.float32)


def _probability(value, name="p"):
    arr = np.asarray(value, dtype=np.float64)
    _check((arr >= 0) & (arr <= 1), f"{name} must lie in [0, 1], got {value}")
    return mx.array(value, dtype=mx.float32)


def _count(value, name="n"):
    _check(np.ndim(value) == 0 and float(value) == int(value) and int(value) >= 0,
           f"{name} must be a non-negative integer, got {value}")
    return int(value)


def _normalize_weights(weights):
    """Validate a weight vector and return it normalised to sum to one."""
    w = np.asarray(weights, dtype=np.float64)
    _check(w.ndim == 1 and w.size > 0, "weights must be a non-empty 1-D sequence")
    _check(np.isfinite(w) & (w >= 0), "weights must be finite and non-negative")
    total = w.sum()
    _check(total > 0, "weights must have a positive sum")
    return w / total


def _standard_normal(key, shape):
    """Box-Muller transform of two uniform draws per value.

    Only the cosine branch is used; the companion sine value is discarded.
    """
    k1, k2 = mx.random.split(key)
    u1 = uniform(k1, shape)
    u2 = uniform(k2, shape)
    # 1 - u1 lies in (0, 1], keeping the log finite
    radius = mx.sqrt(-2.0 * mx.log(1.0 - u1))
    return radius * mx.cos(2.0 * mx.pi * u2)


def _log_standard_gamma(key, shape, alpha):
    """Marsaglia-Tsang sampler for log G with G ~ Gamma(alpha, 1).

    For alpha < 1 a Gamma(alpha + 1, 1) draw is boosted by U^(1/alpha),
    added here as log(U) / alpha. For small alpha the boosted value lies far
    below the float32 range, so it is only ever formed on the log scale.
    Rejected elements are redrawn until every element is accepted; the
    expected number of rounds is O(1) for alpha >= 1.
    """
    alpha = mx.array(alpha, dtype=mx.float32)
    shape = tuple(np.broadcast_shapes(shape, tuple(alpha.shape)))
    boosted = alpha < 1
    a = mx.where(boosted, alpha + 1.0, alpha)
    d = a - 1.0 / 3.0
    c = 1.0 / mx.sqrt(9.0 * d)

    key, boost_key = mx.random.split(key)
    result = mx.ones(shape, dtype=mx.float32)
    done = mx.zeros(shape, dtype=mx.bool_)
    while not mx.all(done).item():
        key, normal_key, uniform_key = mx.random.split(key, 3)
        z = _standard_normal(normal_key, shape)
        u = uniform(uniform_key, shape)
        v = (1.0 + c * z) ** 3
        safe_v = mx.where(v > 0, v, 1.0)
        accept = (v > 0) & (
            mx.log(u) < 0.5 * z * z + d - d * safe_v + d * mx.log(safe_v)
        )
        result = mx.where(accept & mx.logical_not(done), d * safe_v, result)
        done = done | accept

    # 1 - u lies in (0, 1], keeping the log finite
    log_boost = mx.log(1.0 - uniform(boost_key, shape)) / alpha
    return mx.log(result) + mx.where(boosted, log_boost, 0.0)


def _standard_gamma(key, shape, alpha):
    """Gamma(alpha, 1) draws, floored at the smallest normal float32.

    Values below the floor are not representable; flooring keeps every draw
    inside the open support (0, inf).
    """
    return _positive_exp(_log_standard_gamma(key, shape, alpha))


def _positive_exp(log_value):
    """exp(log_value), raised to FLOAT32_TINY where it would underflow."""
    return mx.maximum(mx.exp(log_value), FLOAT32_TINY)
