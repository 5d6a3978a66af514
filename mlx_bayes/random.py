"""Uniform random source.

Continuous samplers in MLX-Bayes are built on :func:`uniform` and integer
draws on :func:`randint`, which works from raw random bits. Randomness is never
drawn from a global generator: operations take an explicit MLX key (or a
seed, which is turned into one) and split it as they go. The same key always
yields the same draws.
"""

import mlx.core as mx
import numpy as np

from mlx_bayes.errors import ParameterError

# widest integer range randint can draw from
INDEX_SPAN = 1 << 48


def prng_key(seed=None):
    """Build a random key.

    Parameters
    ----------
    seed : int, optional
        Seed for a reproducible key. If omitted, a seed is taken from
        OS entropy and the resulting stream is not reproducible.

    Returns
    -------
    key : mlx.core.array
        MLX random key
    """
    if seed is None:
        seed = int(np.random.SeedSequence().entropy % (2**32))
    return mx.random.key(int(seed))


def resolve_key(key=None, seed=None):
    """Turn the optional ``key``/``seed`` arguments of a call into a key.

    An explicit key takes precedence over a seed.
    """
    if key is not None:
        return key
    return prng_key(seed)


def split(key, num=2):
    """Split a key into ``num`` independent subkeys."""
    return mx.random.split(key, num)


def uniform(key, shape=()):
    """Draw uniform values in [0, 1), one draw per element of ``shape``."""
    return mx.random.uniform(shape=shape, key=key)


def _index_bits(key, shape):
    """Uniform integers in [0, 2**48), built from two 32-bit words per element."""
    high_key, low_key = mx.random.split(key)
    high = np.array(mx.random.bits(shape, key=high_key)).astype(np.int64) >> 16
    low = np.array(mx.random.bits(shape, key=low_key)).astype(np.int64)
    return (high << 32) | low


def _below(key, bounds):
    """Draw integers uniformly from ``[0, bound)`` for each element of ``bounds``.

    A draw at or above the largest multiple of its bound that fits in 48 bits
    is redrawn, so the result carries no modulo bias.
    """
    bounds = np.asarray(bounds, dtype=np.int64)
    limits = INDEX_SPAN - INDEX_SPAN % bounds
    result = np.zeros(bounds.shape, dtype=np.int64)
    pending = np.ones(bounds.shape, dtype=bool)
    while pending.any():
        key, draw_key = mx.random.split(key)
        r = _index_bits(draw_key, bounds.shape)
        accept = pending & (r < limits)
        result[accept] = r[accept] % bounds[accept]
        pending &= ~accept
    return result


def randint(key, low, high, shape=()):
    """Draw integers uniformly from ``[low, high)``.

    Ranges up to ``INDEX_SPAN`` (2**48) wide are supported. The result is
    int32 when both bounds fit in 32 bits and int64 otherwise.
    """
    low, high = int(low), int(high)
    if high <= low:
        raise ParameterError(f"randint requires low < high, got [{low}, {high})")
    if high - low > INDEX_SPAN:
        raise ParameterError(f"randint range must not exceed 2**48, got {high - low}")
    if isinstance(shape, int):
        shape = (shape,)
    idx = _below(key, np.full(shape, high - low, dtype=np.int64)) + low
    info = np.iinfo(np.int32)
    dtype = mx.int32 if info.min <= low and high - 1 <= info.max else mx.int64
    return mx.array(idx, dtype=dtype)


def choice(key, values, size, replace=True):
    """Sample ``size`` elements of ``values``.

    Parameters
    ----------
    key : mlx.core.array
        Random key
    values : sequence or array
        Population to sample from (first axis)
    size : int
        Number of elements to draw
    replace : bool, optional
        Sample with replacement (default) or without

    Returns
    -------
    sample : numpy.ndarray
        The selected elements
    """
    values = np.asarray(values)
    n = len(values)
    if n == 0:
        raise ParameterError("cannot sample from an empty population")
    if replace:
        idx = np.array(randint(key, 0, n, (size,)))
        return values[idx]
    if size > n:
        raise ParameterError(
            f"cannot draw {size} elements without replacement from {n}"
        )
    return permutation(key, values)[:size]


def permutation(key, values):
    """Return a random permutation of ``values`` (Fisher-Yates)."""
    values = np.array(values, copy=True)
    n = len(values)
    if n < 2:
        return values
    # swap partner for position i is uniform on [0, i], highest index first
    partners = _below(key, np.arange(n, 1, -1, dtype=np.int64))
    for i in range(n - 1, 0, -1):
        j = partners[n - 1 - i]
        values[[i, j]] = values[[j, i]]
    return values
