"""Point and resampling estimators over finite sample sequences.

All functions accept lists, numpy arrays or MLX arrays and compute in
float64 with numpy. Empty input raises :class:`EmptyInputError`.
"""

import math

import mlx.core as mx
import numpy as np
from scipy.stats import norm

from mlx_bayes.errors import EmptyInputError, ParameterError
from mlx_bayes.random import randint, resolve_key

# bootstrap resamples are drawn in blocks of at most this many indices
_BOOTSTRAP_BLOCK = 2_000_000


def _as_array(samples):
    x = np.asarray(samples, dtype=np.float64)
    if x.size == 0:
        raise EmptyInputError("estimator requires at least one sample")
    return x.reshape(-1)


def mean(samples):
    """Arithmetic mean."""
    return float(np.mean(_as_array(samples)))


def variance(samples):
    """Population variance (divides by n, not n - 1)."""
    x = _as_array(samples)
    return float(np.mean((x - x.mean()) ** 2))


def std(samples):
    """Population standard deviation."""
    return math.sqrt(variance(samples))


def median(samples):
    """Median; the average of the two middle values for even n."""
    x = np.sort(_as_array(samples))
    mid = x.size // 2
    if x.size % 2 == 0:
        return float((x[mid - 1] + x[mid]) / 2)
    return float(x[mid])


def percentile(samples, q):
    """Nearest-rank percentile.

    Parameters
    ----------
    samples : array_like
        Sample sequence
    q : float
        Percentile in [0, 100]

    Returns
    -------
    value : float
        The sorted sample at index round(q / 100 * (n - 1)), halves rounding up
    """
    if not 0 <= q <= 100:
        raise ParameterError(f"percentile must lie in [0, 100], got {q}")
    x = np.sort(_as_array(samples))
    idx = int(math.floor(q / 100 * (x.size - 1) + 0.5))
    return float(x[idx])


def mode(samples):
    """Most frequent value; ties resolve to the smallest value."""
    values, counts = np.unique(_as_array(samples), return_counts=True)
    return float(values[np.argmax(counts)])


def entropy(samples):
    """Plug-in entropy in bits, -Σ p̂(x) log2 p̂(x), over distinct values.

    The estimator is biased low by roughly (k - 1) / (2 n ln 2) for k
    distinct values; no correction is applied. The result lies in
    [0, log2(k)].
    """
    values = np.asarray(samples)
    if values.size == 0:
        raise EmptyInputError("estimator requires at least one sample")
    _, counts = np.unique(values.reshape(-1), return_counts=True)
    p = counts / counts.sum()
    return float(max(0.0, -np.sum(p * np.log2(p))))


def bootstrap(samples, statistic=mean, num_resamples=1000, key=None, seed=None):
    """Bootstrap distribution of a statistic.

    Parameters
    ----------
    samples : array_like
        Observed sample sequence
    statistic : callable, optional
        Maps a 1-D numpy array to a scalar (default: :func:`mean`)
    num_resamples : int, optional
        Number of resamples B (default: 1000)
    key : mlx.core.array, optional
        Random key
    seed : int, optional
        Seed used when no key is given

    Returns
    -------
    stats : numpy.ndarray
        Array of B statistics, one per resample with replacement
    """
    x = _as_array(samples)
    if num_resamples < 1:
        raise ParameterError(f"num_resamples must be positive, got {num_resamples}")
    key = resolve_key(key, seed)
    n = x.size
    rows_per_block = max(1, _BOOTSTRAP_BLOCK // n)
    results = np.empty(num_resamples, dtype=np.float64)
    start = 0
    while start < num_resamples:
        rows = min(rows_per_block, num_resamples - start)
        key, block_key = mx.random.split(key)
        idx = np.array(randint(block_key, 0, n, (rows, n)))
        for row in range(rows):
            results[start + row] = statistic(x[idx[row]])
        start += rows
    return results


def jackknife(samples, statistic=mean):
    """Leave-one-out statistics.

    Returns
    -------
    stats : numpy.ndarray
        Array of n values; element i is the statistic without sample i
    """
    x = _as_array(samples)
    if x.size < 2:
        raise ParameterError("jackknife requires at least two samples")
    return np.array([statistic(np.delete(x, i)) for i in range(x.size)])


def jackknife_standard_error(samples, statistic=mean):
    """Jackknife estimate of the standard error of ``statistic``."""
    loo = jackknife(samples, statistic)
    n = loo.size
    return float(math.sqrt((n - 1) / n * np.sum((loo - loo.mean()) ** 2)))


def confidence_interval(samples, confidence=0.95):
    """Asymptotic normal confidence interval for the mean.

    mean ± z * std / sqrt(n), with z the two-sided normal quantile and std
    the population standard deviation.

    Returns
    -------
    interval : tuple of float
        (lower, upper)
    """
    if not 0 < confidence < 1:
        raise ParameterError(f"confidence must lie in (0, 1), got {confidence}")
    x = _as_array(samples)
    z = norm.ppf(1 - (1 - confidence) / 2)
    half_width = z * std(x) / math.sqrt(x.size)
    center = float(x.mean())
    return center - half_width, center + half_width


def expectation(distribution, fn=None, num_samples=10_000, key=None, seed=None):
    """Monte Carlo estimate of E[fn(X)] for X drawn from ``distribution``.

    Parameters
    ----------
    distribution : Distribution
        Law to sample from
    fn : callable, optional
        Vectorised function of the samples; identity if omitted
    num_samples : int, optional
        Number of draws (default: 10000)

    Returns
    -------
    estimate : float
    """
    if num_samples < 1:
        raise ParameterError(f"num_samples must be positive, got {num_samples}")
    draws = distribution.sample(resolve_key(key, seed), shape=(num_samples,))
    values = draws if fn is None else fn(draws)
    return mean(np.array(values))


def summarize(samples, credible_interval=0.95):
    """Summary statistics of one parameter trace.

    Returns
    -------
    summary : dict
        mean, std, median and the equal-tailed credible interval bounds,
        keyed by their percentile labels (e.g. ``'2.5%'``, ``'97.5%'``)
    """
    if not 0 < credible_interval < 1:
        raise ParameterError(
            f"credible_interval must lie in (0, 1), got {credible_interval}"
        )
    x = _as_array(samples)
    alpha = 1 - credible_interval
    lower_pct = 100 * alpha / 2
    upper_pct = 100 * (1 - alpha / 2)
    return {
        'mean': mean(x),
        'std': std(x),
        'median': median(x),
        f'{lower_pct:.1f}%': float(np.percentile(x, lower_pct)),
        f'{upper_pct:.1f}%': float(np.percentile(x, upper_pct)),
    }
