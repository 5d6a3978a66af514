"""Two-block Gibbs sampler."""

import logging

import mlx.core as mx

from mlx_bayes.kernels.metropolis import PROGRESS_EVERY, _check_run
from mlx_bayes.random import resolve_key

logger = logging.getLogger(__name__)


def gibbs(
    conditional1,
    conditional2,
    init1,
    init2,
    num_samples=1000,
    key=None,
    seed=None,
    verbose=False,
):
    """Gibbs sampler over exactly two coordinates.

    Each iteration draws x1 ~ p(x1 | x2) and then x2 ~ p(x2 | x1) using the
    freshly updated x1. Every draw is accepted, so there is no acceptance
    rate.

    Parameters
    ----------
    conditional1 : callable
        ``conditional1(key, x2) -> x1``, a sampler of the first coordinate
        given the second
    conditional2 : callable
        ``conditional2(key, x1) -> x2``
    init1, init2 : float or mlx.core.array
        Initial values. ``init1`` is overwritten by the first update, so only
        ``init2`` influences the chain.
    num_samples : int, optional
        Number of sweeps (default: 1000)
    key : mlx.core.array, optional
        Random key
    seed : int, optional
        Seed used when no key is given
    verbose : bool, optional
        If True, log progress updates

    Returns
    -------
    trace1, trace2 : mlx.core.array
        Traces of the two coordinates, iteration axis first

    Examples
    --------
    >>> # bivariate normal with correlation rho
    >>> cond = lambda key, other: Normal(rho * other, (1 - rho**2) ** 0.5).sample(key)
    >>> xs, ys = gibbs(cond, cond, 0.0, 0.0, num_samples=5000, seed=1)
    """
    _check_run(num_samples)
    key = resolve_key(key, seed)
    keys = mx.random.split(key, 2 * num_samples)

    x1, x2 = init1, init2
    trace1, trace2 = [], []
    for i in range(num_samples):
        x1 = conditional1(keys[2 * i], x2)
        x2 = conditional2(keys[2 * i + 1], x1)
        trace1.append(mx.array(x1))
        trace2.append(mx.array(x2))

        if verbose and (i + 1) % PROGRESS_EVERY == 0:
            logger.info("  Gibbs sweep %d/%d", i + 1, num_samples)

    return mx.stack(trace1), mx.stack(trace2)
