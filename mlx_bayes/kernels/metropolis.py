"""Metropolis-Hastings MCMC sampler."""

import logging
import math
import warnings

import mlx.core as mx
import numpy as np

from mlx_bayes.distributions.base import _standard_normal
from mlx_bayes.errors import (
    DegenerateChainWarning,
    ParameterError,
    TargetEvaluationError,
)
from mlx_bayes.random import resolve_key, uniform

logger = logging.getLogger(__name__)

DEFAULT_PROPOSAL_SCALE = 0.1
PROGRESS_EVERY = 500


def _evaluate(log_prob_fn, params):
    """Evaluate a caller log density as a Python float.

    Exceptions raised by ``log_prob_fn`` propagate unchanged. NaN and +inf
    are not valid log densities and raise TargetEvaluationError.
    """
    value = float(log_prob_fn(params))
    if math.isnan(value) or value == math.inf:
        raise TargetEvaluationError(f"log density evaluated to {value}")
    return value


def _log_uniforms(key, num):
    """One uniform draw per accept/reject step, on the log scale."""
    u = np.array(uniform(key, (num,)), dtype=np.float64)
    with np.errstate(divide="ignore"):
        return np.log(u)


def _stack_trace(samples):
    return {
        name: mx.stack([mx.array(v) for v in values])
        for name, values in samples.items()
    }


def _check_run(num_samples):
    if int(num_samples) != num_samples or num_samples < 1:
        raise ParameterError(f"num_samples must be a positive integer, got {num_samples}")


def _warn_if_degenerate(n_accepted, num_samples, method):
    if n_accepted == 0:
        warnings.warn(
            f"{method} accepted none of {num_samples} proposals; "
            "the chain never left its initial state",
            DegenerateChainWarning,
            stacklevel=3,
        )


def metropolis_hastings(
    log_prob_fn,
    initial_params,
    num_samples=1000,
    proposal=None,
    proposal_scale=DEFAULT_PROPOSAL_SCALE,
    key=None,
    seed=None,
    verbose=False
):
    """
    Metropolis-Hastings MCMC sampler.

    Each iteration proposes a candidate and accepts it with probability
        min(1, exp(log π(candidate) - log π(current)))
    using one uniform draw. Only the density ratio enters, so ``log_prob_fn``
    may be unnormalised.

    The proposal is assumed symmetric. For an asymmetric proposal q, fold
    log q(current | candidate) - log q(candidate | current) into
    ``log_prob_fn``.

    Parameters
    ----------
    log_prob_fn : callable
        Function that computes log probability given parameters dict
    initial_params : dict
        Initial parameter values {name: value}
    num_samples : int, optional
        Number of iterations; every iteration is recorded (default: 1000)
    proposal : callable, optional
        ``proposal(key, params) -> params`` drawing a candidate. Defaults to
        a Gaussian random walk θ' = θ + ε, ε ~ N(0, proposal_scale²I)
    proposal_scale : float, optional
        Scale of the default random-walk proposal (default: 0.1)
    key : mlx.core.array, optional
        Random key; with ``seed`` unset and no key the run is not reproducible
    seed : int, optional
        Seed used when no key is given
    verbose : bool, optional
        If True, log progress updates (default: False)

    Returns
    -------
    samples : dict
        Dictionary of parameter traces {name: mx.array}, iteration axis first
    acceptance_rate : float
        Fraction of proposals that were accepted

    Raises
    ------
    TargetEvaluationError
        If ``log_prob_fn`` returns NaN or +inf

    Examples
    --------
    >>> def log_prob(params):
    ...     return Normal(0, 1).log_prob(params['x'])
    >>> samples, accept_rate = metropolis_hastings(
    ...     log_prob, {'x': 0.0}, num_samples=1000, seed=0
    ... )
    """
    _check_run(num_samples)
    if proposal is None and not proposal_scale > 0:
        raise ParameterError(f"proposal_scale must be positive, got {proposal_scale}")

    key = resolve_key(key, seed)
    proposal_key, accept_key = mx.random.split(key)
    log_u = _log_uniforms(accept_key, num_samples)

    if proposal is None:
        current_params = {
            k: mx.array(v, dtype=mx.float32) for k, v in initial_params.items()
        }
        noise_keys = mx.random.split(proposal_key, len(current_params))
        noise = {
            name: _standard_normal(subkey, (num_samples,) + tuple(value.shape)) * proposal_scale
            for (name, value), subkey in zip(current_params.items(), noise_keys)
        }

        def propose(i, params):
            return {name: value + noise[name][i] for name, value in params.items()}
    else:
        current_params = dict(initial_params)
        step_keys = mx.random.split(proposal_key, num_samples)

        def propose(i, params):
            return proposal(step_keys[i], params)

    current_log_prob = _evaluate(log_prob_fn, current_params)

    samples = {k: [] for k in current_params.keys()}
    n_accepted = 0

    if verbose:
        logger.info("Running %d Metropolis-Hastings iterations...", num_samples)

    for i in range(num_samples):
        proposed_params = propose(i, current_params)
        proposed_log_prob = _evaluate(log_prob_fn, proposed_params)

        # -inf - -inf is NaN, which compares False and rejects
        if log_u[i] < proposed_log_prob - current_log_prob:
            current_params = proposed_params
            current_log_prob = proposed_log_prob
            n_accepted += 1

        # Store current sample (accepted or rejected proposal)
        for param_name, param_value in current_params.items():
            samples[param_name].append(param_value)

        if verbose and (i + 1) % PROGRESS_EVERY == 0:
            logger.info(
                "  Iteration %d/%d (accept rate: %.2f%%)",
                i + 1, num_samples, 100 * n_accepted / (i + 1),
            )

    acceptance_rate = n_accepted / num_samples
    _warn_if_degenerate(n_accepted, num_samples, "Metropolis-Hastings")

    return _stack_trace(samples), acceptance_rate
