"""Rejection sampling against a scaled proposal envelope."""

import logging
import math
from dataclasses import dataclass

import mlx.core as mx
import numpy as np

from mlx_bayes.errors import ParameterError, RejectionExhausted, TargetEvaluationError
from mlx_bayes.random import resolve_key, uniform

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1_000_000

# proposals drawn per batch beyond the expected requirement
_BATCH_SLACK = 16


@dataclass
class RejectionResult:
    """Accepted draws from a rejection sampling run.

    Attributes
    ----------
    samples : numpy.ndarray
        Accepted values, ``num_samples`` along the first axis
    attempts : int
        Proposals consumed up to and including the last acceptance
    acceptance_rate : float
        ``num_samples / attempts``; about ``1 / envelope`` when the
        envelope is tight and both densities are normalised
    """

    samples: np.ndarray
    attempts: int
    acceptance_rate: float


def rejection_sample(
    log_target,
    proposal,
    envelope,
    num_samples=1,
    max_attempts=DEFAULT_MAX_ATTEMPTS,
    key=None,
    seed=None,
):
    """
    Draw exact samples from ``log_target`` by rejection.

    A proposal x is accepted when
        u < target(x) / (M * proposal(x))
    for a fresh uniform u, which requires ``target(x) <= M * proposal(x)``
    everywhere. Proposals are drawn in vectorised batches, but attempts are
    counted one proposal at a time, in order.

    Parameters
    ----------
    log_target : callable
        Vectorised log target density, ``log_target(x) -> array``
    proposal : Distribution
        Proposal law with ``sample`` and ``log_prob``
    envelope : float
        Envelope constant M > 0
    num_samples : int, optional
        Number of accepted samples to return (default: 1)
    max_attempts : int, optional
        Cap on the total number of proposals (default: 1,000,000)
    key : mlx.core.array, optional
        Random key
    seed : int, optional
        Seed used when no key is given

    Returns
    -------
    result : RejectionResult

    Raises
    ------
    ParameterError
        If ``envelope``, ``num_samples`` or ``max_attempts`` is not positive
    RejectionExhausted
        If ``max_attempts`` proposals yield fewer than ``num_samples``
        acceptances
    TargetEvaluationError
        If the log target evaluates to NaN or +inf
    """
    if not envelope > 0 or not math.isfinite(envelope):
        raise ParameterError(f"envelope must be positive and finite, got {envelope}")
    if int(num_samples) != num_samples or num_samples < 1:
        raise ParameterError(f"num_samples must be a positive integer, got {num_samples}")
    if int(max_attempts) != max_attempts or max_attempts < 1:
        raise ParameterError(f"max_attempts must be a positive integer, got {max_attempts}")

    key = resolve_key(key, seed)
    log_envelope = math.log(envelope)
    accepted = []
    n_accepted = 0
    attempts = 0
    warned = False

    while n_accepted < num_samples and attempts < max_attempts:
        remaining = num_samples - n_accepted
        batch = min(
            max_attempts - attempts,
            int(math.ceil(remaining * envelope)) + _BATCH_SLACK,
        )
        key, draw_key, accept_key = mx.random.split(key, 3)

        x = proposal.sample(draw_key, shape=(batch,))
        log_t = np.asarray(log_target(x), dtype=np.float64).reshape(-1)
        log_q = np.array(proposal.log_prob(x), dtype=np.float64).reshape(batch, -1).sum(axis=1)
        if np.any(np.isnan(log_t)) or np.any(log_t == np.inf):
            raise TargetEvaluationError("log target evaluated to NaN or +inf")

        with np.errstate(invalid="ignore"):
            log_ratio = np.where(log_t == -np.inf, -np.inf, log_t - log_q - log_envelope)
        if not warned and np.any(log_ratio > 1e-6):
            logger.warning(
                "target exceeds %g x proposal at some draws; samples are biased",
                envelope,
            )
            warned = True

        u = np.array(uniform(accept_key, (batch,)), dtype=np.float64)
        with np.errstate(divide="ignore"):
            hits = np.flatnonzero(np.log(u) < log_ratio)

        if hits.size >= remaining:
            hits = hits[:remaining]
            attempts += int(hits[-1]) + 1
        else:
            attempts += batch
        n_accepted += hits.size
        if hits.size:
            accepted.append(np.array(x)[hits])

    if n_accepted < num_samples:
        raise RejectionExhausted(
            f"accepted {n_accepted} of {num_samples} samples in {attempts} attempts",
            attempts=attempts,
            accepted=n_accepted,
        )

    logger.debug("rejection sampling: %d accepted in %d attempts", n_accepted, attempts)
    return RejectionResult(
        samples=np.concatenate(accepted, axis=0),
        attempts=attempts,
        acceptance_rate=num_samples / attempts,
    )
