"""Approximate Bayesian computation by rejection."""

import logging
import math
from dataclasses import dataclass

import mlx.core as mx
import numpy as np

from mlx_bayes.errors import ParameterError, RejectionExhausted, TargetEvaluationError
from mlx_bayes.inference.rejection import DEFAULT_MAX_ATTEMPTS
from mlx_bayes.kernels.metropolis import PROGRESS_EVERY
from mlx_bayes.random import resolve_key

logger = logging.getLogger(__name__)

# prior draws made per vectorised call
_PRIOR_BLOCK = 1024


@dataclass
class ABCResult:
    """Particles accepted by ABC rejection.

    Attributes
    ----------
    particles : numpy.ndarray
        Accepted parameter draws
    distances : numpy.ndarray
        Distance of each particle's simulated data to the observations
    attempts : int
        Prior draws consumed up to and including the last acceptance
    """

    particles: np.ndarray
    distances: np.ndarray
    attempts: int

    @property
    def acceptance_rate(self):
        return len(self.particles) / self.attempts


def abc_rejection(
    prior,
    simulator,
    distance,
    observed,
    epsilon,
    num_particles=100,
    max_attempts=DEFAULT_MAX_ATTEMPTS,
    key=None,
    seed=None,
    verbose=False,
):
    """
    Rejection ABC: keep prior draws whose simulated data lands near the data.

    Each attempt draws θ from ``prior``, simulates a data set with
    ``simulator(key, θ)`` and keeps θ when
    ``distance(simulated, observed) < epsilon``.

    Parameters
    ----------
    prior : Distribution
        Prior law over the parameter
    simulator : callable
        ``simulator(key, theta) -> data``
    distance : callable
        ``distance(simulated, observed) -> float``
    observed : object
        Observed data, passed through to ``distance``
    epsilon : float
        Acceptance threshold, > 0
    num_particles : int, optional
        Number of particles to accept (default: 100)
    max_attempts : int or None, optional
        Cap on prior draws (default: 1,000,000). ``None`` removes the cap;
        the run then ends only once enough particles are accepted, which
        for a small ``epsilon`` may take arbitrarily long.
    key : mlx.core.array, optional
        Random key
    seed : int, optional
        Seed used when no key is given
    verbose : bool, optional
        If True, log progress every 500 attempts

    Returns
    -------
    result : ABCResult

    Raises
    ------
    RejectionExhausted
        If ``max_attempts`` draws yield fewer than ``num_particles``
    TargetEvaluationError
        If ``distance`` returns NaN
    """
    if not epsilon > 0:
        raise ParameterError(f"epsilon must be positive, got {epsilon}")
    if int(num_particles) != num_particles or num_particles < 1:
        raise ParameterError(f"num_particles must be a positive integer, got {num_particles}")
    if max_attempts is not None and (int(max_attempts) != max_attempts or max_attempts < 1):
        raise ParameterError(f"max_attempts must be a positive integer, got {max_attempts}")

    key = resolve_key(key, seed)
    particles = []
    distances = []
    attempts = 0

    while len(particles) < num_particles:
        block = _PRIOR_BLOCK
        if max_attempts is not None:
            if attempts >= max_attempts:
                raise RejectionExhausted(
                    f"accepted {len(particles)} of {num_particles} particles "
                    f"in {attempts} attempts",
                    attempts=attempts,
                    accepted=len(particles),
                )
            block = min(block, max_attempts - attempts)

        key, prior_key, sim_key = mx.random.split(key, 3)
        thetas = np.array(prior.sample(prior_key, shape=(block,)))
        sim_keys = mx.random.split(sim_key, block)

        for theta, subkey in zip(thetas, sim_keys):
            attempts += 1
            d = float(distance(simulator(subkey, theta), observed))
            if math.isnan(d):
                raise TargetEvaluationError("distance evaluated to NaN")
            if d < epsilon:
                particles.append(theta)
                distances.append(d)
                if len(particles) == num_particles:
                    break
            if verbose and attempts % PROGRESS_EVERY == 0:
                logger.info(
                    "  ABC attempt %d: %d/%d particles accepted",
                    attempts, len(particles), num_particles,
                )

    return ABCResult(
        particles=np.stack(particles),
        distances=np.array(distances),
        attempts=attempts,
    )
