"""Self-normalised importance sampling."""

from dataclasses import dataclass

import numpy as np

from mlx_bayes.errors import ParameterError, TargetEvaluationError
from mlx_bayes.random import resolve_key


@dataclass
class ImportanceResult:
    """Weighted samples from an importance sampling run.

    Attributes
    ----------
    samples : numpy.ndarray
        Draws from the proposal
    log_weights : numpy.ndarray
        log target(x) - log proposal(x)
    weights : numpy.ndarray
        Raw weights target(x) / proposal(x)
    normalized_weights : numpy.ndarray
        Weights rescaled to sum to one
    """

    samples: np.ndarray
    log_weights: np.ndarray
    weights: np.ndarray
    normalized_weights: np.ndarray

    def effective_sample_size(self):
        """Kish effective sample size, 1 / Σ w̃²."""
        return float(1.0 / np.sum(self.normalized_weights ** 2))

    def expectation(self, fn=None):
        """Self-normalised estimate of E_target[fn(X)]."""
        values = self.samples if fn is None else np.asarray(fn(self.samples), dtype=np.float64)
        w = self.normalized_weights.reshape((-1,) + (1,) * (np.ndim(values) - 1))
        return np.sum(w * values, axis=0)


def importance_sample(log_target, proposal, num_samples=1000, key=None, seed=None):
    """Importance sampling from ``proposal`` towards ``log_target``.

    The proposal's support must cover the target's; the caller is
    responsible for that. ``log_target`` may be unnormalised.

    Parameters
    ----------
    log_target : callable
        Vectorised log target density, ``log_target(x) -> array``
    proposal : Distribution
        Proposal law with ``sample`` and ``log_prob``
    num_samples : int, optional
        Number of proposal draws (default: 1000)
    key : mlx.core.array, optional
        Random key
    seed : int, optional
        Seed used when no key is given

    Returns
    -------
    result : ImportanceResult
    """
    if int(num_samples) != num_samples or num_samples < 1:
        raise ParameterError(f"num_samples must be a positive integer, got {num_samples}")

    x = proposal.sample(resolve_key(key, seed), shape=(num_samples,))
    log_t = np.asarray(log_target(x), dtype=np.float64).reshape(-1)
    log_q = np.array(proposal.log_prob(x), dtype=np.float64).reshape(-1)
    if np.any(np.isnan(log_t)) or np.any(log_t == np.inf):
        raise TargetEvaluationError("log target evaluated to NaN or +inf")

    with np.errstate(invalid="ignore"):
        log_w = np.where(np.isfinite(log_q), log_t - log_q, -np.inf)
    if not np.any(np.isfinite(log_w)):
        raise TargetEvaluationError("every importance weight is zero")

    shifted = np.exp(log_w - np.max(log_w))
    return ImportanceResult(
        samples=np.array(x),
        log_weights=log_w,
        weights=np.exp(log_w),
        normalized_weights=shifted / shifted.sum(),
    )
