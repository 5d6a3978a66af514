"""Categorical and multinomial distributions."""

import mlx.core as mx
import numpy as np
from scipy.special import gammaln
from mlx_bayes.distributions.base import (
    Distribution,
    _check,
    _count,
    _normalize_weights,
)
from mlx_bayes.errors import ParameterError
from mlx_bayes.random import uniform


def _cumulative(p):
    """Cumulative weights, pinned above one from the last positive weight on."""
    cumsum = np.cumsum(p)
    cumsum[np.flatnonzero(p)[-1]:] = 2.0
    return mx.array(cumsum, dtype=mx.float32)


def _scan(u, cumsum):
    """Index of the first cumulative weight exceeding each uniform draw."""
    return mx.sum((mx.expand_dims(u, -1) >= cumsum).astype(mx.int32), axis=-1)


class Categorical(Distribution):
    """Categorical distribution.

    The Categorical distribution is a discrete probability distribution for a random
    variable that can take one of K possible outcomes. It's commonly used for
    classification, choice modeling, and discrete outcomes.

    Parameters
    ----------
    probs : array_like, optional
        Non-negative weights for each category, normalised to sum to one.
        Either probs or logits must be specified, but not both.
    logits : array_like, optional
        Unnormalized log probabilities. Will be normalized via softmax.
        Either probs or logits must be specified, but not both.

    Examples
    --------
    >>> from mlx_bayes import Categorical
    >>>
    >>> # Uniform over 3 categories
    >>> cat = Categorical(probs=[1/3, 1/3, 1/3])
    >>>
    >>> # Favoring first category
    >>> cat = Categorical(probs=[0.7, 0.2, 0.1])
    >>>
    >>> # Using logits (unnormalized)
    >>> cat = Categorical(logits=[2.0, 1.0, 0.5])
    """

    def __init__(self, probs=None, logits=None):
        """Initialize Categorical distribution.

        Parameters
        ----------
        probs : array_like, optional
            Weights for each category.
        logits : array_like, optional
            Unnormalized log probabilities.
        """
        if probs is None and logits is None:
            raise ParameterError("Either probs or logits must be specified")
        if probs is not None and logits is not None:
            raise ParameterError("Only one of probs or logits can be specified")

        if probs is not None:
            p = _normalize_weights(probs)
        else:
            logits = np.asarray(logits, dtype=np.float64)
            _check(logits.ndim == 1 and logits.size > 0, "logits must be a non-empty 1-D sequence")
            _check(np.all(np.isfinite(logits)), "logits must be finite")
            # softmax(x) = exp(x - max(x)) / sum(exp(x - max(x)))
            exp_logits = np.exp(logits - logits.max())
            p = exp_logits / exp_logits.sum()

        self.probs = mx.array(p, dtype=mx.float32)
        with np.errstate(divide="ignore"):
            self.logits = mx.array(np.log(p), dtype=mx.float32)
        self._cumsum = _cumulative(p)
        self.num_categories = p.shape[0]

    def log_prob(self, value):
        """Compute log probability mass.

        Parameters
        ----------
        value : array_like
            Category index (0 to K-1) at which to evaluate the log probability

        Returns
        -------
        log_prob : array_like
            Log probability mass
        """
        value = mx.array(value, dtype=mx.int32)

        valid = (value >= 0) & (value < self.num_categories)
        safe = mx.where(valid, value, 0)
        log_p = self.logits[safe]

        return mx.where(valid, log_p, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # cumulative-weight scan against one uniform draw per value
        return _scan(uniform(key, shape), self._cumsum)

    def entropy(self):
        """Compute the entropy of the distribution (in nats).

        Returns
        -------
        entropy : array_like
            Entropy: -sum(p * log(p))
        """
        log_probs = mx.where(self.probs > 0, self.logits, mx.array(0.0))
        return -mx.sum(self.probs * log_probs)

    def mode(self):
        """Compute the mode of the distribution.

        Returns
        -------
        mode : array_like
            Category index with highest probability
        """
        return mx.argmax(self.probs)

    def __repr__(self):
        return f"Categorical(num_categories={self.num_categories})"


class Multinomial(Distribution):
    """Multinomial distribution: category counts of ``n`` categorical draws.

    Samples have shape ``shape + (K,)`` and each row sums to ``n``.

    Parameters
    ----------
    n : int
        Number of draws, non-negative
    probs : array_like
        Non-negative category weights, normalised to sum to one
    """

    def __init__(self, n, probs):
        self.n = _count(n, "n")
        p = _normalize_weights(probs)
        self.probs = mx.array(p, dtype=mx.float32)
        self._cumsum = _cumulative(p)
        self.num_categories = p.shape[0]

    def log_prob(self, value):
        counts = np.asarray(value, dtype=np.float64)
        p = np.asarray(self.probs, dtype=np.float64)
        valid = (
            np.all(counts >= 0, axis=-1)
            & np.all(np.floor(counts) == counts, axis=-1)
            & (counts.sum(axis=-1) == self.n)
        )
        with np.errstate(divide="ignore", invalid="ignore"):
            terms = np.where(counts > 0, counts * np.log(p), 0.0)
        log_prob = gammaln(self.n + 1) - gammaln(counts + 1).sum(axis=-1) + terms.sum(axis=-1)
        return mx.array(np.where(valid, log_prob, -np.inf), dtype=mx.float32)

    def _sample(self, key, shape):
        u = uniform(key, shape + (self.n,))
        draws = _scan(u, self._cumsum)
        categories = mx.arange(self.num_categories)
        hits = mx.expand_dims(draws, -1) == categories
        return mx.sum(hits.astype(mx.int32), axis=-2)

    def mean(self):
        return self.n * self.probs

    def __repr__(self):
        return f"Multinomial(n={self.n}, num_categories={self.num_categories})"
