"""Finite mixture of distributions."""

import mlx.core as mx
import numpy as np
from mlx_bayes.distributions.base import Distribution, _check, _normalize_weights
from mlx_bayes.distributions.categorical import _cumulative, _scan
from mlx_bayes.random import uniform


class Mixture(Distribution):
    """Finite mixture: pick a component by weight, then sample it.

    Parameters
    ----------
    components : sequence of Distribution
        Component laws; their samples must share a shape
    weights : array_like, optional
        Non-negative mixing weights, normalised internally. Defaults to
        equal weights.

    Examples
    --------
    >>> bimodal = Mixture([Normal(-2, 0.5), Normal(2, 0.5)], [0.3, 0.7])
    """

    def __init__(self, components, weights=None):
        components = list(components)
        _check(len(components) > 0, "Mixture needs at least one component")
        _check(all(isinstance(c, Distribution) for c in components),
               "Mixture components must be Distribution instances")
        if weights is None:
            weights = np.ones(len(components))
        w = _normalize_weights(weights)
        _check(w.shape[0] == len(components), "need one weight per component")
        self.components = tuple(components)
        self.weights = mx.array(w, dtype=mx.float32)
        self._log_weights = np.log(w, where=w > 0, out=np.full_like(w, -np.inf))
        self._cumsum = _cumulative(w)

    def log_prob(self, value):
        # log-sum-exp over components
        terms = [
            float(lw) + c.log_prob(value)
            for lw, c in zip(self._log_weights, self.components)
        ]
        stacked = mx.stack(terms)
        return mx.logsumexp(stacked, axis=0)

    def _sample(self, key, shape):
        choice_key, *component_keys = mx.random.split(key, len(self.components) + 1)
        idx = _scan(uniform(choice_key, shape), self._cumsum)
        # every component is sampled at full shape, then selected per element
        result = None
        for i, (component, subkey) in enumerate(zip(self.components, component_keys)):
            draws = component._sample(subkey, shape).astype(mx.float32)
            result = draws if result is None else mx.where(idx == i, draws, result)
        return result

    def mean(self):
        means = mx.stack([mx.array(c.mean(), dtype=mx.float32) for c in self.components])
        return mx.sum(self.weights * means)

    def __repr__(self):
        inner = ", ".join(repr(c) for c in self.components)
        return f"Mixture([{inner}])"
