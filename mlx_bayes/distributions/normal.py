"""Normal (Gaussian) and log-normal distributions."""

import mlx.core as mx
from mlx_bayes.distributions.base import (
    Distribution,
    _param,
    _positive,
    _standard_normal,
)


class Normal(Distribution):
    """Normal (Gaussian) distribution.

    The probability density function is:
        p(x | μ, σ) = (1 / (σ√(2π))) exp(-(x - μ)² / (2σ²))

    Parameters
    ----------
    loc : float or mlx.core.array
        Mean (location parameter)
    scale : float or mlx.core.array
        Standard deviation (scale parameter), must be positive

    Examples
    --------
    >>> dist = Normal(0, 1)  # Standard normal
    >>> log_p = dist.log_prob(mx.array(0.0))  # Log prob at zero
    >>> samples = dist.sample(mx.random.key(0), shape=(1000,))
    """

    def __init__(self, loc, scale):
        self.loc = _param(loc, "loc")
        self.scale = _positive(scale, "scale")
        self._log_scale = mx.log(self.scale)
        self._log_norm = -0.5 * mx.log(mx.array(2 * mx.pi))

    def log_prob(self, value):
        """
        Compute log probability density.

        log p(x) = -0.5 * log(2π) - log(σ) - 0.5 * ((x - μ) / σ)²

        Parameters
        ----------
        value : float or mlx.core.array
            Value at which to evaluate log probability

        Returns
        -------
        log_prob : mlx.core.array
            Log probability density at value
        """
        value = mx.array(value)
        var = self.scale ** 2
        log_prob = (
            self._log_norm
            - self._log_scale
            - 0.5 * ((value - self.loc) ** 2) / var
        )
        return log_prob

    def _sample(self, key, shape):
        # Box-Muller: X = μ + σZ with Z = sqrt(-2 ln U1) cos(2π U2)
        return _standard_normal(key, shape) * self.scale + self.loc

    def mean(self):
        return self.loc

    def variance(self):
        return self.scale ** 2

    def __repr__(self):
        return f"Normal(loc={float(self.loc):.3f}, scale={float(self.scale):.3f})"


class LogNormal(Distribution):
    """Log-normal distribution: exp(X) where X ~ Normal(loc, scale).

    Parameters
    ----------
    loc : float
        Mean of the underlying normal
    scale : float
        Standard deviation of the underlying normal, must be positive
    """

    def __init__(self, loc, scale):
        self.loc = _param(loc, "loc")
        self.scale = _positive(scale, "scale")

    def log_prob(self, value):
        value = mx.array(value)
        safe = mx.where(value > 0, value, 1.0)
        log_x = mx.log(safe)
        log_prob = (
            -0.5 * mx.log(mx.array(2 * mx.pi))
            - mx.log(self.scale)
            - log_x
            - 0.5 * ((log_x - self.loc) / self.scale) ** 2
        )
        return mx.where(value > 0, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        return mx.exp(_standard_normal(key, shape) * self.scale + self.loc)

    def mean(self):
        return mx.exp(self.loc + 0.5 * self.scale ** 2)

    def variance(self):
        s2 = self.scale ** 2
        return (mx.exp(s2) - 1) * mx.exp(2 * self.loc + s2)

    def __repr__(self):
        return f"LogNormal(loc={float(self.loc):.3f}, scale={float(self.scale):.3f})"
