"""Gamma distribution and the laws built from it."""

import mlx.core as mx
import numpy as np
from scipy.special import gammaln
from mlx_bayes.distributions.base import (
    Distribution,
    _log_standard_gamma,
    _positive,
    _positive_exp,
    _standard_gamma,
    _standard_normal,
)


class Gamma(Distribution):
    """Gamma distribution.

    The Gamma distribution is a continuous probability distribution for positive real numbers.
    It's commonly used for modeling waiting times, rates, and positive continuous variables.

    Parameters
    ----------
    shape : float or array_like
        Shape parameter k, must be positive
    scale : float or array_like, optional
        Scale parameter θ, must be positive. Default: 1.0

    Notes
    -----
    This uses the shape-scale parameterization; ``rate`` is 1/scale.
    Mean = shape * scale
    Variance = shape * scale^2

    Sampling uses Marsaglia & Tsang (2000). Shapes below one are handled with
    the boost Gamma(k, θ) = Gamma(k + 1, θ) * U^(1/k), applied on the log
    scale. Draws that fall below the smallest normal float32 (about 1.2e-38),
    which is common for k well below 0.1, are returned as that value.

    Examples
    --------
    >>> from mlx_bayes import Gamma
    >>>
    >>> # Exponential-like (shape=1)
    >>> rate_prior = Gamma(1, 1)
    >>>
    >>> # More concentrated around mean
    >>> rate_prior = Gamma(10, 0.5)  # mean = 5
    """

    def __init__(self, shape, scale=1.0):
        """Initialize Gamma distribution.

        Parameters
        ----------
        shape : float or array_like
            Shape parameter, must be positive
        scale : float or array_like, optional
            Scale parameter, must be positive. Default: 1.0
        """
        self.shape = _positive(shape, "shape")
        self.scale = _positive(scale, "scale")

        # log Z = -k*log(θ) - log Γ(k)
        self._log_norm = (
            -self.shape * mx.log(self.scale)
            - mx.array(gammaln(np.asarray(shape, dtype=np.float64)), dtype=mx.float32)
        )

    @property
    def rate(self):
        return 1.0 / self.scale

    def log_prob(self, value):
        """Compute log probability density.

        Parameters
        ----------
        value : array_like
            Value at which to evaluate the log probability

        Returns
        -------
        log_prob : array_like
            Log probability density
        """
        value = mx.array(value)

        # log PDF: (k-1)*log(x) - x/θ - k*log(θ) - log Γ(k)
        safe = mx.where(value > 0, value, 1.0)
        log_prob = (
            self._log_norm +
            (self.shape - 1) * mx.log(safe) -
            safe / self.scale
        )

        # Return -inf for non-positive values
        return mx.where(value > 0, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # scaled on the log scale so small shapes stay above zero
        return _positive_exp(_log_standard_gamma(key, shape, self.shape) + mx.log(self.scale))

    def mean(self):
        """Compute the mean of the distribution.

        Returns
        -------
        mean : array_like
            Mean: shape * scale
        """
        return self.shape * self.scale

    def variance(self):
        """Compute the variance of the distribution.

        Returns
        -------
        variance : array_like
            Variance: shape * scale^2
        """
        return self.shape * (self.scale ** 2)

    def mode(self):
        """Compute the mode of the distribution.

        Returns
        -------
        mode : array_like
            Mode: (shape - 1) * scale if shape >= 1, else 0
        """
        mode = (self.shape - 1) * self.scale
        return mx.where(self.shape >= 1, mode, mx.array(0.0))

    def __repr__(self):
        return f"Gamma(shape={float(self.shape):.3f}, scale={float(self.scale):.3f})"


class ChiSquared(Distribution):
    """Chi-squared distribution with ``df`` degrees of freedom.

    Sampled as Gamma(df/2, 2).
    """

    def __init__(self, df):
        self.df = _positive(df, "df")
        self._gamma = Gamma(np.asarray(df, dtype=np.float64) / 2, 2.0)

    def log_prob(self, value):
        return self._gamma.log_prob(value)

    def _sample(self, key, shape):
        return self._gamma._sample(key, shape)

    def mean(self):
        return self.df

    def variance(self):
        return 2 * self.df

    def __repr__(self):
        return f"ChiSquared(df={float(self.df):.3f})"


class StudentT(Distribution):
    """Student's t distribution with ``df`` degrees of freedom.

    Sampled as Z / sqrt(V / df) with Z ~ Normal(0, 1), V ~ ChiSquared(df).

    Parameters
    ----------
    df : float
        Degrees of freedom, must be positive
    loc : float, optional
        Location shift. Default: 0.0
    scale : float, optional
        Scale, must be positive. Default: 1.0
    """

    def __init__(self, df, loc=0.0, scale=1.0):
        self.df = _positive(df, "df")
        self.loc = mx.array(loc, dtype=mx.float32)
        self.scale = _positive(scale, "scale")
        nu = np.asarray(df, dtype=np.float64)
        self._log_norm = mx.array(
            gammaln((nu + 1) / 2) - gammaln(nu / 2) - 0.5 * np.log(nu * np.pi),
            dtype=mx.float32,
        )

    def log_prob(self, value):
        value = mx.array(value)
        z = (value - self.loc) / self.scale
        return (
            self._log_norm
            - mx.log(self.scale)
            - (self.df + 1) / 2 * mx.log(1 + z * z / self.df)
        )

    def _sample(self, key, shape):
        normal_key, chi_key = mx.random.split(key)
        z = _standard_normal(normal_key, shape)
        v = _standard_gamma(chi_key, shape, self.df / 2) * 2.0
        return self.loc + self.scale * z / mx.sqrt(v / self.df)

    def mean(self):
        return self.loc if float(self.df) > 1 else mx.array(float("nan"))

    def variance(self):
        nu = float(self.df)
        if nu <= 1:
            return mx.array(float("nan"))
        if nu <= 2:
            return mx.array(mx.inf)
        return self.scale ** 2 * nu / (nu - 2)

    def __repr__(self):
        return f"StudentT(df={float(self.df):.3f})"


class FDistribution(Distribution):
    """Fisher-Snedecor F distribution.

    Sampled as (X1 / d1) / (X2 / d2) with independent X1 ~ ChiSquared(d1),
    X2 ~ ChiSquared(d2).
    """

    def __init__(self, d1, d2):
        self.d1 = _positive(d1, "d1")
        self.d2 = _positive(d2, "d2")
        a = np.asarray(d1, dtype=np.float64) / 2
        b = np.asarray(d2, dtype=np.float64) / 2
        self._log_norm = mx.array(
            a * np.log(2 * a) + b * np.log(2 * b) - (gammaln(a) + gammaln(b) - gammaln(a + b)),
            dtype=mx.float32,
        )

    def log_prob(self, value):
        value = mx.array(value)
        safe = mx.where(value > 0, value, 1.0)
        log_prob = (
            self._log_norm
            + (self.d1 / 2 - 1) * mx.log(safe)
            - (self.d1 + self.d2) / 2 * mx.log(self.d2 + self.d1 * safe)
        )
        return mx.where(value > 0, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        k1, k2 = mx.random.split(key)
        x1 = _standard_gamma(k1, shape, self.d1 / 2) * 2.0
        x2 = _standard_gamma(k2, shape, self.d2 / 2) * 2.0
        return (x1 / self.d1) / (x2 / self.d2)

    def mean(self):
        d2 = float(self.d2)
        return d2 / (d2 - 2) if d2 > 2 else float("nan")

    def variance(self):
        d1, d2 = float(self.d1), float(self.d2)
        if d2 <= 4:
            return float("nan")
        return 2 * d2 ** 2 * (d1 + d2 - 2) / (d1 * (d2 - 2) ** 2 * (d2 - 4))

    def __repr__(self):
        return f"FDistribution(d1={float(self.d1):.3f}, d2={float(self.d2):.3f})"
