"""High-level MCMC inference interface."""

import logging

import mlx.core as mx
import numpy as np
from mlx_bayes.kernels.metropolis import metropolis_hastings
from mlx_bayes.kernels.hmc import hmc
from mlx_bayes.random import resolve_key
from mlx_bayes.stats import summarize

logger = logging.getLogger(__name__)


class MCMC:
    """High-level MCMC inference interface.

    Provides a clean API for running MCMC sampling with various algorithms.

    Parameters
    ----------
    log_prob_fn : callable
        Function that computes log probability given parameters dict
    grad_fn : callable, optional
        Gradient of ``log_prob_fn`` returning a dict; required for HMC

    Examples
    --------
    >>> from mlx_bayes import Normal, MCMC
    >>>
    >>> def log_prob(params):
    ...     mu = params['mu']
    ...     return Normal(0, 10).log_prob(mu)
    >>>
    >>> mcmc = MCMC(log_prob)
    >>> samples = mcmc.run({'mu': 0.0}, num_samples=1000, random_seed=0)
    >>> print(f"Mean: {np.mean(samples['mu']):.3f}")
    """

    def __init__(self, log_prob_fn, grad_fn=None):
        self.log_prob_fn = log_prob_fn
        self.grad_fn = grad_fn
        self.samples = None
        self.acceptance_rate = None

    def run(
        self,
        initial_params,
        num_samples=1000,
        num_warmup=1000,
        method='metropolis',
        random_seed=None,
        key=None,
        verbose=True,
        **kwargs
    ):
        """
        Run MCMC sampling.

        Warmup iterations run the same fixed kernel and are discarded; the
        last warmup state seeds the kept chain. Nothing is tuned during
        warmup.

        Parameters
        ----------
        initial_params : dict
            Initial parameter values {name: value}
        num_samples : int, optional
            Number of samples to keep after warmup (default: 1000)
        num_warmup : int, optional
            Number of warmup iterations to discard (default: 1000)
        method : str, optional
            Sampling method: 'metropolis' or 'hmc' (default: 'metropolis')
        random_seed : int, optional
            Random seed for reproducibility
        key : mlx.core.array, optional
            Random key; takes precedence over ``random_seed``
        verbose : bool, optional
            If True, log progress information (default: True)
        **kwargs
            Additional arguments passed to the kernel:
            - For Metropolis: proposal, proposal_scale
            - For HMC: step_size, num_leapfrog_steps

        Returns
        -------
        samples : dict
            Dictionary of parameter samples {name: np.array of values}

        Raises
        ------
        ValueError
            If unknown sampling method specified
        """
        if method == 'metropolis':
            def sampler(params, n, subkey):
                return metropolis_hastings(
                    self.log_prob_fn, params, num_samples=n,
                    key=subkey, verbose=verbose, **kwargs
                )
        elif method == 'hmc':
            if self.grad_fn is None:
                raise ValueError("HMC requires grad_fn")

            def sampler(params, n, subkey):
                return hmc(
                    self.log_prob_fn, self.grad_fn, params, num_samples=n,
                    key=subkey, verbose=verbose, **kwargs
                )
        else:
            raise ValueError(f"Unknown sampling method: {method}")

        warmup_key, sample_key = mx.random.split(resolve_key(key, random_seed))

        if verbose:
            logger.info("MLX-Bayes: %s sampling", method.upper())

        # Warmup phase
        if num_warmup > 0:
            if verbose:
                logger.info("Warmup phase: %d samples", num_warmup)
            warmup_samples, warmup_accept = sampler(initial_params, num_warmup, warmup_key)
            if verbose:
                logger.info("Warmup acceptance rate: %.2f%%", 100 * warmup_accept)

            # Use last warmup sample as starting point
            start = {k: v[-1] for k, v in warmup_samples.items()}
        else:
            start = initial_params

        # Sampling phase
        if verbose:
            logger.info("Sampling phase: %d samples", num_samples)
        samples, self.acceptance_rate = sampler(start, num_samples, sample_key)

        if verbose:
            logger.info("Sampling acceptance rate: %.2f%%", 100 * self.acceptance_rate)

        # Convert to numpy arrays
        self.samples = {k: np.array(v) for k, v in samples.items()}

        return self.samples

    def summary(self, credible_interval=0.95):
        """
        Compute summary statistics for samples.

        Parameters
        ----------
        credible_interval : float, optional
            Credible interval width (default: 0.95 for 95% CI)

        Returns
        -------
        summary : dict
            Dictionary with summary statistics for each parameter

        Raises
        ------
        ValueError
            If sampling hasn't been run yet
        """
        if self.samples is None:
            raise ValueError("Must run sampling first. Call run() method.")

        return {
            param_name: summarize(param_samples, credible_interval)
            for param_name, param_samples in self.samples.items()
        }

    def print_summary(self, credible_interval=0.95):
        """Print summary statistics in a formatted table."""
        summary = self.summary(credible_interval)

        print("\nPosterior Summary:")
        print("="*80)
        print(f"{'Parameter':<15} {'Mean':<10} {'Std':<10} {'Median':<10} {f'{int(credible_interval*100)}% CI':<20}")
        print("-"*80)

        for param_name, stats in summary.items():
            ci_lower = list(stats.values())[3]  # Lower percentile
            ci_upper = list(stats.values())[4]  # Upper percentile
            ci_str = f"[{ci_lower:.3f}, {ci_upper:.3f}]"

            print(f"{param_name:<15} {stats['mean']:<10.3f} {stats['std']:<10.3f} "
                  f"{stats['median']:<10.3f} {ci_str:<20}")

        print("="*80)
