"""Hamiltonian Monte Carlo (HMC) kernel implementation using MLX."""

import logging
from typing import Callable, Dict, Optional, Tuple

import mlx.core as mx

from mlx_bayes.distributions.base import _standard_normal
from mlx_bayes.errors import ParameterError, TargetEvaluationError
from mlx_bayes.kernels.metropolis import (
    PROGRESS_EVERY,
    _check_run,
    _evaluate,
    _log_uniforms,
    _stack_trace,
    _warn_if_degenerate,
)
from mlx_bayes.random import resolve_key

logger = logging.getLogger(__name__)


def _gradient(grad_fn, params):
    grads = grad_fn(params)
    missing = set(params) - set(grads)
    if missing:
        raise TargetEvaluationError(
            f"gradient is missing parameters: {sorted(missing)}"
        )
    return {name: mx.array(grads[name]) for name in params}


def leapfrog(grad_fn, params, momentum, step_size, num_steps):
    """Simulate Hamiltonian dynamics with the leapfrog integrator.

    A half step for momentum, ``num_steps`` alternating full steps for
    position and momentum (the last momentum step being a half step).

    Args:
        grad_fn: Gradient of the log probability, ``grad_fn(params) -> dict``.
        params: Starting position.
        momentum: Starting momentum.
        step_size: Integrator step size ε.
        num_steps: Number of leapfrog steps L.

    Returns:
        Position and momentum at the end of the trajectory.
    """
    grads = _gradient(grad_fn, params)
    momentum = {
        name: momentum[name] + 0.5 * step_size * grads[name] for name in params
    }
    for step in range(num_steps):
        params = {name: params[name] + step_size * momentum[name] for name in params}
        grads = _gradient(grad_fn, params)
        scale = step_size if step < num_steps - 1 else 0.5 * step_size
        momentum = {name: momentum[name] + scale * grads[name] for name in params}
    return params, momentum


def hmc(
    log_prob_fn: Callable,
    grad_fn: Callable,
    initial_params: Dict[str, mx.array],
    num_samples: int = 1000,
    step_size: float = 0.1,
    num_leapfrog_steps: int = 10,
    key: Optional[mx.array] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> Tuple[Dict[str, mx.array], float]:
    """Hamiltonian Monte Carlo sampler using gradient information.

    HMC uses the gradient of the log probability to efficiently explore
    the posterior distribution. It simulates Hamiltonian dynamics where
    parameters are particle positions and introduces auxiliary momentum
    variables drawn from independent standard normals.

    The step size and number of leapfrog steps stay fixed for the whole
    run; there is no adaptation. Gradients are supplied by the caller.

    Args:
        log_prob_fn: Function that computes log probability given parameters.
        grad_fn: Function returning a dict of gradients of ``log_prob_fn``
            with respect to each parameter.
        initial_params: Dictionary of initial parameter values.
        num_samples: Number of iterations; every iteration is recorded.
        step_size: Step size ε of the leapfrog integrator.
        num_leapfrog_steps: Number of leapfrog steps L per iteration.
        key: Random key for reproducibility.
        seed: Seed used when no key is given.
        verbose: If True, log progress updates.

    Returns:
        samples: Dictionary mapping parameter names to arrays of samples.
        acceptance_rate: Fraction of accepted trajectories.

    Raises:
        TargetEvaluationError: If the log probability is NaN or +inf, or the
            gradient omits a parameter.
    """
    _check_run(num_samples)
    if not step_size > 0:
        raise ParameterError(f"step_size must be positive, got {step_size}")
    if int(num_leapfrog_steps) != num_leapfrog_steps or num_leapfrog_steps < 1:
        raise ParameterError(
            f"num_leapfrog_steps must be a positive integer, got {num_leapfrog_steps}"
        )

    key = resolve_key(key, seed)
    current_params = {
        k: mx.array(v, dtype=mx.float32) for k, v in initial_params.items()
    }
    param_names = list(current_params.keys())

    momentum_key, accept_key = mx.random.split(key)
    log_u = _log_uniforms(accept_key, num_samples)
    momentum_keys = mx.random.split(momentum_key, len(param_names))
    momenta = {
        name: _standard_normal(subkey, (num_samples,) + tuple(current_params[name].shape))
        for name, subkey in zip(param_names, momentum_keys)
    }

    def hamiltonian(log_prob, momentum):
        """H(q, p) = -log p(q) + 0.5 * ||p||^2"""
        kinetic_energy = sum(float(mx.sum(p ** 2)) for p in momentum.values())
        return -log_prob + 0.5 * kinetic_energy

    current_log_prob = _evaluate(log_prob_fn, current_params)
    all_samples = {name: [] for name in param_names}
    n_accept = 0

    if verbose:
        logger.info("Running %d HMC iterations (step_size=%.4f, L=%d)",
                    num_samples, step_size, num_leapfrog_steps)

    for i in range(num_samples):
        momentum = {name: momenta[name][i] for name in param_names}
        h_init = hamiltonian(current_log_prob, momentum)

        params_prop, momentum_prop = leapfrog(
            grad_fn, current_params, momentum, step_size, num_leapfrog_steps
        )
        # Negate momentum for reversibility; H is unchanged by the sign
        momentum_prop = {name: -val for name, val in momentum_prop.items()}

        proposed_log_prob = _evaluate(log_prob_fn, params_prop)
        h_prop = hamiltonian(proposed_log_prob, momentum_prop)

        if log_u[i] < h_init - h_prop:
            current_params = params_prop
            current_log_prob = proposed_log_prob
            n_accept += 1

        for name in param_names:
            all_samples[name].append(current_params[name])

        if verbose and (i + 1) % PROGRESS_EVERY == 0:
            logger.info(
                "  Iteration %d/%d (accept rate: %.2f%%)",
                i + 1, num_samples, 100 * n_accept / (i + 1),
            )

    acceptance_rate = n_accept / num_samples
    _warn_if_degenerate(n_accept, num_samples, "HMC")

    return _stack_trace(all_samples), acceptance_rate
