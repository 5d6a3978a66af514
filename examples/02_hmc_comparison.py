#!/usr/bin/env python3
"""
Example 2: Comparing HMC vs Metropolis-Hastings

Both samplers target the posterior of a normal mean with known noise, where
the exact answer is available from the conjugate update. HMC needs the
gradient of the log density, which the model supplies in closed form.

Model:
    μ ~ Normal(0, 10)
    y ~ Normal(μ, 2)      # σ known
"""

import time

import mlx.core as mx
import numpy as np
from mlx_bayes import MCMC, Normal, normal_known_variance_update

true_mu = 5.0
noise = 2.0
n_obs = 100

data = Normal(true_mu, noise).sample(mx.random.key(42), shape=(n_obs,))
prior = Normal(0, 10)

print("="*70)
print("Example 2: HMC vs Metropolis Comparison")
print("="*70)


def log_prob(params):
    mu = params['mu']
    return prior.log_prob(mu) + mx.sum(Normal(mu, noise).log_prob(data))


def grad(params):
    mu = params['mu']
    return {'mu': -mu / 100.0 + mx.sum(data - mu) / noise ** 2}


exact = normal_known_variance_update(prior, np.array(data), noise_scale=noise)
print(f"\nExact posterior: {exact}")

results = {}
for method, kwargs in [
    ('metropolis', {'proposal_scale': 0.5}),
    ('hmc', {'step_size': 0.05, 'num_leapfrog_steps': 10}),
]:
    print("\n" + "="*70)
    print(f"{method.upper()} SAMPLING")
    print("="*70)

    mcmc = MCMC(log_prob, grad_fn=grad)
    start = time.time()
    samples = mcmc.run({'mu': 0.0}, num_samples=3000, num_warmup=500,
                       method=method, random_seed=42, verbose=False, **kwargs)
    elapsed = time.time() - start

    mcmc.print_summary()
    print(f"Acceptance rate: {mcmc.acceptance_rate:.2%}")
    print(f"Time: {elapsed:.2f}s")
    results[method] = samples['mu']

print("\n" + "="*70)
print("COMPARISON")
print("="*70)
print(f"{'Method':<12} {'Mean':<10} {'Std':<10}")
print(f"{'exact':<12} {float(exact.loc):<10.4f} {float(exact.scale):<10.4f}")
for method, mu in results.items():
    print(f"{method:<12} {np.mean(mu):<10.4f} {np.std(mu):<10.4f}")
