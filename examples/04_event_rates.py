"""
Example 4: Modeling Event Rates

Estimate the rate of a Poisson process (e.g. support tickets per hour) three
ways and compare them:

1. The Gamma-Poisson conjugate update (exact)
2. Importance sampling from a broad proposal
3. ABC: simulate counts for each prior draw and keep close matches

Model:
    λ ~ Gamma(2, scale=1)      # Prior on the rate (mean=2)
    counts ~ Poisson(λ)
"""

import mlx.core as mx
import numpy as np
from mlx_bayes import (
    Gamma,
    Poisson,
    abc_rejection,
    gamma_poisson_update,
    importance_sample,
)


def main():
    print("\n" + "="*70)
    print("Example 4: Modeling Event Rates")
    print("="*70 + "\n")

    true_rate = 3.0
    n_hours = 24
    counts = np.array(Poisson(true_rate).sample(mx.random.key(42), shape=(n_hours,)))
    print(f"  True rate: {true_rate:.2f} events/hour")
    print(f"  Observed total: {counts.sum()} events in {n_hours} hours\n")

    prior = Gamma(2, 1.0)

    # 1. Conjugate update
    posterior = gamma_poisson_update(prior, counts)
    print(f"Conjugate posterior: {posterior}")
    print(f"  mean={float(posterior.mean()):.3f}, std={float(posterior.variance()) ** 0.5:.3f}\n")

    # 2. Importance sampling
    total = float(counts.sum())

    def log_posterior(rate):
        # Poisson log-likelihood up to a constant, vectorised over rate
        return prior.log_prob(rate) + total * mx.log(rate) - n_hours * rate

    result = importance_sample(log_posterior, Gamma(4, 1.0), num_samples=50_000, seed=1)
    mean = float(result.expectation())
    std = float(result.expectation(lambda x: (x - mean) ** 2)) ** 0.5
    print("Importance sampling:")
    print(f"  mean={mean:.3f}, std={std:.3f}, ESS={result.effective_sample_size():.0f}\n")

    # 3. ABC on the total count
    def simulate(key, rate):
        return Poisson(float(rate)).sample(key, shape=(n_hours,))

    def distance(simulated, total):
        return abs(float(mx.sum(simulated)) - total)

    abc = abc_rejection(prior, simulate, distance, observed=float(counts.sum()),
                        epsilon=2.5, num_particles=500, seed=2)
    print("ABC rejection:")
    print(f"  mean={abc.particles.mean():.3f}, std={abc.particles.std():.3f}, "
          f"acceptance={abc.acceptance_rate:.2%}")


if __name__ == "__main__":
    main()
