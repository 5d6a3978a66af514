"""
Example 1: Simple Normal Model

Estimate the mean and standard deviation of a normal distribution
from observed data using Metropolis-Hastings sampling.

Model:
    μ ~ Normal(0, 10)     # Prior on mean
    σ ~ HalfNormal(5)     # Prior on std
    y ~ Normal(μ, σ)      # Likelihood
"""

import math

import mlx.core as mx
import numpy as np
import matplotlib.pyplot as plt
from mlx_bayes import Normal, HalfNormal, MCMC


def main():
    print("\n" + "="*70)
    print("Example 1: Simple Normal Model")
    print("="*70 + "\n")

    # Generate synthetic data
    print("Generating synthetic data...")
    n = 100
    true_mu = 5.0
    true_sigma = 2.0
    y_observed = Normal(true_mu, true_sigma).sample(mx.random.key(42), shape=(n,))

    print(f"  True μ: {true_mu}")
    print(f"  True σ: {true_sigma}")
    print(f"  Sample size: {n}\n")

    prior_mu = Normal(0, 10)
    prior_sigma = HalfNormal(5)

    def log_prob(params):
        mu = params['mu']
        sigma = params['sigma']
        # the likelihood is undefined for σ <= 0
        if float(sigma) <= 0:
            return -math.inf

        log_likelihood = mx.sum(Normal(mu, sigma).log_prob(y_observed))
        return prior_mu.log_prob(mu) + prior_sigma.log_prob(sigma) + log_likelihood

    mcmc = MCMC(log_prob)

    samples = mcmc.run(
        initial_params={'mu': 0.0, 'sigma': 1.0},
        num_samples=5000,
        num_warmup=1000,
        proposal_scale=0.3,
        random_seed=0,
    )

    mcmc.print_summary()

    # Compare to true values
    print("\nComparison to true values:")
    summary = mcmc.summary()
    print(f"  μ: true={true_mu:.3f}, estimated={summary['mu']['mean']:.3f}, "
          f"error={abs(true_mu - summary['mu']['mean']):.3f}")
    print(f"  σ: true={true_sigma:.3f}, estimated={summary['sigma']['mean']:.3f}, "
          f"error={abs(true_sigma - summary['sigma']['mean']):.3f}")
    print(f"  Acceptance rate: {mcmc.acceptance_rate:.2%}")

    # Visualize results
    print("\nCreating visualization...")
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))

    for col, (name, true_value) in enumerate([('mu', true_mu), ('sigma', true_sigma)]):
        axes[0, col].plot(samples[name], alpha=0.7, linewidth=0.5)
        axes[0, col].axhline(true_value, color='red', linestyle='--',
                             linewidth=2, label='True value')
        axes[0, col].set_xlabel('Iteration')
        axes[0, col].set_title(f'Trace Plot: {name}')
        axes[0, col].legend()
        axes[0, col].grid(alpha=0.3)

        axes[1, col].hist(samples[name], bins=50, alpha=0.7, density=True,
                          edgecolor='black', linewidth=0.5)
        axes[1, col].axvline(true_value, color='red', linestyle='--',
                             linewidth=2, label='True value')
        axes[1, col].axvline(np.mean(samples[name]), color='blue', linestyle='-',
                             linewidth=2, label='Posterior mean')
        axes[1, col].set_xlabel(name)
        axes[1, col].set_ylabel('Density')
        axes[1, col].set_title(f'Posterior Distribution: {name}')
        axes[1, col].legend()
        axes[1, col].grid(alpha=0.3)

    plt.suptitle('MLX-Bayes: Simple Normal Model', fontsize=16, y=0.995)
    plt.tight_layout()

    output_file = '01_simple_normal_results.png'
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"Saved visualization to: {output_file}")

    print("\n" + "="*70)
    print("Example completed.")
    print("="*70 + "\n")


if __name__ == "__main__":
    main()
