"""
Example 3: Bayesian A/B Testing

Compare conversion rates between two versions (A and B) with the
Beta-Binomial conjugate update, then estimate P(p_B > p_A) by sampling
the two closed-form posteriors.

Model:
    p_A ~ Beta(1, 1)           # Prior on conversion rate A (uniform)
    p_B ~ Beta(1, 1)           # Prior on conversion rate B (uniform)
    conversions_A ~ Binomial(n_A, p_A)
    conversions_B ~ Binomial(n_B, p_B)
"""

import mlx.core as mx
import numpy as np
import matplotlib.pyplot as plt
from mlx_bayes import Beta, Binomial, beta_binomial_update, stats


def main():
    print("\n" + "="*70)
    print("Example 3: Bayesian A/B Testing")
    print("="*70 + "\n")

    data_key, sample_key = mx.random.split(mx.random.key(42))
    key_A, key_B = mx.random.split(data_key)

    # Version A: 1000 visitors, 12% conversion rate
    n_A, true_p_A = 1000, 0.12
    conversions_A = int(Binomial(n_A, true_p_A).sample(key_A))

    # Version B: 1000 visitors, 15% conversion rate
    n_B, true_p_B = 1000, 0.15
    conversions_B = int(Binomial(n_B, true_p_B).sample(key_B))

    print(f"  Version A: {conversions_A}/{n_A} conversions ({100*conversions_A/n_A:.2f}%)")
    print(f"  Version B: {conversions_B}/{n_B} conversions ({100*conversions_B/n_B:.2f}%)")
    print(f"  True rates: A={100*true_p_A:.1f}%, B={100*true_p_B:.1f}%\n")

    posterior_A = beta_binomial_update(Beta(1, 1), conversions_A, n_A)
    posterior_B = beta_binomial_update(Beta(1, 1), conversions_B, n_B)
    print(f"  Posterior A: {posterior_A}")
    print(f"  Posterior B: {posterior_B}\n")

    key_A, key_B = mx.random.split(sample_key)
    p_A = np.array(posterior_A.sample(key_A, shape=(20_000,)), dtype=np.float64)
    p_B = np.array(posterior_B.sample(key_B, shape=(20_000,)), dtype=np.float64)

    p_B_better = stats.mean(p_B > p_A)
    print(f"P(p_B > p_A) = {p_B_better:.3f}")

    lift = (p_B - p_A) / p_A * 100
    lower, upper = stats.percentile(lift, 2.5), stats.percentile(lift, 97.5)
    print(f"Expected relative lift: {stats.mean(lift):.1f}% "
          f"(95% interval [{lower:.1f}%, {upper:.1f}%])")

    # Visualize results
    print("\nCreating visualization...")
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].hist(p_A, bins=50, alpha=0.6, label='Version A', density=True,
                 color='blue', edgecolor='black', linewidth=0.5)
    axes[0].hist(p_B, bins=50, alpha=0.6, label='Version B', density=True,
                 color='orange', edgecolor='black', linewidth=0.5)
    axes[0].axvline(true_p_A, color='blue', linestyle='--', linewidth=2, label='True A')
    axes[0].axvline(true_p_B, color='orange', linestyle='--', linewidth=2, label='True B')
    axes[0].set_xlabel('Conversion Rate')
    axes[0].set_ylabel('Density')
    axes[0].set_title('Posterior Distributions')
    axes[0].legend()
    axes[0].grid(alpha=0.3)

    axes[1].hist(lift, bins=50, alpha=0.7, density=True,
                 color='purple', edgecolor='black', linewidth=0.5)
    axes[1].axvline(0, color='red', linestyle='--', linewidth=2, label='No lift')
    axes[1].set_xlabel('Relative Lift (%)')
    axes[1].set_ylabel('Density')
    axes[1].set_title(f'Relative Lift\nP(p_B > p_A) = {p_B_better:.3f}')
    axes[1].legend()
    axes[1].grid(alpha=0.3)

    plt.suptitle('MLX-Bayes: Bayesian A/B Testing', fontsize=16, y=0.995)
    plt.tight_layout()

    output_file = '03_ab_testing_results.png'
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"Saved visualization to: {output_file}")


if __name__ == "__main__":
    main()
