"""Distribution families available for materializing fitted parameters.

Built-in families are backed by scipy.stats:

- normal (mean, variance)
- exponential (mean)
- gamma (shape, scale)
- lognormal (mean, variance)
- weibull (shape, scale)
- uniform (min, max)
- triangular (min, mode, max)
- beta (alpha, beta)
- generalized_beta (alpha, beta, min, max)
- pearson_type5 (shape, scale)
- logistic (location, scale)
- laplace (location, scale)
"""

from .registry import DistributionRegistry, create_distribution

__all__ = [
    "DistributionRegistry",
    "create_distribution",
]
