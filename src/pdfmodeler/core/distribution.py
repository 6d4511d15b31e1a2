"""Fitted distribution protocol and a scipy.stats adapter."""

from typing import Mapping, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats


@runtime_checkable
class FittedDistribution(Protocol):
    """
    Protocol for a fully parameterized continuous distribution.

    This is the only capability the scoring engine needs from a fit. All
    functions accept scalars or arrays and evaluate element-wise.
    """

    def cdf(self, x: ArrayLike) -> ArrayLike:
        """Cumulative distribution function."""
        ...

    def pdf(self, x: ArrayLike) -> ArrayLike:
        """Probability density function."""
        ...

    def inv_cdf(self, p: ArrayLike) -> ArrayLike:
        """Inverse CDF (quantile function)."""
        ...

    def parameters(self) -> tuple[float, ...]:
        """Ordered parameter values; the count is used as the model dimension."""
        ...

    def sum_log_likelihood(self, data: ArrayLike) -> float:
        """Sum of log densities over the data."""
        ...


class ScipyDistribution:
    """
    Adapter exposing a frozen scipy.stats continuous distribution as a
    FittedDistribution.

    Example:
        >>> dist = ScipyDistribution(stats.norm(loc=0, scale=1), {"mean": 0.0, "sd": 1.0}, "normal")
        >>> float(dist.cdf(0.0))
        0.5
    """

    def __init__(
        self,
        frozen,
        parameter_values: Mapping[str, float],
        family: str | None = None,
    ):
        self.frozen = frozen
        self.parameter_values = dict(parameter_values)
        self.family = family or frozen.dist.name

    def cdf(self, x: ArrayLike) -> NDArray[np.float64]:
        return self.frozen.cdf(x)

    def pdf(self, x: ArrayLike) -> NDArray[np.float64]:
        return self.frozen.pdf(x)

    def inv_cdf(self, p: ArrayLike) -> NDArray[np.float64]:
        return self.frozen.ppf(p)

    def parameters(self) -> tuple[float, ...]:
        return tuple(self.parameter_values.values())

    def sum_log_likelihood(self, data: ArrayLike) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.sum(self.frozen.logpdf(np.asarray(data, dtype=float))))

    def __str__(self) -> str:
        inner = ", ".join(f"{k}={v:.6g}" for k, v in self.parameter_values.items())
        return f"{self.family.capitalize()}({inner})"

    def __repr__(self) -> str:
        return f"ScipyDistribution({self})"
