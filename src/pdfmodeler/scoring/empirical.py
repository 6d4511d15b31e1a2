"""Empirical probabilities for order statistics."""

from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray


class EmpDistType(Enum):
    """
    Plotting-position convention for the empirical probability of the i-th
    of n order statistics (i = 1..n).

    BASE:        i / n
    CONTINUITY1: (i - 0.5) / n
    CONTINUITY2: (i - 0.375) / (n + 0.25)
    """

    BASE = "base"
    CONTINUITY1 = "continuity1"
    CONTINUITY2 = "continuity2"


def empirical_probabilities(n: int, kind: EmpDistType = EmpDistType.CONTINUITY1) -> NDArray[np.float64]:
    """
    Empirical probabilities for n order statistics.

    Args:
        n: Number of observations, at least 1
        kind: Plotting-position convention

    Returns:
        Array of n increasing probabilities
    """
    if n < 1:
        raise ValueError("The number of observations must be >= 1")
    i = np.arange(1, n + 1, dtype=float)
    if kind is EmpDistType.BASE:
        return i / n
    if kind is EmpDistType.CONTINUITY1:
        return (i - 0.5) / n
    return (i - 0.375) / (n + 0.25)


def order_statistics(data: ArrayLike) -> NDArray[np.float64]:
    """Data sorted ascending as a float array."""
    return np.sort(np.asarray(data, dtype=float).ravel())


def empirical_cdf(data: ArrayLike, x: float) -> float:
    """Proportion of observations <= x; 0.0 for empty data."""
    arr = np.asarray(data, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.count_nonzero(arr <= x)) / arr.size
