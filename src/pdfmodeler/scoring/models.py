"""Goodness-of-fit scoring models.

Each model owns one metric and turns (data, fitted distribution) into a Score:

- KSScoringModel: Kolmogorov-Smirnov distance (smaller is better)
- BICScoringModel: Bayesian Information Criterion (smaller is better)
- QQCorrelationScoringModel: Q-Q plot correlation (bigger is better)
- AdjustedQQCorrelationScoringModel: adjusted R^2 of the Q-Q correlation
- PPSSEScoringModel: P-P plot sum of squared errors (smaller is better)
- AndersonDarlingScoringModel: Anderson-Darling A^2 (smaller is better)
- CramerVonMisesScoringModel: Cramer-von Mises W^2 (smaller is better)

References:
    Law, A.M. (2007). Simulation Modeling and Analysis, 4th ed. McGraw-Hill.
    Schwarz, G. (1978). Estimating the Dimension of a Model.
    Annals of Statistics, 6(2), 461-464.
"""

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..core.distribution import FittedDistribution
from ..moda.metric import MAX_VALUE, Direction, Interval, Metric
from .base import PDFScoringModel
from .empirical import EmpDistType, empirical_probabilities

if TYPE_CHECKING:
    from ..config import ScoringConfig

logger = logging.getLogger(__name__)

DEFAULT_BIC_LOWER_LIMIT = -1.0e7
DEFAULT_BIC_UPPER_LIMIT = 1.0e7


def bic(log_likelihood: float, k: int, n: int) -> float:
    """BIC = -2 * LL + k * ln(n)."""
    return float(k * np.log(max(n, 1)) - 2.0 * log_likelihood)


def qq_correlation(
    x: NDArray[np.float64],
    distribution: FittedDistribution,
    kind: EmpDistType = EmpDistType.CONTINUITY1,
) -> float:
    """
    Pearson correlation between theoretical quantiles and order statistics.

    Returns NaN when the correlation is undefined (fewer than two points,
    constant data, or non-finite quantiles).
    """
    if x.size < 2:
        return math.nan
    p = empirical_probabilities(x.size, kind)
    with np.errstate(all="ignore"):
        q = np.asarray(distribution.inv_cdf(p), dtype=float)
        if not np.all(np.isfinite(q)) or np.std(q) == 0.0 or np.std(x) == 0.0:
            return math.nan
        return float(np.corrcoef(q, x)[0, 1])


class KSScoringModel(PDFScoringModel):
    """
    Kolmogorov-Smirnov statistic.

    D = max_i max(i/n - F(x_(i)), F(x_(i)) - (i-1)/n)

    The empirical step CDF is used directly; no plotting positions.
    """

    def __init__(self) -> None:
        super().__init__(
            Metric(
                "KS",
                Interval(0.0, 1.0),
                Direction.SMALLER_IS_BETTER,
                allow_lower_limit_adjustment=False,
                allow_upper_limit_adjustment=True,
                description="Kolmogorov-Smirnov distance between empirical and fitted CDF",
            )
        )

    def new_instance(self) -> "KSScoringModel":
        return KSScoringModel()

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        n = x.size
        f = np.asarray(distribution.cdf(x), dtype=float)
        if not np.all(np.isfinite(f)):
            return math.nan
        i = np.arange(1, n + 1, dtype=float)
        d_plus = np.max(i / n - f)
        d_minus = np.max(f - (i - 1.0) / n)
        return float(max(d_plus, d_minus))


class BICScoringModel(PDFScoringModel):
    """
    Bayesian Information Criterion.

    BIC = -2 * sum(ln f(x_i)) + k * ln(n)

    where k is the number of distribution parameters. A non-finite
    log-likelihood gets the bad score and values outside the limits are
    clamped into them.

    Args:
        lower_limit: Lower limit of the metric domain
        upper_limit: Upper limit of the metric domain
    """

    def __init__(
        self,
        lower_limit: float = DEFAULT_BIC_LOWER_LIMIT,
        upper_limit: float = DEFAULT_BIC_UPPER_LIMIT,
    ):
        self.lower_limit = lower_limit
        self.upper_limit = upper_limit
        super().__init__(
            Metric(
                "BIC",
                Interval(lower_limit, upper_limit),
                Direction.SMALLER_IS_BETTER,
                description="Bayesian Information Criterion",
            )
        )

    def new_instance(self) -> "BICScoringModel":
        return BICScoringModel(self.lower_limit, self.upper_limit)

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        ll = float(distribution.sum_log_likelihood(x))
        if not math.isfinite(ll):
            return math.nan
        return bic(ll, len(distribution.parameters()), x.size)


class QQCorrelationScoringModel(PDFScoringModel):
    """
    Correlation of the Q-Q plot.

    Correlates F^-1(p_i) with x_(i), where p_i are the empirical plotting
    positions. Undefined correlations score 0 and negative correlations are
    clamped to 0.

    Args:
        emp_dist_type: Plotting-position convention
    """

    def __init__(self, emp_dist_type: EmpDistType = EmpDistType.CONTINUITY1):
        self.emp_dist_type = emp_dist_type
        super().__init__(
            Metric(
                "QQ-Correlation",
                Interval(0.0, 1.0),
                Direction.BIGGER_IS_BETTER,
                description="Correlation of theoretical quantiles with order statistics",
            )
        )

    def new_instance(self) -> "QQCorrelationScoringModel":
        return QQCorrelationScoringModel(self.emp_dist_type)

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        return qq_correlation(x, distribution, self.emp_dist_type)


class AdjustedQQCorrelationScoringModel(PDFScoringModel):
    """
    Adjusted R^2 of the Q-Q correlation, penalizing the parameter count d.

    R^2_adj = 1 - (1 - r^2) * (n - 1) / (n - d)

    A non-positive correlation is a bad fit and scores 0 before any
    adjustment, as does n <= d or a non-positive adjusted value. The domain
    limits of this metric are never adjusted.

    Args:
        emp_dist_type: Plotting-position convention
    """

    def __init__(self, emp_dist_type: EmpDistType = EmpDistType.CONTINUITY1):
        self.emp_dist_type = emp_dist_type
        super().__init__(
            Metric(
                "Adjusted QQ-Correlation",
                Interval(0.0, 1.0),
                Direction.BIGGER_IS_BETTER,
                allow_lower_limit_adjustment=False,
                allow_upper_limit_adjustment=False,
                description="Adjusted R-squared of the Q-Q plot correlation",
            )
        )

    def new_instance(self) -> "AdjustedQQCorrelationScoringModel":
        return AdjustedQQCorrelationScoringModel(self.emp_dist_type)

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        r = qq_correlation(x, distribution, self.emp_dist_type)
        if math.isnan(r) or r <= 0.0:
            return 0.0
        n = x.size
        d = len(distribution.parameters())
        if n - d <= 0:
            logger.debug("Adjusted QQ-Correlation undefined for n=%d, d=%d", n, d)
            return 0.0
        adjusted = 1.0 - (1.0 - r * r) * (n - 1.0) / (n - d)
        return max(adjusted, 0.0)


class PPSSEScoringModel(PDFScoringModel):
    """
    Sum of squared errors of the P-P plot.

    SSE = sum_i (F(x_(i)) - p_i)^2

    Args:
        emp_dist_type: Plotting-position convention
    """

    def __init__(self, emp_dist_type: EmpDistType = EmpDistType.CONTINUITY1):
        self.emp_dist_type = emp_dist_type
        super().__init__(
            Metric(
                "PP-SSE",
                Interval(0.0, MAX_VALUE),
                Direction.SMALLER_IS_BETTER,
                description="Sum of squared errors between fitted CDF and plotting positions",
            )
        )

    def new_instance(self) -> "PPSSEScoringModel":
        return PPSSEScoringModel(self.emp_dist_type)

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        f = np.asarray(distribution.cdf(x), dtype=float)
        p = empirical_probabilities(x.size, self.emp_dist_type)
        return float(np.sum((f - p) ** 2))


class AndersonDarlingScoringModel(PDFScoringModel):
    """
    Anderson-Darling statistic.

    A^2 = -n - (1/n) * sum_i (2i - 1) * [ln F(x_(i)) + ln(1 - F(x_(n+1-i)))]

    Observations at CDF values of exactly 0 or 1 make the statistic infinite,
    which scores as the bad score.
    """

    def __init__(self) -> None:
        super().__init__(
            Metric(
                "Anderson-Darling",
                Interval(0.0, MAX_VALUE),
                Direction.SMALLER_IS_BETTER,
                description="Anderson-Darling test statistic",
            )
        )

    def new_instance(self) -> "AndersonDarlingScoringModel":
        return AndersonDarlingScoringModel()

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        n = x.size
        f = np.asarray(distribution.cdf(x), dtype=float)
        i = np.arange(1, n + 1, dtype=float)
        s = np.sum((2.0 * i - 1.0) * (np.log(f) + np.log1p(-f[::-1])))
        return float(-n - s / n)


class CramerVonMisesScoringModel(PDFScoringModel):
    """
    Cramer-von Mises statistic.

    W^2 = 1/(12n) + sum_i ((2i - 1)/(2n) - F(x_(i)))^2
    """

    def __init__(self) -> None:
        super().__init__(
            Metric(
                "Cramer-von Mises",
                Interval(0.0, MAX_VALUE),
                Direction.SMALLER_IS_BETTER,
                description="Cramer-von Mises test statistic",
            )
        )

    def new_instance(self) -> "CramerVonMisesScoringModel":
        return CramerVonMisesScoringModel()

    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        n = x.size
        f = np.asarray(distribution.cdf(x), dtype=float)
        e = (2.0 * np.arange(1, n + 1, dtype=float) - 1.0) / (2.0 * n)
        return float(1.0 / (12.0 * n) + np.sum((e - f) ** 2))


def default_scoring_models(config: "ScoringConfig | None" = None) -> list[PDFScoringModel]:
    """BIC, Anderson-Darling, Cramer-von Mises and QQ-Correlation."""
    if config is None:
        return [
            BICScoringModel(),
            AndersonDarlingScoringModel(),
            CramerVonMisesScoringModel(),
            QQCorrelationScoringModel(),
        ]
    return [
        BICScoringModel(config.bic_lower_limit, config.bic_upper_limit),
        AndersonDarlingScoringModel(),
        CramerVonMisesScoringModel(),
        QQCorrelationScoringModel(config.emp_dist_type),
    ]


def all_scoring_models(config: "ScoringConfig | None" = None) -> list[PDFScoringModel]:
    """Every available scoring model."""
    lower = DEFAULT_BIC_LOWER_LIMIT if config is None else config.bic_lower_limit
    upper = DEFAULT_BIC_UPPER_LIMIT if config is None else config.bic_upper_limit
    kind = EmpDistType.CONTINUITY1 if config is None else config.emp_dist_type
    return [
        KSScoringModel(),
        BICScoringModel(lower, upper),
        QQCorrelationScoringModel(kind),
        AdjustedQQCorrelationScoringModel(kind),
        PPSSEScoringModel(kind),
        AndersonDarlingScoringModel(),
        CramerVonMisesScoringModel(),
    ]
