"""Base class for goodness-of-fit scoring models."""

import logging
import math
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.distribution import FittedDistribution
from ..core.estimation import EstimationResult
from ..distributions.registry import DistributionRegistry, create_distribution
from ..moda.metric import Metric, Score
from .empirical import order_statistics

logger = logging.getLogger(__name__)


class PDFScoringModel(ABC):
    """
    A goodness-of-fit algorithm producing a Score for one metric.

    Scoring is total: empty data, non-finite intermediate results and
    numerical errors raised by the distribution all degrade to the metric's
    bad score, with a diagnostic log entry. Models hold no state beyond their
    configuration, so one instance may score many candidates, and
    `new_instance()` yields an independent copy for parallel use.

    Subclasses implement `_statistic()` on the sorted data and may override
    `_to_score()` to apply a metric-specific edge-case policy.
    """

    def __init__(self, metric: Metric):
        self._metric = metric

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def name(self) -> str:
        return self._metric.name

    @abstractmethod
    def new_instance(self) -> "PDFScoringModel":
        """Fresh copy with the same configuration."""
        ...

    @abstractmethod
    def _statistic(self, x: NDArray[np.float64], distribution: FittedDistribution) -> float:
        """Compute the raw statistic on sorted, non-empty data."""
        ...

    def _to_score(self, value: float, n: int, distribution: FittedDistribution) -> Score:
        if not math.isfinite(value):
            logger.debug("%s statistic is not finite (%s), using bad score", self.name, value)
            return self._metric.bad_score()
        return self._metric.score(value)

    def score(self, data: ArrayLike, distribution: FittedDistribution) -> Score:
        """
        Score how well the distribution fits the data.

        Args:
            data: Observations, in the space the distribution was fit in
            distribution: Fitted distribution to evaluate

        Returns:
            Score for this model's metric
        """
        x = order_statistics(data)
        if x.size == 0:
            logger.debug("%s received empty data, using bad score", self.name)
            return self._metric.bad_score()
        try:
            with np.errstate(all="ignore"):
                value = float(self._statistic(x, distribution))
        except (ArithmeticError, ValueError) as exc:
            logger.warning("%s scoring failed for %s: %s", self.name, distribution, exc)
            return self._metric.bad_score()
        return self._to_score(value, x.size, distribution)

    def score_estimation(
        self,
        result: EstimationResult,
        registry: type[DistributionRegistry] = DistributionRegistry,
    ) -> Score:
        """Score an estimation result. See `score_estimation()`."""
        return score_estimation(self, result, registry)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(metric={self._metric.name!r})"


def score_estimation(
    model: PDFScoringModel,
    result: EstimationResult,
    registry: type[DistributionRegistry] = DistributionRegistry,
) -> Score:
    """
    Score an estimation result with a scoring model.

    A result without usable parameters, or whose parameters cannot be turned
    into a distribution, receives the model's bad score without running the
    algorithm. Otherwise the model scores the data the parameters were
    estimated on: the shifted data if the data was shifted, else the
    original data.

    Args:
        model: Scoring model to apply
        result: Estimation result to score
        registry: Registry used to materialize the distribution

    Returns:
        Score for the model's metric
    """
    return score_resolved(model, result, resolve_distribution(result, registry))


def resolve_distribution(
    result: EstimationResult,
    registry: type[DistributionRegistry] = DistributionRegistry,
) -> FittedDistribution | None:
    """The distribution for a result's parameters, or None for a failed fit."""
    if not result.is_usable:
        logger.debug("Estimation by %s failed: %s", result.estimator, result.message)
        return None
    return create_distribution(result.parameters, registry)


def score_resolved(
    model: PDFScoringModel,
    result: EstimationResult,
    distribution: FittedDistribution | None,
) -> Score:
    """Score the result's test data against an already resolved distribution."""
    if distribution is None:
        return model.metric.bad_score()
    return model.score(result.test_data, distribution)
