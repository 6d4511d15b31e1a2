"""Additive multi-objective decision analysis (MODA) model.

Each alternative is described by one score per metric. Scores are mapped to a
common preference scale by per-metric value functions and combined into an
overall value with a weighted sum:

    V(a) = sum_m w_m * v_m(score_m(a))

References:
    Kirkwood, C.W. (1997). Strategic Decision Making: Multiobjective Decision
    Analysis with Spreadsheets. Duxbury Press.
"""

import logging
import math
from enum import Enum
from typing import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy import stats

from ..exceptions import ConfigValidationError, MetricMismatchError, ModelDefinitionError
from .metric import Direction, Interval, Metric, Score
from .value_functions import (
    DEFAULT_LOGISTIC_FACTOR,
    LinearValueFunction,
    LogisticValueFunction,
    ValueFunction,
)

logger = logging.getLogger(__name__)


class RankingMethod(Enum):
    """How ties are handled when alternatives are ranked on a metric."""

    ORDINAL = "ordinal"
    DENSE = "dense"
    FRACTIONAL = "average"
    MIN = "min"
    MAX = "max"


def range_estimate(minimum: float, maximum: float, n: int) -> Interval:
    """
    Estimate the range of a quantity from its observed extremes.

    Uses the minimum variance unbiased estimators of the limits of a uniform
    distribution based on the order statistics. The estimated lower limit is
    always below the observed minimum and the upper limit above the maximum.

    Args:
        minimum: Observed minimum
        maximum: Observed maximum, strictly greater than minimum
        n: Number of observations, at least 2

    Returns:
        Estimated interval

    References:
        Castillo, E. & Hadi, A.S. (1995). A method for estimating parameters
        and quantiles of distributions of continuous random variables.
        Computational Statistics & Data Analysis, 20(4), 421-439.
    """
    if n < 2:
        raise ValueError("There must be at least two observations.")
    if not minimum < maximum:
        raise ValueError("The minimum must be strictly less than the maximum.")
    spread = (maximum - minimum) / (n - 1.0)
    return Interval(minimum - spread, maximum + spread)


def _check_unique_names(metrics: Iterable[Metric]) -> None:
    names = [m.name for m in metrics]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ModelDefinitionError(f"Metric names must be unique, repeated: {duplicates}")


class AdditiveMODAModel:
    """
    Additive MODA model combining per-metric values into one overall value.

    The model owns its normalization state. Metrics are never modified: when
    domain adjustment is requested, a rescaled copy of the metric's value
    function is used for the current set of alternatives.

    Example:
        >>> model = AdditiveMODAModel.with_linear_value_functions([ks, bic])
        >>> model.define_alternatives({"normal": [ks_score, bic_score], ...})
        >>> model.multi_objective_values()
        {'normal': 0.83, ...}

    Attributes:
        name: Label for the model
        default_ranking_method: Tie handling used by the rank views
    """

    def __init__(
        self,
        definitions: Mapping[Metric, ValueFunction],
        weights: Mapping[str, float] | None = None,
        name: str = "Additive MODA",
        default_ranking_method: RankingMethod = RankingMethod.ORDINAL,
    ):
        self.name = name
        self.default_ranking_method = default_ranking_method
        self._value_functions: dict[Metric, ValueFunction] = {}
        self._scaled_functions: dict[Metric, ValueFunction] = {}
        self._alternatives: dict[str, dict[Metric, Score]] = {}
        self._weights: dict[Metric, float] = {}
        self.define_metrics(definitions)
        if weights is not None:
            self.set_weights(weights)

    @classmethod
    def with_linear_value_functions(
        cls,
        metrics: Iterable[Metric],
        weights: Mapping[str, float] | None = None,
        value_range: Interval = Interval(0.0, 1.0),
        **kwargs,
    ) -> "AdditiveMODAModel":
        """Create a model assigning a linear value function to each metric."""
        metrics = list(metrics)
        _check_unique_names(metrics)
        definitions = {m: LinearValueFunction(m, value_range=value_range) for m in metrics}
        return cls(definitions, weights=weights, **kwargs)

    @classmethod
    def with_logistic_value_functions(
        cls,
        metric_scores: Mapping[Metric, Sequence[float]],
        weights: Mapping[str, float] | None = None,
        factor: float = DEFAULT_LOGISTIC_FACTOR,
        value_range: Interval = Interval(0.0, 1.0),
        **kwargs,
    ) -> "AdditiveMODAModel":
        """
        Create a model with a logistic value function fitted to each metric's scores.

        Args:
            metric_scores: Observed score values for each metric, in metric order
            weights: Metric weights by name (None = equal weights)
            factor: Spread factor passed to `LogisticValueFunction.from_scores`
            value_range: Target range of the values
        """
        definitions = {
            m: LogisticValueFunction.from_scores(m, values, factor, value_range)
            for m, values in metric_scores.items()
        }
        return cls(definitions, weights=weights, **kwargs)

    # ------------------------------------------------------------------
    # definition
    # ------------------------------------------------------------------

    @property
    def metrics(self) -> list[Metric]:
        """Metrics in the order they were defined."""
        return list(self._value_functions.keys())

    @property
    def alternatives(self) -> list[str]:
        """Alternative names in the order they were defined."""
        return list(self._alternatives.keys())

    @property
    def weights(self) -> dict[Metric, float]:
        return dict(self._weights)

    @property
    def value_functions(self) -> dict[Metric, ValueFunction]:
        """Value functions in use for the current alternatives."""
        return dict(self._scaled_functions)

    @property
    def normalization_domains(self) -> dict[Metric, Interval]:
        return {m: f.normalization_domain for m, f in self._scaled_functions.items()}

    def define_metrics(self, definitions: Mapping[Metric, ValueFunction]) -> None:
        """
        Define the metrics and their value functions.

        Replaces any previous metrics. Previously defined alternatives are
        cleared because they may not carry scores for the new metrics. A
        definition whose value function belongs to another metric is ignored.

        Raises:
            ModelDefinitionError: If two metrics share a name
        """
        _check_unique_names(definitions)
        self._value_functions.clear()
        self._scaled_functions.clear()
        self._alternatives.clear()
        for metric, value_function in definitions.items():
            if value_function.metric != metric:
                logger.warning("Value function for %s does not match its metric, ignored", metric.name)
                continue
            self._value_functions[metric] = value_function
            self._scaled_functions[metric] = value_function
        n = len(self._value_functions)
        self._weights = {m: 1.0 / n for m in self._value_functions} if n else {}

    def set_weights(self, weights: Mapping[str, float]) -> None:
        """
        Assign weights by metric name. Metrics not named keep a weight of zero.

        Weights must be non-negative and sum to a positive number; they are
        normalized to sum to one.
        """
        by_name = {m.name: m for m in self.metrics}
        unknown = set(weights) - set(by_name)
        if unknown:
            raise ConfigValidationError(f"Weights given for unknown metrics: {sorted(unknown)}")
        for name, w in weights.items():
            if not math.isfinite(w) or w < 0.0:
                raise ConfigValidationError(f"Weight for metric '{name}' must be finite and >= 0, got {w}")
        total = float(sum(weights.values()))
        if total <= 0.0:
            raise ConfigValidationError("At least one metric weight must be positive")
        self._weights = {m: weights.get(m.name, 0.0) / total for m in self.metrics}

    def define_alternatives(
        self,
        alternatives: Mapping[str, Sequence[Score]],
        adjust_lower_limits: bool = False,
        adjust_upper_limits: bool = True,
    ) -> None:
        """
        Define the alternatives to evaluate and recompute normalization.

        Replaces any previously defined alternatives. Each alternative must
        supply exactly one score for every defined metric; alternatives that
        do not are skipped.

        Args:
            alternatives: Scores for each named alternative
            adjust_lower_limits: Rescale lower domain limits to the observed
                scores, for metrics that allow it
            adjust_upper_limits: Rescale upper domain limits to the observed
                scores, for metrics that allow it
        """
        if not self._value_functions:
            raise ModelDefinitionError("There were no metrics defined for the model")
        self._alternatives.clear()
        for name, scores in alternatives.items():
            if self._has_valid_scores(scores):
                self._alternatives[name] = {s.metric: s for s in scores}
            else:
                logger.warning("Alternative %s does not have a score for every metric, skipped", name)
        self._rescale_metric_domains(adjust_lower_limits, adjust_upper_limits)

    def _has_valid_scores(self, scores: Sequence[Score]) -> bool:
        if len(scores) != len(self._value_functions):
            return False
        metrics = {s.metric for s in scores}
        return metrics == set(self._value_functions)

    def _rescale_metric_domains(self, adjust_lower: bool, adjust_upper: bool) -> None:
        self._scaled_functions = dict(self._value_functions)
        if not (adjust_lower or adjust_upper):
            return
        for metric, value_function in self._value_functions.items():
            if not value_function.rescalable:
                continue
            # penalty bounds would stretch the range to the domain limits
            observed = [
                s.value for s in (a[metric] for a in self._alternatives.values()) if not s.penalized
            ]
            if len(observed) < 2 or min(observed) == max(observed):
                continue
            estimate = range_estimate(min(observed), max(observed), len(observed))
            lower, upper = metric.domain.lower, metric.domain.upper
            if adjust_lower and metric.allow_lower_limit_adjustment:
                lower = max(estimate.lower, metric.domain.lower)
            if adjust_upper and metric.allow_upper_limit_adjustment:
                upper = min(estimate.upper, metric.domain.upper)
            domain = Interval(lower, upper)
            if domain != metric.domain:
                logger.debug("Rescaled normalization domain of %s to %s", metric.name, domain)
            self._scaled_functions[metric] = value_function.with_domain(domain)

    # ------------------------------------------------------------------
    # score and value views
    # ------------------------------------------------------------------

    def _score(self, alternative: str, metric: Metric) -> Score:
        try:
            return self._alternatives[alternative][metric]
        except KeyError:
            raise KeyError(f"Unknown alternative/metric: {alternative}/{metric.name}") from None

    def metric_scores(self, metric: Metric) -> list[float]:
        """Raw score values for the metric, one per alternative."""
        return [self._score(a, metric).value for a in self._alternatives]

    def scores_by_metric(self) -> dict[Metric, list[float]]:
        return {m: self.metric_scores(m) for m in self.metrics}

    def metric_values(self, metric: Metric) -> list[float]:
        """Value-function transformed scores for the metric, one per alternative."""
        vf = self._scaled_functions[metric]
        return [vf.value(self._score(a, metric).value) for a in self._alternatives]

    def values_by_metric(self) -> dict[Metric, list[float]]:
        return {m: self.metric_values(m) for m in self.metrics}

    def values_by_alternative(self, alternative: str) -> dict[Metric, float]:
        return {
            m: self._scaled_functions[m].value(self._score(alternative, m).value)
            for m in self.metrics
        }

    def alternative_values_by_metric(self) -> dict[str, dict[Metric, float]]:
        return {a: self.values_by_alternative(a) for a in self._alternatives}

    def multi_objective_value(self, alternative: str) -> float:
        """Weighted sum of the alternative's values across metrics."""
        values = self.values_by_alternative(alternative)
        return float(sum(self._weights[m] * v for m, v in values.items()))

    def multi_objective_values(self) -> dict[str, float]:
        return {a: self.multi_objective_value(a) for a in self._alternatives}

    def check_metrics(self, metrics: Sequence[Metric]) -> None:
        """Raise MetricMismatchError unless metrics equal the model's metrics, in order."""
        if list(metrics) != self.metrics:
            raise MetricMismatchError(
                f"The metrics in the model {[m.name for m in self.metrics]} do not match "
                f"the metrics in the scores {[m.name for m in metrics]}"
            )

    # ------------------------------------------------------------------
    # rank views
    # ------------------------------------------------------------------

    def _metric_ranks(self, metric: Metric, method: RankingMethod) -> NDArray[np.float64]:
        scores = np.asarray(self.metric_scores(metric), dtype=float)
        if metric.direction is Direction.BIGGER_IS_BETTER:
            scores = -scores
        return stats.rankdata(scores, method=method.value).astype(float)

    def alternative_ranks_by_metric(
        self, method: RankingMethod | None = None
    ) -> dict[str, dict[Metric, float]]:
        """Rank of each alternative on each metric; rank 1 is best."""
        method = method or self.default_ranking_method
        names = self.alternatives
        result: dict[str, dict[Metric, float]] = {a: {} for a in names}
        if not names:
            return result
        for metric in self.metrics:
            for a, r in zip(names, self._metric_ranks(metric, method)):
                result[a][metric] = float(r)
        return result

    def alternative_first_rank_counts(self, method: RankingMethod | None = None) -> dict[str, int]:
        """Number of metrics on which each alternative is ranked first."""
        ranks = self.alternative_ranks_by_metric(method)
        return {a: sum(1 for r in by_metric.values() if r == 1.0) for a, by_metric in ranks.items()}

    def alternative_average_ranking(self, method: RankingMethod | None = None) -> dict[str, float]:
        """Mean rank of each alternative across metrics."""
        ranks = self.alternative_ranks_by_metric(method)
        return {a: float(np.mean(list(by_metric.values()))) for a, by_metric in ranks.items()}

    # ------------------------------------------------------------------
    # tabular views
    # ------------------------------------------------------------------

    def alternative_scores_as_dataframe(self, alternative_column: str = "Alternatives") -> pd.DataFrame:
        """Raw scores with one row per alternative and one column per metric."""
        data: dict[str, list] = {alternative_column: self.alternatives}
        for metric, scores in self.scores_by_metric().items():
            data[metric.name] = scores
        return pd.DataFrame(data)

    def alternative_values_as_dataframe(self, alternative_column: str = "Alternatives") -> pd.DataFrame:
        """Metric values plus the overall value, sorted best first."""
        data: dict[str, list] = {alternative_column: self.alternatives}
        for metric, values in self.values_by_metric().items():
            data[metric.name] = values
        data["Overall"] = list(self.multi_objective_values().values())
        df = pd.DataFrame(data)
        return df.sort_values("Overall", ascending=False, kind="stable").reset_index(drop=True)

    def __repr__(self) -> str:
        return (
            f"AdditiveMODAModel(name={self.name!r}, metrics={[m.name for m in self.metrics]}, "
            f"alternatives={len(self._alternatives)})"
        )
