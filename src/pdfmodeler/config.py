"""Configuration for scoring and evaluation runs."""

import math
from dataclasses import dataclass, field
from typing import Mapping

from .exceptions import ConfigValidationError
from .moda.metric import Interval
from .moda.model import RankingMethod
from .moda.value_functions import DEFAULT_LOGISTIC_FACTOR, ScalingFunction
from .scoring.empirical import EmpDistType
from .scoring.models import DEFAULT_BIC_LOWER_LIMIT, DEFAULT_BIC_UPPER_LIMIT


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration for the scoring stage.

    Values are passed explicitly to the scoring models built from this
    configuration, so concurrent runs with different settings do not interact.

    Attributes:
        bic_lower_limit: Lower limit of the BIC metric domain
        bic_upper_limit: Upper limit of the BIC metric domain
        emp_dist_type: Plotting positions for order-statistic based models
        max_workers: Worker threads for batch scoring (None or 1 = sequential)

    Example:
        >>> config = ScoringConfig(bic_upper_limit=1e6, max_workers=4)
        >>> models = all_scoring_models(config)
    """

    bic_lower_limit: float = DEFAULT_BIC_LOWER_LIMIT
    bic_upper_limit: float = DEFAULT_BIC_UPPER_LIMIT
    emp_dist_type: EmpDistType = EmpDistType.CONTINUITY1
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.bic_lower_limit) and math.isfinite(self.bic_upper_limit)):
            raise ConfigValidationError("BIC limits must be finite")
        if self.bic_lower_limit >= self.bic_upper_limit:
            raise ConfigValidationError("bic_lower_limit must be less than bic_upper_limit")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigValidationError("max_workers must be at least 1")


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Configuration for the MODA evaluation stage.

    Attributes:
        weights: Metric weights by metric name (None = equal weights)
        value_range: Range of the per-metric values
        adjust_lower_limits: Rescale lower metric limits to observed scores
        adjust_upper_limits: Rescale upper metric limits to observed scores
        ranking_method: Tie handling for rank-based views
        scaling_function: Shape of the per-metric value functions
        logistic_factor: Spread factor of logistic value functions, in (0, 0.5)

    Example:
        >>> config = EvaluationConfig(scaling_function=ScalingFunction.LOGISTIC)
        >>> results = evaluate_scores(estimation_results, evaluation_config=config)
    """

    weights: Mapping[str, float] | None = None
    value_range: Interval = field(default_factory=lambda: Interval(0.0, 1.0))
    adjust_lower_limits: bool = False
    adjust_upper_limits: bool = True
    ranking_method: RankingMethod = RankingMethod.ORDINAL
    scaling_function: ScalingFunction = ScalingFunction.LINEAR
    logistic_factor: float = DEFAULT_LOGISTIC_FACTOR

    def __post_init__(self) -> None:
        if not self.value_range.width > 0.0 or not math.isfinite(self.value_range.width):
            raise ConfigValidationError("The value range must have a finite width > 0.0")
        if not 0.0 < self.logistic_factor < 0.5:
            raise ConfigValidationError(
                f"logistic_factor must be in (0, 0.5), got {self.logistic_factor}"
            )
