"""Scoring result container."""

import math
from dataclasses import dataclass, field, replace
from typing import Mapping

from ..core.distribution import FittedDistribution
from ..core.estimation import EstimationResult
from ..moda.metric import Metric, Score


@dataclass(frozen=True, eq=False)
class ScoringResult:
    """
    Scores of one estimation result across all configured scoring models.

    The evaluation fields are filled in by the MODA evaluation step through
    `with_evaluation()`, which returns a new instance. Results order so that
    `sorted()` puts the most preferred (largest overall value) first.

    Attributes:
        name: Label of the alternative (distribution and shift)
        estimation_result: The estimation result that was scored
        scores: One score per scoring model, in model order
        distribution: Materialized distribution, None for failed fits
        values: Per-metric value from the evaluation model
        weights: Per-metric weight from the evaluation model
        overall_value: Weighted overall value (NaN until evaluated)
        first_rank_count: Number of metrics on which this alternative ranked first
        average_ranking: Mean rank across metrics (NaN until evaluated)
    """

    name: str
    estimation_result: EstimationResult
    scores: tuple[Score, ...]
    distribution: FittedDistribution | None = None
    values: Mapping[Metric, float] = field(default_factory=dict)
    weights: Mapping[Metric, float] = field(default_factory=dict)
    overall_value: float = math.nan
    first_rank_count: int = 0
    average_ranking: float = math.nan

    @property
    def family(self) -> str | None:
        return self.estimation_result.family

    @property
    def estimator(self) -> str:
        return self.estimation_result.estimator

    @property
    def metrics(self) -> list[Metric]:
        return [s.metric for s in self.scores]

    @property
    def is_evaluated(self) -> bool:
        return not math.isnan(self.overall_value)

    def score_for(self, metric_name: str) -> Score:
        for s in self.scores:
            if s.metric.name == metric_name:
                return s
        raise KeyError(f"No score for metric '{metric_name}'")

    def with_evaluation(
        self,
        values: Mapping[Metric, float],
        weights: Mapping[Metric, float],
        overall_value: float,
        first_rank_count: int,
        average_ranking: float,
    ) -> "ScoringResult":
        return replace(
            self,
            values=dict(values),
            weights=dict(weights),
            overall_value=float(overall_value),
            first_rank_count=int(first_rank_count),
            average_ranking=float(average_ranking),
        )

    def _sort_key(self) -> float:
        return -math.inf if math.isnan(self.overall_value) else self.overall_value

    def __lt__(self, other: "ScoringResult") -> bool:
        return self._sort_key() > other._sort_key()

    def __str__(self) -> str:
        scores = ", ".join(str(s) for s in self.scores)
        return f"{self.name}: overall={self.overall_value:.4f} [{scores}]"
