"""Ranked outcome of a PDF modeling run."""

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

import pandas as pd

from ..core.estimation import EstimationResult
from ..exceptions import NoScoringResultsError
from ..moda.model import AdditiveMODAModel
from ..scoring.result import ScoringResult


class EvaluationMethod(Enum):
    """How the top distribution is chosen."""

    SCORING = "scoring"  # largest overall MODA value
    RANKING = "ranking"  # most first ranks, then best average rank


@dataclass(eq=False)
class PDFModelingResults:
    """
    Estimation results, their scores and the evaluation model that ranked them.

    Sorted views are computed once and cached; the results are not meant to
    be modified after construction.

    Attributes:
        estimation_results: The estimation results that were scored
        scoring_results: Evaluated scoring results, in estimation order
        evaluation_model: The MODA model used for the evaluation

    Example:
        >>> results = evaluate_scores(estimation_results)
        >>> print(results.top_result.name)
        >>> results.rank(estimation_results[2])
        1
    """

    estimation_results: list[EstimationResult]
    scoring_results: list[ScoringResult]
    evaluation_model: AdditiveMODAModel
    distributions_column: str = field(default="Distributions", repr=False)

    @cached_property
    def sorted_scoring_results(self) -> list[ScoringResult]:
        """Scoring results from best to worst overall value; ties keep input order."""
        return sorted(self.scoring_results)

    @cached_property
    def sorted_by_ranking(self) -> list[ScoringResult]:
        """Scoring results by first-rank count (descending), then average rank."""
        return sorted(self.scoring_results, key=lambda r: (-r.first_rank_count, r.average_ranking))

    @property
    def top_result(self) -> ScoringResult:
        """The result with the largest overall value."""
        if not self.scoring_results:
            raise NoScoringResultsError("There are no scoring results")
        return self.sorted_scoring_results[0]

    @property
    def top_result_by_ranking(self) -> ScoringResult:
        """The result ranked first on the most metrics."""
        if not self.scoring_results:
            raise NoScoringResultsError("There are no scoring results")
        return self.sorted_by_ranking[0]

    def top_result_by(self, method: EvaluationMethod = EvaluationMethod.SCORING) -> ScoringResult:
        if method is EvaluationMethod.RANKING:
            return self.top_result_by_ranking
        return self.top_result

    @property
    def top_family(self) -> str | None:
        return self.top_result.family

    def rank(self, target: EstimationResult | str) -> int:
        """
        Position of an estimation result or distribution family in the ranking.

        Args:
            target: An estimation result (matched by identity) or a family
                name (the best result of that family counts)

        Returns:
            1-based rank, or 0 if the target was not scored
        """
        for position, result in enumerate(self.sorted_scoring_results, start=1):
            if isinstance(target, str):
                if result.family == target.lower():
                    return position
            elif result.estimation_result is target:
                return position
        return 0

    def family_ranks(self) -> dict[str, int]:
        """Rank of the best result of each family, best family first."""
        ranks: dict[str, int] = {}
        for position, result in enumerate(self.sorted_scoring_results, start=1):
            if result.family is not None and result.family not in ranks:
                ranks[result.family] = position
        return ranks

    def scores_as_dataframe(self) -> pd.DataFrame:
        """Raw scores, one row per distribution in estimation order."""
        return self.evaluation_model.alternative_scores_as_dataframe(self.distributions_column)

    def metrics_as_dataframe(self) -> pd.DataFrame:
        """Metric values and overall value, best distribution first."""
        return self.evaluation_model.alternative_values_as_dataframe(self.distributions_column)

    def summary(self) -> str:
        """Ranking table as text."""
        lines = [
            f"PDF Modeling Results ({len(self.scoring_results)} distributions)",
            "=" * 60,
            f"{'Rank':<6}{'Overall':>10}{'First':>7}{'AvgRank':>9}  Distribution",
            "-" * 60,
        ]
        for position, r in enumerate(self.sorted_scoring_results, start=1):
            lines.append(
                f"{position:<6}{r.overall_value:>10.4f}{r.first_rank_count:>7d}"
                f"{r.average_ranking:>9.2f}  {r.name}"
            )
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.scoring_results)

    def __str__(self) -> str:
        return self.summary()
