"""Goodness-of-fit scoring models and their results."""

from .empirical import EmpDistType, empirical_cdf, empirical_probabilities, order_statistics
from .base import PDFScoringModel, resolve_distribution, score_estimation
from .models import (
    AdjustedQQCorrelationScoringModel,
    AndersonDarlingScoringModel,
    BICScoringModel,
    CramerVonMisesScoringModel,
    KSScoringModel,
    PPSSEScoringModel,
    QQCorrelationScoringModel,
    all_scoring_models,
    bic,
    default_scoring_models,
    qq_correlation,
)
from .result import ScoringResult

__all__ = [
    "EmpDistType",
    "empirical_cdf",
    "empirical_probabilities",
    "order_statistics",
    "PDFScoringModel",
    "score_estimation",
    "resolve_distribution",
    "KSScoringModel",
    "BICScoringModel",
    "QQCorrelationScoringModel",
    "AdjustedQQCorrelationScoringModel",
    "PPSSEScoringModel",
    "AndersonDarlingScoringModel",
    "CramerVonMisesScoringModel",
    "default_scoring_models",
    "all_scoring_models",
    "bic",
    "qq_correlation",
    "ScoringResult",
]
