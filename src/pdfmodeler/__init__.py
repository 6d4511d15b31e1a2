"""
pdfmodeler: Scoring and Ranking of Fitted Probability Distributions

A Python library for choosing the best-fitting continuous distribution among
several candidate fits of the same data. Each candidate is scored with
goodness-of-fit statistics, the scores are combined by an additive
multi-objective decision analysis (MODA) model, and the candidates are ranked.

Key Features:
- Goodness-of-fit scoring models (KS, BIC, Q-Q correlation, P-P SSE,
  Anderson-Darling, Cramer-von Mises)
- Bounded metrics: failed fits and numerical trouble degrade to penalty scores
- Additive MODA with observed-range normalization and metric weights
- Linear or logistic value functions
- Rank-based views (first-rank counts, average ranking)
- Parallel batch scoring

Basic Example:
    >>> import pdfmodeler as pm
    >>> from scipy import stats
    >>>
    >>> shape, _, scale = stats.gamma.fit(data, floc=0.0)
    >>> gamma_fit = pm.EstimationResult(
    ...     data, pm.FittedParameters("gamma", {"shape": shape, "scale": scale})
    ... )
    >>> normal_fit = pm.EstimationResult(
    ...     data, pm.FittedParameters("normal", {"mean": data.mean(), "variance": data.var()})
    ... )
    >>>
    >>> results = pm.evaluate_scores([gamma_fit, normal_fit])
    >>> print(results.summary())
    >>> results.rank(gamma_fit)
    1

References:
    Law, A.M. (2007). Simulation Modeling and Analysis, 4th ed. McGraw-Hill.
    Kirkwood, C.W. (1997). Strategic Decision Making. Duxbury Press.
"""

import logging

__version__ = "0.1.0"

# Errors and configuration
from .exceptions import (
    PDFModelingError,
    MetricDomainError,
    ModelDefinitionError,
    MetricMismatchError,
    NoScoringResultsError,
    ConfigValidationError,
)
from .config import ScoringConfig, EvaluationConfig

# MODA primitives
from .moda import (
    MAX_VALUE,
    Direction,
    Interval,
    Metric,
    Score,
    LinearValueFunction,
    LogisticValueFunction,
    ScalingFunction,
    AdditiveMODAModel,
    RankingMethod,
    range_estimate,
)

# Collaborator types
from .core import (
    FittedDistribution,
    ScipyDistribution,
    FittedParameters,
    EstimationResult,
    ShiftedData,
)
from .distributions import DistributionRegistry, create_distribution

# Scoring
from .scoring import (
    EmpDistType,
    PDFScoringModel,
    score_estimation,
    KSScoringModel,
    BICScoringModel,
    QQCorrelationScoringModel,
    AdjustedQQCorrelationScoringModel,
    PPSSEScoringModel,
    AndersonDarlingScoringModel,
    CramerVonMisesScoringModel,
    default_scoring_models,
    all_scoring_models,
    ScoringResult,
)

# Evaluation
from .modeling import (
    EvaluationMethod,
    PDFModelingResults,
    create_default_evaluation_model,
    evaluate_scores,
    evaluate_scoring_results,
    scoring_results,
)

# Utilities
from .utilities import configure_logging, estimate_left_shift_parameter, left_shift_data

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors and configuration
    "PDFModelingError",
    "MetricDomainError",
    "ModelDefinitionError",
    "MetricMismatchError",
    "NoScoringResultsError",
    "ConfigValidationError",
    "ScoringConfig",
    "EvaluationConfig",
    # MODA
    "MAX_VALUE",
    "Direction",
    "Interval",
    "Metric",
    "Score",
    "LinearValueFunction",
    "LogisticValueFunction",
    "ScalingFunction",
    "AdditiveMODAModel",
    "RankingMethod",
    "range_estimate",
    # Collaborators
    "FittedDistribution",
    "ScipyDistribution",
    "FittedParameters",
    "EstimationResult",
    "ShiftedData",
    "DistributionRegistry",
    "create_distribution",
    # Scoring
    "EmpDistType",
    "PDFScoringModel",
    "score_estimation",
    "KSScoringModel",
    "BICScoringModel",
    "QQCorrelationScoringModel",
    "AdjustedQQCorrelationScoringModel",
    "PPSSEScoringModel",
    "AndersonDarlingScoringModel",
    "CramerVonMisesScoringModel",
    "default_scoring_models",
    "all_scoring_models",
    "ScoringResult",
    # Evaluation
    "EvaluationMethod",
    "PDFModelingResults",
    "create_default_evaluation_model",
    "evaluate_scores",
    "evaluate_scoring_results",
    "scoring_results",
    # Utilities
    "configure_logging",
    "estimate_left_shift_parameter",
    "left_shift_data",
]
