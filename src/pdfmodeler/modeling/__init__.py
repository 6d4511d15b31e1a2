"""Batch scoring, MODA evaluation and ranked modeling results."""

from .results import EvaluationMethod, PDFModelingResults
from .evaluation import (
    create_default_evaluation_model,
    evaluate_scores,
    evaluate_scoring_results,
    scoring_results,
)

__all__ = [
    "EvaluationMethod",
    "PDFModelingResults",
    "create_default_evaluation_model",
    "evaluate_scores",
    "evaluate_scoring_results",
    "scoring_results",
]
