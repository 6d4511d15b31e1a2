"""Multi-objective decision analysis: metrics, scores and additive aggregation."""

from .metric import MAX_VALUE, Direction, Interval, Metric, Score
from .value_functions import (
    DEFAULT_LOGISTIC_FACTOR,
    LinearValueFunction,
    LogisticValueFunction,
    ScalingFunction,
    ValueFunction,
)
from .model import AdditiveMODAModel, RankingMethod, range_estimate

__all__ = [
    "MAX_VALUE",
    "Direction",
    "Interval",
    "Metric",
    "Score",
    "DEFAULT_LOGISTIC_FACTOR",
    "LinearValueFunction",
    "LogisticValueFunction",
    "ScalingFunction",
    "ValueFunction",
    "AdditiveMODAModel",
    "RankingMethod",
    "range_estimate",
]
