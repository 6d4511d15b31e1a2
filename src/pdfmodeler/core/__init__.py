"""Core collaborator types: fitted distributions, parameters and estimation results."""

from .distribution import FittedDistribution, ScipyDistribution
from .parameters import FittedParameters
from .estimation import EstimationResult, ShiftedData

__all__ = [
    "FittedDistribution",
    "ScipyDistribution",
    "FittedParameters",
    "EstimationResult",
    "ShiftedData",
]
