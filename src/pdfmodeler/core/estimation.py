"""Estimation results consumed by the scoring engine."""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .parameters import FittedParameters


@dataclass(frozen=True, eq=False)
class ShiftedData:
    """
    Data translated so a distribution with restricted support can be fit.

    If X(i) is an original datum then the shifted datum is Y(i) = X(i) - shift.

    Attributes:
        shift: Amount subtracted from the original data
        shifted_data: The shifted observations
    """

    shift: float
    shifted_data: NDArray[np.float64]

    @classmethod
    def from_original(cls, data: ArrayLike, shift: float) -> "ShiftedData":
        return cls(float(shift), np.asarray(data, dtype=float) - shift)


@dataclass(eq=False)
class EstimationResult:
    """
    Output of a parameter estimation algorithm.

    The algorithm may fail because of data or numerical issues, in which case
    `parameters` is None or `success` is False. Results compare by identity,
    so rank queries match the exact result that was scored.

    Attributes:
        original_data: Data supplied to the estimation process
        parameters: Fitted parameters, None if estimation failed
        shifted_data: Shift applied before estimation, if any
        success: Whether the estimator considers the estimation successful
        message: Diagnostic explanation from the estimator
        estimator: Name of the estimation algorithm

    Example:
        >>> params = FittedParameters("normal", {"mean": 0.1, "variance": 1.2})
        >>> result = EstimationResult(data, params, estimator="NormalMLE")
        >>> result.family
        'normal'
    """

    original_data: NDArray[np.float64]
    parameters: FittedParameters | None = None
    shifted_data: ShiftedData | None = None
    success: bool = True
    message: str | None = None
    estimator: str = field(default="")

    def __post_init__(self) -> None:
        self.original_data = np.asarray(self.original_data, dtype=float)
        if not self.estimator and self.parameters is not None:
            self.estimator = self.parameters.estimator

    @property
    def test_data(self) -> NDArray[np.float64]:
        """Shifted data if the data was shifted, otherwise the original data."""
        if self.shifted_data is not None:
            return self.shifted_data.shifted_data
        return self.original_data

    @property
    def family(self) -> str | None:
        return None if self.parameters is None else self.parameters.family

    @property
    def is_usable(self) -> bool:
        return self.success and self.parameters is not None

    @property
    def label(self) -> str:
        """Distribution description, including any shift, or the failure message."""
        if not self.is_usable:
            return f"Success={self.success}: {self.message}"
        if self.shifted_data is not None:
            return f"{self.shifted_data.shift:g} + {self.parameters}"
        return str(self.parameters)

    def __str__(self) -> str:
        status = "SUCCESS" if self.success else "FAILURE"
        lines = [
            f"Estimation Results ({self.estimator or 'unknown estimator'}): {status}",
            f"  Message:    {self.message}",
            f"  n:          {len(self.original_data)}",
            f"  Shift:      {None if self.shifted_data is None else self.shifted_data.shift}",
            f"  Parameters: {self.parameters}",
        ]
        return "\n".join(lines)
