"""Fitted parameter containers."""

from dataclasses import dataclass, field
from typing import Mapping

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class FittedParameters:
    """
    Parameters produced by an estimation algorithm for one distribution family.

    Attributes:
        family: Distribution family identity (e.g. 'gamma'), used to build
            the distribution and to rank by family
        values: Parameter values by name, in the family's parameter order
        estimator: Name of the algorithm that produced the values

    Example:
        >>> p = FittedParameters("gamma", {"shape": 2.0, "scale": 1.5}, estimator="GammaMLE")
        >>> len(p)
        2
    """

    family: str
    values: Mapping[str, float] = field(default_factory=dict)
    estimator: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "family", self.family.lower())
        object.__setattr__(self, "values", {k: float(v) for k, v in self.values.items()})

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def as_array(self) -> NDArray[np.float64]:
        return np.array(list(self.values.values()), dtype=float)

    def __str__(self) -> str:
        inner = ", ".join(f"{k}={v:.6g}" for k, v in self.values.items())
        return f"{self.family}({inner})"
