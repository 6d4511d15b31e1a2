"""Value functions mapping raw metric scores onto a common preference scale."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable

import numpy as np
from scipy import special

from ..exceptions import ConfigValidationError
from .metric import Direction, Interval, Metric

DEFAULT_LOGISTIC_FACTOR = 0.25


class ScalingFunction(Enum):
    """Shape of the value functions built for an evaluation."""

    LINEAR = "linear"
    LOGISTIC = "logistic"


@dataclass(frozen=True)
class LinearValueFunction:
    """
    Linear map from a metric's normalization domain to a value range.

    Higher values are always more preferred: for smaller-is-better metrics the
    map is reversed so that the lower domain limit receives the top of the
    value range.

    Attributes:
        metric: The metric being transformed
        domain: Normalization domain (the metric's domain unless rescaled)
        value_range: Target range of the values

    Example:
        >>> ks = Metric("KS", Interval(0.0, 1.0))
        >>> LinearValueFunction(ks, value_range=Interval(0.0, 1.0)).value(0.25)
        0.75
    """

    rescalable: ClassVar[bool] = True

    metric: Metric
    domain: Interval | None = None
    value_range: Interval = Interval(0.0, 1.0)

    @property
    def normalization_domain(self) -> Interval:
        return self.domain if self.domain is not None else self.metric.domain

    def with_domain(self, domain: Interval) -> "LinearValueFunction":
        """Return a copy normalizing over a different domain."""
        return LinearValueFunction(self.metric, domain, self.value_range)

    def value(self, x: float) -> float:
        d = self.normalization_domain
        fraction = (d.clamp(x) - d.lower) / d.width
        if self.metric.direction is Direction.SMALLER_IS_BETTER:
            fraction = 1.0 - fraction
        return self.value_range.lower + fraction * self.value_range.width


@dataclass(frozen=True)
class LogisticValueFunction:
    """
    Logistic (S-shaped) map from metric scores to a value range.

        v(x) = lower + width * expit(+/-(x - location) / scale)

    The sign follows the metric's direction so that better scores always get
    higher values. The curve is fitted to the observed scores, so its shape
    already reflects their spread and the normalization domain is never
    rescaled. A scale of zero degenerates to a step at the location.

    Attributes:
        metric: The metric being transformed
        location: Score that maps to the middle of the value range
        scale: Horizontal scale of the curve, >= 0
        value_range: Target range of the values
    """

    rescalable: ClassVar[bool] = False

    metric: Metric
    location: float
    scale: float
    value_range: Interval = Interval(0.0, 1.0)

    def __post_init__(self) -> None:
        if not math.isfinite(self.location):
            raise ConfigValidationError(f"location must be finite, got {self.location}")
        if not math.isfinite(self.scale) or self.scale < 0.0:
            raise ConfigValidationError(f"scale must be finite and >= 0, got {self.scale}")

    @classmethod
    def from_scores(
        cls,
        metric: Metric,
        values: Iterable[float],
        factor: float = DEFAULT_LOGISTIC_FACTOR,
        value_range: Interval = Interval(0.0, 1.0),
    ) -> "LogisticValueFunction":
        """
        Fit the curve to observed score values.

        The location is the median of the values. The scale is chosen so that
        the observed value farthest from the median maps to `factor` (or
        1 - `factor`) of the way along the value range.

        Args:
            metric: The metric being transformed
            values: Observed scores; non-finite values are ignored
            factor: Fraction of the value range left beyond the farthest
                observation, in (0, 0.5)
            value_range: Target range of the values

        Raises:
            ConfigValidationError: If factor is not in (0, 0.5)
        """
        if not 0.0 < factor < 0.5:
            raise ConfigValidationError(f"The logistic factor must be in (0, 0.5), got {factor}")
        x = np.asarray(list(values), dtype=float)
        x = x[np.isfinite(x)]
        if x.size == 0:
            return cls(metric, metric.worst_value, 0.0, value_range)
        location = float(np.median(x))
        spread = float(max(location - x.min(), x.max() - location))
        return cls(metric, location, spread / math.log((1.0 - factor) / factor), value_range)

    @property
    def normalization_domain(self) -> Interval:
        return self.metric.domain

    def with_domain(self, domain: Interval) -> "LogisticValueFunction":
        return self

    def value(self, x: float) -> float:
        d = x - self.location
        if self.metric.direction is Direction.SMALLER_IS_BETTER:
            d = -d
        if self.scale == 0.0:
            fraction = 0.5 if d == 0.0 else float(d > 0.0)
        else:
            fraction = float(special.expit(d / self.scale))
        return self.value_range.lower + fraction * self.value_range.width


ValueFunction = LinearValueFunction | LogisticValueFunction
