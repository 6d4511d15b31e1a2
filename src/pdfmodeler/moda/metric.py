"""Metric and score primitives for multi-objective evaluation.

A metric is a figure of merit that characterizes the performance of an
alternative relative to the other alternatives. Every score is produced
against exactly one metric and always lies within that metric's domain.
"""

import logging
import math
import sys
from dataclasses import dataclass
from enum import Enum

from ..exceptions import MetricDomainError

logger = logging.getLogger(__name__)

MAX_VALUE = sys.float_info.max


@dataclass(frozen=True)
class Interval:
    """
    Closed numeric interval [lower, upper].

    Attributes:
        lower: Lower limit of the interval
        upper: Upper limit of the interval
    """

    lower: float
    upper: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, x: float) -> bool:
        return self.lower <= x <= self.upper

    def clamp(self, x: float) -> float:
        """Return x moved to the nearest limit when it lies outside the interval."""
        return min(max(x, self.lower), self.upper)

    def __str__(self) -> str:
        return f"[{self.lower:g}, {self.upper:g}]"


class Direction(Enum):
    """Which way along a metric's domain is preferred."""

    BIGGER_IS_BETTER = "bigger_is_better"
    SMALLER_IS_BETTER = "smaller_is_better"


@dataclass(frozen=True)
class Metric:
    """
    A named scoring criterion with a bounded domain and a preference direction.

    The adjustment flags indicate whether an evaluation model may narrow the
    corresponding domain limit to the range of the observed scores when it
    normalizes them. The metric itself is never modified.

    Attributes:
        name: Identifying name of the metric
        domain: Legal values for scores of this metric
        direction: Whether bigger or smaller values are better
        allow_lower_limit_adjustment: Lower limit may be adjusted during scaling
        allow_upper_limit_adjustment: Upper limit may be adjusted during scaling
        units_of_measure: Optional units label
        description: Optional description of the metric

    Example:
        >>> ks = Metric("KS", Interval(0.0, 1.0), allow_lower_limit_adjustment=False)
        >>> ks.bad_score().value
        1.0
    """

    name: str
    domain: Interval = Interval(0.0, MAX_VALUE)
    direction: Direction = Direction.SMALLER_IS_BETTER
    allow_lower_limit_adjustment: bool = True
    allow_upper_limit_adjustment: bool = True
    units_of_measure: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        width = self.domain.width
        if math.isnan(width) or width <= 0.0:
            raise MetricDomainError(
                f"The width of the domain of metric '{self.name}' must be > 0.0. It was {self.domain}"
            )
        if not math.isfinite(width):
            raise MetricDomainError(
                f"The width of the domain of metric '{self.name}' must be finite. It was {self.domain}"
            )

    @property
    def worst_value(self) -> float:
        if self.direction is Direction.BIGGER_IS_BETTER:
            return self.domain.lower
        return self.domain.upper

    @property
    def best_value(self) -> float:
        if self.direction is Direction.BIGGER_IS_BETTER:
            return self.domain.upper
        return self.domain.lower

    def bad_score(self) -> "Score":
        """
        Worst possible score according to the direction of the metric.

        The score is valid: it is an intentional penalty, not a computational
        failure, and still takes part in ranking.
        """
        return Score(self, self.worst_value, is_valid=True, penalized=True)

    def score(self, value: float) -> "Score":
        """
        Build a score for a raw value, clamping it into the domain.

        NaN values carry no information and yield the bad score. A value
        clamped onto the worst limit is marked as penalized.
        """
        value = float(value)
        if math.isnan(value):
            logger.debug("NaN value for metric %s, using bad score", self.name)
            return self.bad_score()
        if not self.domain.contains(value):
            clamped = self.domain.clamp(value)
            penalized = clamped == self.worst_value
            logger.debug(
                "Value %g outside domain %s of metric %s, clamped to %g%s",
                value, self.domain, self.name, clamped, " (penalty)" if penalized else "",
            )
            return Score(self, clamped, is_valid=True, penalized=penalized)
        return Score(self, value)

    def is_better(self, a: float, b: float) -> bool:
        """True if value a is strictly preferred to value b."""
        if self.direction is Direction.BIGGER_IS_BETTER:
            return a > b
        return a < b

    def new_instance(self) -> "Metric":
        return Metric(
            name=self.name,
            domain=self.domain,
            direction=self.direction,
            allow_lower_limit_adjustment=self.allow_lower_limit_adjustment,
            allow_upper_limit_adjustment=self.allow_upper_limit_adjustment,
            units_of_measure=self.units_of_measure,
            description=self.description,
        )

    def __str__(self) -> str:
        return f"Metric(name='{self.name}', domain={self.domain}, direction={self.direction.name})"


@dataclass(frozen=True)
class Score:
    """
    The value of one metric for one alternative.

    Attributes:
        metric: The metric the score was computed against
        value: Score value, always within the metric's domain
        is_valid: Whether the value can be used for ranking
        penalized: True when the value is the metric's penalty bound rather
            than a normally computed statistic
    """

    metric: Metric
    value: float
    is_valid: bool = True
    penalized: bool = False

    def __post_init__(self) -> None:
        if not self.metric.domain.contains(self.value):
            raise MetricDomainError(
                f"Score value {self.value} is outside the domain {self.metric.domain} "
                f"of metric '{self.metric.name}'"
            )

    def __str__(self) -> str:
        flag = " (penalty)" if self.penalized else ""
        return f"{self.metric.name} = {self.value:.6g}{flag}"
