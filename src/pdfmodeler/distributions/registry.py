"""Distribution registry mapping fitted parameters to distributions."""

import logging
import math
from typing import Callable, Mapping

from scipy import stats

from ..core.distribution import FittedDistribution, ScipyDistribution
from ..core.parameters import FittedParameters

logger = logging.getLogger(__name__)

Factory = Callable[[Mapping[str, float]], FittedDistribution]


class DistributionRegistry:
    """
    Registry of distribution factories keyed by family name.

    A factory receives the named parameter values of a FittedParameters
    instance and returns a FittedDistribution. Built-in families are backed by
    scipy.stats and registered automatically.

    Example:
        >>> dist = DistributionRegistry.create(FittedParameters("exponential", {"mean": 2.0}))
        >>>
        >>> # Register a custom family
        >>> DistributionRegistry.register("my_dist", my_factory)
    """

    _registry: dict[str, Factory] = {}

    @classmethod
    def register(cls, name: str, factory: Factory) -> None:
        """
        Register a factory.

        Args:
            name: Family name (case-insensitive)
            factory: Callable building a distribution from parameter values
        """
        cls._registry[name.lower()] = factory

    @classmethod
    def get(cls, name: str) -> Factory | None:
        return cls._registry.get(name.lower())

    @classmethod
    def list_available(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def create(cls, parameters: FittedParameters) -> FittedDistribution:
        """
        Build the distribution for the fitted parameters.

        Raises:
            ValueError: If the family is not registered or the parameter
                values are not valid for it
            KeyError: If a required parameter is missing
        """
        factory = cls.get(parameters.family)
        if factory is None:
            raise ValueError(
                f"Unknown distribution: '{parameters.family}'. Available: {cls.list_available()}"
            )
        return factory(parameters.values)


def create_distribution(
    parameters: FittedParameters, registry: type[DistributionRegistry] = DistributionRegistry
) -> FittedDistribution | None:
    """
    Build the distribution for the parameters, or None if that is not possible.

    Failures are logged; callers treat None as a failed fit.
    """
    try:
        return registry.create(parameters)
    except (KeyError, ValueError, TypeError) as exc:
        logger.warning("Could not create distribution from %s: %s", parameters, exc)
        return None


def _require_positive(values: Mapping[str, float], *names: str) -> None:
    for name in names:
        v = values[name]
        if not (math.isfinite(v) and v > 0.0):
            raise ValueError(f"Parameter '{name}' must be positive and finite, got {v}")


def _require_ordered(lower: float, upper: float) -> None:
    if not (math.isfinite(lower) and math.isfinite(upper) and lower < upper):
        raise ValueError(f"Require finite min < max, got min={lower}, max={upper}")


def _normal(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "variance")
    return ScipyDistribution(stats.norm(loc=v["mean"], scale=math.sqrt(v["variance"])), v, "normal")


def _exponential(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "mean")
    return ScipyDistribution(stats.expon(scale=v["mean"]), v, "exponential")


def _gamma(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "shape", "scale")
    return ScipyDistribution(stats.gamma(a=v["shape"], scale=v["scale"]), v, "gamma")


def _lognormal(v: Mapping[str, float]) -> FittedDistribution:
    # mean and variance are those of the lognormal variable itself
    _require_positive(v, "mean", "variance")
    sigma2 = math.log(1.0 + v["variance"] / v["mean"] ** 2)
    mu = math.log(v["mean"]) - 0.5 * sigma2
    return ScipyDistribution(stats.lognorm(s=math.sqrt(sigma2), scale=math.exp(mu)), v, "lognormal")


def _weibull(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "shape", "scale")
    return ScipyDistribution(stats.weibull_min(c=v["shape"], scale=v["scale"]), v, "weibull")


def _uniform(v: Mapping[str, float]) -> FittedDistribution:
    _require_ordered(v["min"], v["max"])
    return ScipyDistribution(stats.uniform(loc=v["min"], scale=v["max"] - v["min"]), v, "uniform")


def _triangular(v: Mapping[str, float]) -> FittedDistribution:
    lo, mode, hi = v["min"], v["mode"], v["max"]
    _require_ordered(lo, hi)
    if not lo <= mode <= hi:
        raise ValueError(f"Require min <= mode <= max, got {lo}, {mode}, {hi}")
    c = (mode - lo) / (hi - lo)
    return ScipyDistribution(stats.triang(c=c, loc=lo, scale=hi - lo), v, "triangular")


def _beta(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "alpha", "beta")
    return ScipyDistribution(stats.beta(a=v["alpha"], b=v["beta"]), v, "beta")


def _generalized_beta(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "alpha", "beta")
    _require_ordered(v["min"], v["max"])
    frozen = stats.beta(a=v["alpha"], b=v["beta"], loc=v["min"], scale=v["max"] - v["min"])
    return ScipyDistribution(frozen, v, "generalized_beta")


def _pearson_type5(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "shape", "scale")
    return ScipyDistribution(stats.invgamma(a=v["shape"], scale=v["scale"]), v, "pearson_type5")


def _logistic(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "scale")
    return ScipyDistribution(stats.logistic(loc=v["location"], scale=v["scale"]), v, "logistic")


def _laplace(v: Mapping[str, float]) -> FittedDistribution:
    _require_positive(v, "scale")
    return ScipyDistribution(stats.laplace(loc=v["location"], scale=v["scale"]), v, "laplace")


def _register_builtins() -> None:
    """Register all built-in families."""
    DistributionRegistry.register("normal", _normal)
    DistributionRegistry.register("exponential", _exponential)
    DistributionRegistry.register("gamma", _gamma)
    DistributionRegistry.register("lognormal", _lognormal)
    DistributionRegistry.register("weibull", _weibull)
    DistributionRegistry.register("uniform", _uniform)
    DistributionRegistry.register("triangular", _triangular)
    DistributionRegistry.register("beta", _beta)
    DistributionRegistry.register("generalized_beta", _generalized_beta)
    DistributionRegistry.register("pearson_type5", _pearson_type5)
    DistributionRegistry.register("logistic", _logistic)
    DistributionRegistry.register("laplace", _laplace)


# Auto-register built-ins on module import
_register_builtins()
