"""Tests for parameters, estimation results, the distribution registry and utilities."""

import logging

import numpy as np
import pytest
from scipy import stats

import pdfmodeler as pm
from pdfmodeler import (
    DistributionRegistry,
    EstimationResult,
    FittedDistribution,
    FittedParameters,
    ScipyDistribution,
    ShiftedData,
)


class TestFittedParameters:
    """Tests for FittedParameters."""

    def test_family_normalized(self):
        p = FittedParameters("Gamma", {"shape": 2, "scale": 1.5})
        assert p.family == "gamma"
        assert p["shape"] == 2.0
        assert len(p) == 2

    def test_as_array_keeps_order(self):
        p = FittedParameters("triangular", {"min": 0.0, "mode": 1.0, "max": 3.0})
        np.testing.assert_array_equal(p.as_array(), [0.0, 1.0, 3.0])

    def test_str(self):
        p = FittedParameters("exponential", {"mean": 2.0})
        assert str(p) == "exponential(mean=2)"


class TestEstimationResult:
    """Tests for EstimationResult and ShiftedData."""

    def test_test_data_defaults_to_original(self):
        result = EstimationResult([1.0, 2.0, 3.0], FittedParameters("normal", {"mean": 2.0, "variance": 1.0}))
        np.testing.assert_array_equal(result.test_data, [1.0, 2.0, 3.0])

    def test_test_data_uses_shifted(self):
        shifted = ShiftedData.from_original([5.0, 6.0, 7.0], 4.0)
        result = EstimationResult([5.0, 6.0, 7.0], FittedParameters("exponential", {"mean": 2.0}), shifted)
        np.testing.assert_allclose(result.test_data, [1.0, 2.0, 3.0])
        assert result.label.startswith("4 + exponential")

    def test_estimator_inherited_from_parameters(self):
        params = FittedParameters("exponential", {"mean": 2.0}, estimator="ExponentialMLE")
        assert EstimationResult([1.0], params).estimator == "ExponentialMLE"

    def test_usability(self):
        assert not EstimationResult([1.0], None).is_usable
        params = FittedParameters("exponential", {"mean": 2.0})
        assert not EstimationResult([1.0], params, success=False).is_usable
        assert EstimationResult([1.0], params).is_usable

    def test_failure_label(self):
        result = EstimationResult([1.0], None, success=False, message="did not converge")
        assert "did not converge" in result.label

    def test_identity_equality(self):
        """Equal contents do not make two results the same result."""
        params = FittedParameters("exponential", {"mean": 2.0})
        a = EstimationResult([1.0, 2.0], params)
        b = EstimationResult([1.0, 2.0], params)
        assert a != b
        assert a == a


class TestDistributionRegistry:
    """Tests for DistributionRegistry and create_distribution."""

    def test_builtins_registered(self):
        available = DistributionRegistry.list_available()
        for name in ["normal", "exponential", "gamma", "lognormal", "weibull", "uniform",
                     "triangular", "beta", "generalized_beta", "pearson_type5", "logistic", "laplace"]:
            assert name in available

    def test_normal(self):
        dist = DistributionRegistry.create(FittedParameters("normal", {"mean": 1.0, "variance": 4.0}))
        assert isinstance(dist, FittedDistribution)
        assert float(dist.cdf(1.0)) == pytest.approx(0.5)
        assert float(dist.inv_cdf(0.5)) == pytest.approx(1.0)
        assert dist.frozen.std() == pytest.approx(2.0)

    def test_lognormal_uses_moments(self):
        """Lognormal parameters are the mean and variance of the variable itself."""
        dist = DistributionRegistry.create(FittedParameters("lognormal", {"mean": 3.0, "variance": 2.0}))
        assert dist.frozen.mean() == pytest.approx(3.0)
        assert dist.frozen.var() == pytest.approx(2.0)

    def test_exponential_mean(self):
        dist = DistributionRegistry.create(FittedParameters("exponential", {"mean": 2.5}))
        assert dist.frozen.mean() == pytest.approx(2.5)
        assert dist.parameters() == (2.5,)

    def test_generalized_beta_support(self):
        params = FittedParameters("generalized_beta", {"alpha": 2.0, "beta": 3.0, "min": 1.0, "max": 5.0})
        dist = DistributionRegistry.create(params)
        assert float(dist.cdf(1.0)) == pytest.approx(0.0)
        assert float(dist.cdf(5.0)) == pytest.approx(1.0)
        assert len(dist.parameters()) == 4

    def test_triangular_mode(self):
        params = FittedParameters("triangular", {"min": 0.0, "mode": 1.0, "max": 4.0})
        dist = DistributionRegistry.create(params)
        x = np.linspace(0.0, 4.0, 401)
        assert x[np.argmax(dist.pdf(x))] == pytest.approx(1.0)

    def test_sum_log_likelihood(self):
        dist = DistributionRegistry.create(FittedParameters("normal", {"mean": 0.0, "variance": 1.0}))
        data = np.array([-1.0, 0.0, 2.0])
        assert dist.sum_log_likelihood(data) == pytest.approx(np.sum(stats.norm.logpdf(data)))

    def test_unknown_family_raises(self):
        with pytest.raises(ValueError, match="Unknown distribution"):
            DistributionRegistry.create(FittedParameters("nonexistent", {}))

    @pytest.mark.parametrize(
        "params",
        [
            FittedParameters("nonexistent", {"a": 1.0}),
            FittedParameters("uniform", {"min": 3.0, "max": 1.0}),
            FittedParameters("gamma", {"shape": -1.0, "scale": 1.0}),
            FittedParameters("normal", {"mean": 0.0}),
        ],
    )
    def test_create_distribution_returns_none(self, params):
        """Invalid or unknown parameters become a failed fit."""
        assert pm.create_distribution(params) is None

    def test_register_custom(self):
        def factory(values):
            return ScipyDistribution(stats.cauchy(loc=values["location"], scale=values["scale"]), values)

        DistributionRegistry.register("Test_Cauchy", factory)
        dist = pm.create_distribution(FittedParameters("test_cauchy", {"location": 0.0, "scale": 1.0}))
        assert "test_cauchy" in DistributionRegistry.list_available()
        assert float(dist.cdf(0.0)) == pytest.approx(0.5)


class TestConfig:
    """Tests for configuration validation."""

    def test_scoring_defaults(self):
        config = pm.ScoringConfig()
        assert config.bic_lower_limit == -1.0e7
        assert config.bic_upper_limit == 1.0e7
        assert config.emp_dist_type is pm.EmpDistType.CONTINUITY1
        assert config.max_workers is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"bic_lower_limit": 5.0, "bic_upper_limit": 1.0},
            {"bic_upper_limit": float("inf")},
            {"max_workers": 0},
        ],
    )
    def test_invalid_scoring_config(self, kwargs):
        with pytest.raises(pm.ConfigValidationError):
            pm.ScoringConfig(**kwargs)

    def test_invalid_value_range(self):
        with pytest.raises(pm.ConfigValidationError):
            pm.EvaluationConfig(value_range=pm.Interval(1.0, 1.0))

    def test_evaluation_defaults(self):
        config = pm.EvaluationConfig()
        assert not config.adjust_lower_limits
        assert config.adjust_upper_limits
        assert config.scaling_function is pm.ScalingFunction.LINEAR
        assert config.logistic_factor == 0.25

    @pytest.mark.parametrize("factor", [0.0, 0.5, 1.5])
    def test_invalid_logistic_factor(self, factor):
        with pytest.raises(pm.ConfigValidationError):
            pm.EvaluationConfig(logistic_factor=factor)


class TestShiftUtilities:
    """Tests for left-shift estimation."""

    def test_estimate(self):
        # (5*20 - 6^2) / (5 + 20 - 2*6) = 64 / 13
        assert pm.estimate_left_shift_parameter([20.0, 5.0, 6.0, 10.0]) == pytest.approx(64.0 / 13.0)

    def test_small_shift_is_zero(self):
        assert pm.estimate_left_shift_parameter([0.0, 0.5, 4.0]) == 0.0
        assert pm.estimate_left_shift_parameter([1.0, 3.0, 10.0], tolerance=0.5) == 0.0

    def test_undefined_denominator_is_zero(self):
        assert pm.estimate_left_shift_parameter([0.0, 1.0, 2.0]) == 0.0

    def test_estimate_never_reaches_minimum(self):
        """A next-smallest value above the midrange gives no shift."""
        assert pm.estimate_left_shift_parameter([0.1, 9.0, 10.0]) == 0.0

    def test_tied_minimum_uses_next_distinct_value(self):
        # next distinct value is 3: (2*10 - 3^2) / (2 + 10 - 2*3) = 11 / 6
        data = [2.0, 2.0, 3.0, 10.0]
        assert pm.estimate_left_shift_parameter(data) == pytest.approx(11.0 / 6.0)
        assert pm.left_shift_data(data).shifted_data.min() > 0.0

    @pytest.mark.parametrize(
        "data",
        [[1.0, 2.0], [-1.0, 2.0, 3.0], [2.0, 2.0, 2.0], [1.0, 3.0, 3.0], [1.0, 1.0, 5.0, 9.0, 12.0]],
    )
    def test_degenerate_data_not_shifted(self, data):
        assert pm.estimate_left_shift_parameter(data) == 0.0

    def test_negative_tolerance_raises(self):
        with pytest.raises(ValueError):
            pm.estimate_left_shift_parameter([1.0, 2.0, 5.0], tolerance=-1.0)

    def test_left_shift_data(self):
        data = np.array([20.0, 5.0, 6.0, 10.0])
        shifted = pm.left_shift_data(data)
        assert shifted.shift == pytest.approx(64.0 / 13.0)
        np.testing.assert_allclose(shifted.shifted_data, data - 64.0 / 13.0)
        assert shifted.shifted_data.min() > 0.0


class TestConfigureLogging:
    """Tests for the logging helper."""

    def test_single_handler(self):
        logger = pm.configure_logging(logging.DEBUG)
        pm.configure_logging(logging.INFO)
        try:
            marked = [h for h in logger.handlers if getattr(h, "_pdfmodeler_handler", False)]
            assert len(marked) == 1
            assert logger.level == logging.INFO
        finally:
            for h in marked:
                logger.removeHandler(h)
            logger.setLevel(logging.NOTSET)
