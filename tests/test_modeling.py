"""Tests for batch scoring, MODA evaluation and ranked modeling results."""

import numpy as np
import pandas as pd
import pytest
from scipy import stats

import pdfmodeler as pm
from pdfmodeler import (
    BICScoringModel,
    EstimationResult,
    EvaluationMethod,
    FittedParameters,
    KSScoringModel,
    LogisticValueFunction,
    PDFModelingResults,
    QQCorrelationScoringModel,
    Score,
    ScoringResult,
)


def fit_candidates(data):
    """Five candidate fits of the same data; the gamma fit is third."""
    mean, var = float(np.mean(data)), float(np.var(data))
    shape, _, scale = stats.gamma.fit(data, floc=0.0)
    median = float(np.median(data))
    return [
        EstimationResult(data, FittedParameters("exponential", {"mean": mean}, "ExponentialMLE")),
        EstimationResult(data, FittedParameters("uniform", {"min": data.min(), "max": data.max()}, "UniformMLE")),
        EstimationResult(data, FittedParameters("gamma", {"shape": shape, "scale": scale}, "GammaMLE")),
        EstimationResult(data, FittedParameters("normal", {"mean": mean, "variance": var}, "NormalMLE")),
        EstimationResult(
            data,
            FittedParameters("laplace", {"location": median, "scale": float(np.mean(np.abs(data - median)))}),
        ),
    ]


@pytest.fixture
def gamma_data():
    rng = np.random.default_rng(2024)
    return rng.gamma(2.0, 3.0, size=200)


@pytest.fixture
def candidates(gamma_data):
    return fit_candidates(gamma_data)


@pytest.fixture
def results(candidates):
    return pm.evaluate_scores(candidates)


class TestScoringResults:
    """Tests for batch scoring."""

    def test_one_result_per_estimation_in_order(self, candidates):
        scored = pm.scoring_results(candidates)
        assert len(scored) == len(candidates)
        for s, c in zip(scored, candidates):
            assert s.estimation_result is c
            assert len(s.scores) == 4

    def test_failed_fit_is_scored_with_bad_scores(self, candidates):
        failed = EstimationResult(candidates[0].original_data, None, success=False, message="no fit")
        scored = pm.scoring_results([failed], pm.all_scoring_models())
        assert scored[0].distribution is None
        for s in scored[0].scores:
            assert s.penalized
            assert s.value == s.metric.bad_score().value

    def test_parallel_matches_sequential(self, candidates):
        models = pm.all_scoring_models()
        sequential = pm.scoring_results(candidates, models)
        parallel = pm.scoring_results(candidates, models, max_workers=4)
        assert [r.estimation_result for r in parallel] == [r.estimation_result for r in sequential]
        for a, b in zip(sequential, parallel):
            assert [s.value for s in a.scores] == [s.value for s in b.scores]

    def test_requires_models(self, candidates):
        with pytest.raises(pm.ConfigValidationError):
            pm.scoring_results(candidates, [])

    def test_invalid_worker_count(self, candidates):
        with pytest.raises(pm.ConfigValidationError):
            pm.scoring_results(candidates, max_workers=0)

    def test_models_sharing_a_metric_name_rejected(self, candidates):
        """Two Q-Q models with different plotting positions would produce two 'QQ-Correlation' scores."""
        models = [
            QQCorrelationScoringModel(pm.EmpDistType.CONTINUITY1),
            QQCorrelationScoringModel(pm.EmpDistType.CONTINUITY2),
        ]
        with pytest.raises(pm.ConfigValidationError, match="QQ-Correlation"):
            pm.scoring_results(candidates, models)
        with pytest.raises(pm.ConfigValidationError, match="QQ-Correlation"):
            pm.evaluate_scores(candidates, scoring_models=models)


class TestEvaluateScoringResults:
    """Tests for MODA evaluation of scoring results."""

    def test_evaluation_fields_filled(self, candidates):
        evaluated, model = pm.evaluate_scoring_results(pm.scoring_results(candidates))
        assert len(model.alternatives) == len(candidates)
        for r in evaluated:
            assert r.is_evaluated
            assert 0.0 <= r.overall_value <= 1.0
            assert sum(r.weights.values()) == pytest.approx(1.0)
            assert 1.0 <= r.average_ranking <= len(candidates)

    def test_original_results_unchanged(self, candidates):
        scored = pm.scoring_results(candidates)
        pm.evaluate_scoring_results(scored)
        assert not any(r.is_evaluated for r in scored)

    def test_metric_mismatch_raises(self, candidates):
        scored = pm.scoring_results(candidates, [KSScoringModel()])
        model = pm.create_default_evaluation_model([BICScoringModel().metric])
        with pytest.raises(pm.MetricMismatchError):
            pm.evaluate_scoring_results(scored, model)

    def test_empty_without_model_raises(self):
        with pytest.raises(pm.ModelDefinitionError):
            pm.evaluate_scoring_results([])

    def test_duplicate_names_kept_apart(self, candidates):
        scored = pm.scoring_results(candidates[:2])
        twins = [
            ScoringResult("same", r.estimation_result, r.scores, r.distribution) for r in scored
        ]
        evaluated, model = pm.evaluate_scoring_results(twins)
        assert len(model.alternatives) == 2
        assert len(evaluated) == 2

    def test_weights_from_config(self, candidates):
        config = pm.EvaluationConfig(weights={"BIC": 1.0})
        evaluated, model = pm.evaluate_scoring_results(pm.scoring_results(candidates), config=config)
        weights = {m.name: w for m, w in model.weights.items()}
        assert weights["BIC"] == pytest.approx(1.0)
        assert weights["QQ-Correlation"] == 0.0

    def test_logistic_scaling(self, candidates):
        failed = EstimationResult(candidates[0].original_data, None, success=False, message="no fit")
        config = pm.EvaluationConfig(scaling_function=pm.ScalingFunction.LOGISTIC)
        results = pm.evaluate_scores(candidates + [failed], evaluation_config=config)
        for vf in results.evaluation_model.value_functions.values():
            assert isinstance(vf, LogisticValueFunction)
        for r in results.scoring_results:
            assert 0.0 <= r.overall_value <= 1.0
        assert results.rank(failed) == len(candidates) + 1

    def test_logistic_fitted_to_non_penalized_scores(self, candidates):
        scored = pm.scoring_results(candidates)
        config = pm.EvaluationConfig(scaling_function=pm.ScalingFunction.LOGISTIC)
        model = pm.create_default_evaluation_model(scored[0].metrics, config, scored)
        qq = scored[0].metrics[-1]
        observed = [r.scores[-1].value for r in scored if not r.scores[-1].penalized]
        assert model.value_functions[qq].location == pytest.approx(np.median(observed))


class TestPDFModelingResults:
    """Tests for PDFModelingResults."""

    def test_sorting_idempotent(self, results):
        first = [id(r) for r in results.sorted_scoring_results]
        second = [id(r) for r in results.sorted_scoring_results]
        assert first == second
        assert [id(r) for r in sorted(results.scoring_results)] == first

    def test_sorted_best_first(self, results):
        values = [r.overall_value for r in results.sorted_scoring_results]
        assert values == sorted(values, reverse=True)
        assert results.top_result is results.sorted_scoring_results[0]

    def test_ranks(self, results, candidates):
        ranks = [results.rank(c) for c in candidates]
        assert sorted(ranks) == list(range(1, len(candidates) + 1))
        assert ranks.count(1) == 1

    def test_rank_not_found(self, results, candidates):
        stranger = EstimationResult(candidates[0].original_data, candidates[0].parameters)
        assert results.rank(stranger) == 0
        assert results.rank("weibull") == 0

    def test_rank_by_family(self, results, candidates):
        assert results.rank("gamma") == results.rank(candidates[2])
        assert results.rank("GAMMA") == results.rank("gamma")

    def test_family_ranks(self, results):
        ranks = results.family_ranks()
        assert set(ranks) == {"exponential", "uniform", "gamma", "normal", "laplace"}
        assert ranks[results.top_family] == 1

    def test_true_family_wins(self, results, candidates):
        assert results.top_result.estimation_result is candidates[2]
        assert results.top_family == "gamma"

    def test_failed_fit_ranks_last(self, candidates):
        failed = EstimationResult(candidates[0].original_data, None, success=False, message="no fit")
        results = pm.evaluate_scores(candidates + [failed])
        assert results.rank(failed) == len(candidates) + 1

    def test_ranking_method(self, results):
        by_ranking = results.sorted_by_ranking
        counts = [r.first_rank_count for r in by_ranking]
        assert counts == sorted(counts, reverse=True)
        assert results.top_result_by(EvaluationMethod.RANKING) is by_ranking[0]
        assert results.top_result_by(EvaluationMethod.SCORING) is results.top_result

    def test_empty_results(self):
        results = pm.evaluate_scores([])
        assert len(results) == 0
        assert results.rank("normal") == 0
        with pytest.raises(pm.NoScoringResultsError):
            results.top_result
        with pytest.raises(LookupError):
            results.top_result_by_ranking

    def test_dataframes(self, results, candidates):
        scores = results.scores_as_dataframe()
        metrics = results.metrics_as_dataframe()
        assert isinstance(scores, pd.DataFrame)
        assert list(scores.columns) == ["Distributions", "BIC", "Anderson-Darling", "Cramer-von Mises", "QQ-Correlation"]
        assert len(scores) == len(candidates)
        assert metrics["Overall"].is_monotonic_decreasing
        assert metrics["Distributions"].iloc[0] == results.top_result.name

    def test_summary(self, results):
        text = results.summary()
        assert "PDF Modeling Results (5 distributions)" in text
        assert results.top_result.name in text


class TestRankingScenarios:
    """End-to-end ranking scenarios."""

    def test_smaller_ks_ranks_better(self):
        """With all other metrics tied, the smaller KS statistic wins."""
        rng = np.random.default_rng(1)
        data = rng.normal(10.0, 2.0, size=100)
        params = FittedParameters("normal", {"mean": 10.0, "variance": 4.0})
        a = EstimationResult(data, params, estimator="A")
        b = EstimationResult(data, params, estimator="B")
        ks, bic = KSScoringModel().metric, BICScoringModel().metric
        scored = [
            ScoringResult("A", a, (Score(ks, 0.02), Score(bic, 420.0))),
            ScoringResult("B", b, (Score(ks, 0.15), Score(bic, 420.0))),
        ]

        evaluated, model = pm.evaluate_scoring_results(scored)
        results = PDFModelingResults([a, b], evaluated, model)

        assert results.rank(a) < results.rank(b)
        assert results.rank(a) == 1
        assert results.top_result.estimation_result is a

    def test_true_distribution_usually_top(self):
        """Over repeated samples of 100 points, the generating family is usually chosen."""
        n_runs = 20
        wins = 0
        for seed in range(n_runs):
            rng = np.random.default_rng(seed)
            data = rng.gamma(2.0, 3.0, size=100)
            candidates = fit_candidates(data)
            results = pm.evaluate_scores(candidates)
            if results.top_result.estimation_result is candidates[2]:
                wins += 1
        assert wins >= 0.7 * n_runs

    def test_parallel_evaluation_same_top(self, candidates):
        sequential = pm.evaluate_scores(candidates)
        parallel = pm.evaluate_scores(candidates, scoring_config=pm.ScoringConfig(max_workers=3))
        assert parallel.top_result.estimation_result is sequential.top_result.estimation_result
        assert [parallel.rank(c) for c in candidates] == [sequential.rank(c) for c in candidates]
