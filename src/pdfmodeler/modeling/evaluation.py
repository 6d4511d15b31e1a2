"""Batch scoring of estimation results and MODA evaluation of the scores."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

from ..config import EvaluationConfig, ScoringConfig
from ..core.estimation import EstimationResult
from ..distributions.registry import DistributionRegistry
from ..exceptions import ConfigValidationError, ModelDefinitionError
from ..moda.metric import Metric
from ..moda.model import AdditiveMODAModel
from ..moda.value_functions import ScalingFunction
from ..scoring.base import PDFScoringModel, resolve_distribution, score_resolved
from ..scoring.models import default_scoring_models
from ..scoring.result import ScoringResult
from .results import PDFModelingResults

logger = logging.getLogger(__name__)


def _score_one(
    index: int,
    result: EstimationResult,
    models: Sequence[PDFScoringModel],
    registry: type[DistributionRegistry],
) -> ScoringResult:
    distribution = resolve_distribution(result, registry)
    scores = tuple(score_resolved(model.new_instance(), result, distribution) for model in models)
    name = f"{index + 1}: {result.label}"
    return ScoringResult(name, result, scores, distribution)


def _check_unique_metric_names(models: Sequence[PDFScoringModel]) -> None:
    names = [m.name for m in models]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigValidationError(
            f"Scoring models must produce distinct metrics, repeated: {duplicates}. "
            "Use one model per metric, e.g. a single QQCorrelationScoringModel."
        )


def scoring_results(
    estimation_results: Sequence[EstimationResult],
    scoring_models: Sequence[PDFScoringModel] | None = None,
    registry: type[DistributionRegistry] = DistributionRegistry,
    max_workers: int | None = None,
) -> list[ScoringResult]:
    """
    Score every estimation result with every scoring model.

    Each result's distribution is materialized once and scored by a fresh
    copy of each model. Failed or parameterless results are scored too: they
    receive the bad score of every metric and so rank last.

    Args:
        estimation_results: Results to score
        scoring_models: Models to apply (default: `default_scoring_models()`)
        registry: Registry used to materialize distributions
        max_workers: Worker threads; None or 1 scores sequentially

    Returns:
        One ScoringResult per estimation result, in input order

    Raises:
        ConfigValidationError: If no scoring models are given, two models
            share a metric name, or max_workers < 1
    """
    models = list(scoring_models) if scoring_models is not None else default_scoring_models()
    if not models:
        raise ConfigValidationError("At least one scoring model is required")
    _check_unique_metric_names(models)
    if max_workers is not None and max_workers < 1:
        raise ConfigValidationError("max_workers must be at least 1")

    results = list(estimation_results)
    logger.info("Scoring %d estimation results with %d models", len(results), len(models))

    if max_workers is None or max_workers == 1 or len(results) < 2:
        return [_score_one(i, r, models, registry) for i, r in enumerate(results)]

    scored: dict[int, ScoringResult] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_map = {
            executor.submit(_score_one, i, r, models, registry): i for i, r in enumerate(results)
        }
        for future in as_completed(future_map):
            scored[future_map[future]] = future.result()
    return [scored[i] for i in range(len(results))]


def create_default_evaluation_model(
    metrics: Sequence[Metric],
    config: EvaluationConfig | None = None,
    scoring_results: Sequence[ScoringResult] = (),
) -> AdditiveMODAModel:
    """
    Additive MODA model with one value function per metric.

    Linear value functions are used unless the configuration asks for
    logistic ones, which are fitted to the non-penalized scores of each
    metric in `scoring_results`.

    Args:
        metrics: Metrics of the scoring models, in model order
        config: Weights, value range, scaling and ranking method (default:
            equal weights, linear scaling)
        scoring_results: Scored alternatives the logistic curves are fitted to

    Returns:
        Model ready for `define_alternatives()`

    Raises:
        ModelDefinitionError: If a metric is repeated
    """
    config = config or EvaluationConfig()
    if config.scaling_function is ScalingFunction.LOGISTIC:
        observed: dict[Metric, list[float]] = {m: [] for m in metrics}
        if len(observed) != len(metrics):
            raise ModelDefinitionError("Metric names must be unique")
        for r in scoring_results:
            for s in r.scores:
                if s.metric in observed and not s.penalized:
                    observed[s.metric].append(s.value)
        return AdditiveMODAModel.with_logistic_value_functions(
            observed,
            weights=config.weights,
            factor=config.logistic_factor,
            value_range=config.value_range,
            default_ranking_method=config.ranking_method,
        )
    return AdditiveMODAModel.with_linear_value_functions(
        metrics,
        weights=config.weights,
        value_range=config.value_range,
        default_ranking_method=config.ranking_method,
    )


def _alternative_names(results: Sequence[ScoringResult]) -> list[str]:
    seen: dict[str, int] = {}
    names = []
    for r in results:
        count = seen.get(r.name, 0)
        seen[r.name] = count + 1
        names.append(r.name if count == 0 else f"{r.name} ({count + 1})")
    return names


def evaluate_scoring_results(
    scoring_results: Sequence[ScoringResult],
    model: AdditiveMODAModel | None = None,
    config: EvaluationConfig | None = None,
) -> tuple[list[ScoringResult], AdditiveMODAModel]:
    """
    Evaluate scoring results with an additive MODA model.

    Every scoring result becomes one alternative. Normalization is recomputed
    from the complete set of scores, so all results must be present.

    Args:
        scoring_results: Scored alternatives, all scored by the same models
        model: Evaluation model; built with `create_default_evaluation_model()`
            if None
        config: Evaluation settings

    Returns:
        Tuple of (evaluated scoring results in input order, the model)

    Raises:
        ModelDefinitionError: If there are no scoring results and no model
        MetricMismatchError: If the scores' metrics differ from the model's
    """
    config = config or EvaluationConfig()
    results = list(scoring_results)
    if model is None:
        if not results:
            raise ModelDefinitionError("Cannot build an evaluation model without scoring results")
        model = create_default_evaluation_model(results[0].metrics, config, results)
    for r in results:
        model.check_metrics(r.metrics)
    if not results:
        return [], model

    names = _alternative_names(results)
    model.define_alternatives(
        {name: list(r.scores) for name, r in zip(names, results)},
        adjust_lower_limits=config.adjust_lower_limits,
        adjust_upper_limits=config.adjust_upper_limits,
    )
    first_rank_counts = model.alternative_first_rank_counts(config.ranking_method)
    average_ranking = model.alternative_average_ranking(config.ranking_method)
    weights = model.weights

    evaluated = [
        r.with_evaluation(
            values=model.values_by_alternative(name),
            weights=weights,
            overall_value=model.multi_objective_value(name),
            first_rank_count=first_rank_counts[name],
            average_ranking=average_ranking[name],
        )
        for name, r in zip(names, results)
    ]
    return evaluated, model


def evaluate_scores(
    estimation_results: Sequence[EstimationResult],
    scoring_models: Sequence[PDFScoringModel] | None = None,
    scoring_config: ScoringConfig | None = None,
    evaluation_config: EvaluationConfig | None = None,
    registry: type[DistributionRegistry] = DistributionRegistry,
) -> PDFModelingResults:
    """
    Score and evaluate estimation results, ranking the fitted distributions.

    Args:
        estimation_results: Candidate fits of the same data
        scoring_models: Models to apply (default: built from `scoring_config`)
        scoring_config: BIC limits, plotting positions and worker count
        evaluation_config: Weights, value range, limit adjustment and ranking

    Returns:
        PDFModelingResults with the evaluated, ranked scoring results

    Example:
        >>> results = evaluate_scores(estimation_results)
        >>> results.top_result.family
        'gamma'
        >>> results.rank("normal")
        3
    """
    scoring_config = scoring_config or ScoringConfig()
    if scoring_models is None:
        scoring_models = default_scoring_models(scoring_config)
    estimation_results = list(estimation_results)

    scored = scoring_results(
        estimation_results,
        scoring_models,
        registry=registry,
        max_workers=scoring_config.max_workers,
    )
    metrics = [m.metric for m in scoring_models]
    model = create_default_evaluation_model(metrics, evaluation_config, scored)
    evaluated, model = evaluate_scoring_results(scored, model, evaluation_config)

    results = PDFModelingResults(estimation_results, evaluated, model)
    if evaluated:
        top = results.top_result
        logger.info("Top distribution: %s (overall value %.4f)", top.name, top.overall_value)
    return results
