"""
Basic usage example for pdfmodeler.

This example demonstrates the core functionality:
1. Fitting several candidate distributions to the same data
2. Scoring and ranking the candidates
3. Inspecting scores, metric values and ranks
"""

import numpy as np
from scipy import stats

import pdfmodeler as pm


def main() -> None:
    """Run basic usage examples."""

    rng = np.random.default_rng(12345)
    data = 2.0 + rng.gamma(shape=2.5, scale=1.2, size=250)

    # Example 1: Candidate fits, one of them on shifted data
    print("Example 1: Ranking candidate fits")
    print("-" * 50)

    shifted = pm.left_shift_data(data)
    print(f"Estimated left shift: {shifted.shift:.4f}")

    shape, _, scale = stats.gamma.fit(shifted.shifted_data, floc=0.0)
    mean, var = float(np.mean(data)), float(np.var(data))

    candidates = [
        pm.EstimationResult(
            data,
            pm.FittedParameters("gamma", {"shape": shape, "scale": scale}, "GammaMLE"),
            shifted_data=shifted,
        ),
        pm.EstimationResult(data, pm.FittedParameters("normal", {"mean": mean, "variance": var}, "NormalMLE")),
        pm.EstimationResult(data, pm.FittedParameters("lognormal", {"mean": mean, "variance": var}, "LognormalMOM")),
        pm.EstimationResult(data, None, success=False, message="Weibull estimation did not converge"),
    ]

    results = pm.evaluate_scores(candidates)
    print(results.summary())
    print()

    # Example 2: All scoring models, custom weights and parallel scoring
    print("Example 2: All metrics, BIC weighted double")
    print("-" * 50)

    models = pm.all_scoring_models()
    weights = {m.name: 1.0 for m in models}
    weights["BIC"] = 2.0
    results = pm.evaluate_scores(
        candidates,
        scoring_models=models,
        scoring_config=pm.ScoringConfig(max_workers=4),
        evaluation_config=pm.EvaluationConfig(weights=weights),
    )
    print(results.metrics_as_dataframe().to_string(index=False))
    print()

    # Example 3: Rank queries
    print("Example 3: Ranks")
    print("-" * 50)
    print(f"Top family (scoring): {results.top_family}")
    print(f"Top by ranking:       {results.top_result_by(pm.EvaluationMethod.RANKING).name}")
    print(f"Rank of gamma fit:    {results.rank(candidates[0])}")
    print(f"Rank of failed fit:   {results.rank(candidates[-1])}")
    print(f"Family ranks:         {results.family_ranks()}")


if __name__ == "__main__":
    main()
