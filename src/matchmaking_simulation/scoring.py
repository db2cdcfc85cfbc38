from __future__ import annotations

from matchmaking_simulation.models import DimensionMismatchError, Individual


def score(evaluator: Individual, target: Individual) -> float:
    """
    How much `evaluator` values `target`: evaluator's weights dotted with
    target's ratings. Not symmetric; score(a, b) and score(b, a) use
    different vectors.
    """
    weights = evaluator.preference_weights
    ratings = target.ratings
    if len(weights) != len(ratings):
        raise DimensionMismatchError(
            f"Weights of {evaluator.identity} have {len(weights)} entries, "
            f"ratings of {target.identity} have {len(ratings)}"
        )
    return sum(w * r for w, r in zip(weights, ratings, strict=True))
