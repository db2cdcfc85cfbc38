from __future__ import annotations

import pytest

from matchmaking_simulation.models import DimensionMismatchError
from matchmaking_simulation.scoring import score


def test_score_is_weighted_sum_of_target_ratings(individual) -> None:
    evaluator = individual("e", "female", [0.5, 2.0], [9.0, 9.0])
    target = individual("t", "male", [0.0, 0.0], [4.0, 3.0])
    assert score(evaluator, target) == pytest.approx(0.5 * 4.0 + 2.0 * 3.0)


def test_score_is_asymmetric(individual) -> None:
    a = individual("a", "male", [1.0, 2.0], [3.0, 4.0])
    b = individual("b", "female", [5.0, 6.0], [7.0, 8.0])
    assert score(a, b) == pytest.approx(23.0)
    assert score(b, a) == pytest.approx(39.0)
    assert score(a, b) != score(b, a)


def test_score_can_coincide_for_proportional_vectors(individual) -> None:
    a = individual("a", "male", [1.0, 2.0], [1.0, 2.0])
    b = individual("b", "female", [2.0, 4.0], [2.0, 4.0])
    assert score(a, b) == score(b, a) == pytest.approx(10.0)


def test_score_rejects_mismatched_dimensions(individual) -> None:
    a = individual("a", "male", [1.0, 2.0], [1.0, 2.0])
    b = individual("b", "female", [1.0], [1.0])
    with pytest.raises(DimensionMismatchError):
        score(a, b)
    with pytest.raises(DimensionMismatchError):
        score(b, a)
