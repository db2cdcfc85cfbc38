from __future__ import annotations

from collections.abc import Sequence

import pytest

from matchmaking_simulation.models import Gender, Individual


def make_individual(
    identity: str,
    gender: Gender,
    weights: Sequence[float],
    ratings: Sequence[float],
) -> Individual:
    return Individual(
        identity=identity,
        gender=gender,
        preference_weights=tuple(weights),
        ratings=tuple(ratings),
    )


@pytest.fixture
def individual():
    return make_individual
