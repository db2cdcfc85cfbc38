from __future__ import annotations

import random
import uuid
from collections.abc import Sequence

from matchmaking_simulation.logging_utils import get_logger, log
from matchmaking_simulation.models import (
    GENDERS,
    PROPOSER_GENDER,
    ConfigurationError,
    Individual,
    Population,
)

logger = get_logger(__name__)

RATING_MIN = 1.0
RATING_MAX = 10.0


def _check_complexity(
    complexity: int, predefined_weights: Sequence[float] | None
) -> tuple[float, ...] | None:
    if complexity < 1:
        raise ConfigurationError(f"Preference complexity must be >= 1, got {complexity}")
    if predefined_weights is None:
        return None
    if len(predefined_weights) != complexity:
        raise ConfigurationError(
            f"Predefined weights have {len(predefined_weights)} entries, "
            f"expected {complexity}"
        )
    return tuple(float(w) for w in predefined_weights)


def draw_attribute_vectors(
    rng: random.Random,
    complexity: int,
    *,
    predefined_weights: Sequence[float] | None = None,
) -> tuple[tuple[float, ...], tuple[float, ...]]:
    weights = _check_complexity(complexity, predefined_weights)
    if weights is None:
        weights = tuple(rng.random() for _ in range(complexity))
    ratings = tuple(rng.uniform(RATING_MIN, RATING_MAX) for _ in range(complexity))
    return weights, ratings


def new_identity(rng: random.Random) -> str:
    # uuid4 layout, but drawn from rng so a seed reproduces the whole run
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_individual(
    rng: random.Random,
    complexity: int,
    *,
    predefined_weights: Sequence[float] | None = None,
) -> Individual:
    weights, ratings = draw_attribute_vectors(
        rng, complexity, predefined_weights=predefined_weights
    )
    return Individual(
        identity=new_identity(rng),
        gender=rng.choice(GENDERS),
        preference_weights=weights,
        ratings=ratings,
    )


def generate_population(
    rng: random.Random,
    population_size: int,
    complexity: int,
    *,
    predefined_weights: Sequence[float] | None = None,
) -> Population:
    """
    Draws `population_size` individuals and splits them by gender.

    The same `predefined_weights` override, when given, is used by every
    individual of both genders. Configuration is validated before the first
    individual is drawn.
    """
    weights = _check_complexity(complexity, predefined_weights)
    if population_size < 1:
        raise ConfigurationError(f"Population size must be >= 1, got {population_size}")

    proposers: list[Individual] = []
    responders: list[Individual] = []
    for _ in range(population_size):
        ind = generate_individual(rng, complexity, predefined_weights=weights)
        if ind.gender == PROPOSER_GENDER:
            proposers.append(ind)
        else:
            responders.append(ind)

    population = Population(proposers=proposers, responders=responders)
    log(
        logger,
        20,
        "population_built",
        population_size=population_size,
        complexity=complexity,
        proposers=len(proposers),
        responders=len(responders),
        predefined_weights=list(weights) if weights is not None else None,
    )
    return population
