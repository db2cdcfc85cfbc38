from __future__ import annotations

import pytest

from matchmaking_simulation.analysis import compute_statistics
from matchmaking_simulation.mechanisms import run_round
from matchmaking_simulation.models import Population


def test_empty_population_reports_zero_percentages() -> None:
    stats = compute_statistics(Population(proposers=[], responders=[]))
    assert stats.population_total == 0
    assert stats.unmatched_pct == 0.0
    assert stats.proposers_matched_pct == 0.0
    assert stats.responders_matched_pct == 0.0
    assert stats.larger_gender is None
    assert stats.imbalance == 0
    assert stats.describe_imbalance() == "Both populations have the same size"


def test_statistics_after_displacement(individual) -> None:
    pop = Population(
        proposers=[
            individual("p1", "male", [1.0], [3.0]),
            individual("p2", "male", [1.0], [7.0]),
            individual("p3", "male", [1.0], [1.0]),
        ],
        responders=[individual("r1", "female", [1.0], [4.0])],
    )
    run_round(pop)
    stats = compute_statistics(pop)

    # p1 keeps a stale candidate, p3 is rejected outright
    assert stats.proposers_matched == 2
    assert stats.proposers_total == 3
    assert stats.responders_matched == 1
    assert stats.unmatched_total == 1
    assert stats.mutual_pairs == 1
    assert stats.stale_candidates == 1
    assert stats.larger_gender == "male"
    assert stats.imbalance == 2
    assert stats.unmatched_pct == pytest.approx(25.0)
    assert "male population exceeds the female population by 2" in stats.describe_imbalance()


def test_statistics_do_not_mutate_population(individual) -> None:
    pop = Population(
        proposers=[individual("p1", "male", [1.0], [3.0])],
        responders=[individual("r1", "female", [1.0], [4.0])],
    )
    run_round(pop)
    before = [(i.candidate, i.candidate_score, set(i.blacklist)) for i in pop.individuals()]
    compute_statistics(pop)
    after = [(i.candidate, i.candidate_score, set(i.blacklist)) for i in pop.individuals()]
    assert before == after


def test_as_row_rounds_percentages(individual) -> None:
    pop = Population(
        proposers=[individual("p1", "male", [1.0], [3.0])],
        responders=[
            individual("r1", "female", [1.0], [4.0]),
            individual("r2", "female", [1.0], [4.0]),
        ],
    )
    run_round(pop)
    row = compute_statistics(pop).as_row()
    assert row["unmatched_pct"] == 33.33
    assert row["responders_matched_pct"] == 50.0
    assert row["larger_gender"] == "female"
    assert row["stale_candidates"] == 0
