from __future__ import annotations

from dataclasses import dataclass

from matchmaking_simulation.models import (
    PROPOSER_GENDER,
    RESPONDER_GENDER,
    Gender,
    Individual,
    Population,
)


def _pct(part: int, whole: int) -> float:
    return 100.0 * part / whole if whole else 0.0


@dataclass(frozen=True)
class PopulationStatistics:
    proposers_total: int
    proposers_matched: int
    responders_total: int
    responders_matched: int
    larger_gender: Gender | None  # None when both sides are the same size
    imbalance: int
    unmatched_total: int
    mutual_pairs: int
    stale_candidates: int

    @property
    def population_total(self) -> int:
        return self.proposers_total + self.responders_total

    @property
    def proposers_matched_pct(self) -> float:
        return _pct(self.proposers_matched, self.proposers_total)

    @property
    def responders_matched_pct(self) -> float:
        return _pct(self.responders_matched, self.responders_total)

    @property
    def unmatched_pct(self) -> float:
        return _pct(self.unmatched_total, self.population_total)

    def describe_imbalance(self) -> str:
        if self.larger_gender is None:
            return "Both populations have the same size"
        smaller = RESPONDER_GENDER if self.larger_gender == PROPOSER_GENDER else PROPOSER_GENDER
        return (
            f"The {self.larger_gender} population exceeds the {smaller} population "
            f"by {self.imbalance}"
        )

    def as_row(self) -> dict[str, object]:
        return {
            "proposers_matched": self.proposers_matched,
            "proposers_total": self.proposers_total,
            "proposers_matched_pct": round(self.proposers_matched_pct, 2),
            "responders_matched": self.responders_matched,
            "responders_total": self.responders_total,
            "responders_matched_pct": round(self.responders_matched_pct, 2),
            "larger_gender": self.larger_gender or "",
            "imbalance": self.imbalance,
            "unmatched_total": self.unmatched_total,
            "unmatched_pct": round(self.unmatched_pct, 2),
            "mutual_pairs": self.mutual_pairs,
            "stale_candidates": self.stale_candidates,
        }


def _points_back(population: Population, ind: Individual) -> bool:
    if ind.candidate is None:
        return False
    return population.get(ind.candidate).candidate == ind.identity


def compute_statistics(population: Population) -> PopulationStatistics:
    n_p = len(population.proposers)
    n_r = len(population.responders)
    matched_p = sum(1 for ind in population.proposers if ind.is_matched)
    matched_r = sum(1 for ind in population.responders if ind.is_matched)

    mutual = sum(1 for ind in population.proposers if _points_back(population, ind))
    stale = sum(
        1
        for ind in population.individuals()
        if ind.is_matched and not _points_back(population, ind)
    )

    if n_p > n_r:
        larger: Gender | None = PROPOSER_GENDER
    elif n_r > n_p:
        larger = RESPONDER_GENDER
    else:
        larger = None

    return PopulationStatistics(
        proposers_total=n_p,
        proposers_matched=matched_p,
        responders_total=n_r,
        responders_matched=matched_r,
        larger_gender=larger,
        imbalance=abs(n_p - n_r),
        unmatched_total=(n_p - matched_p) + (n_r - matched_r),
        mutual_pairs=mutual,
        stale_candidates=stale,
    )
