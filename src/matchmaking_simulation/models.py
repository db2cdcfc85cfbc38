from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

Gender = Literal["male", "female"]

GENDERS: tuple[Gender, ...] = ("male", "female")
PROPOSER_GENDER: Gender = "male"
RESPONDER_GENDER: Gender = "female"


class ConfigurationError(ValueError):
    pass


class DimensionMismatchError(ValueError):
    pass


@dataclass(eq=False)
class Individual:
    identity: str
    gender: Gender
    preference_weights: tuple[float, ...]  # how much this individual values each attribute
    ratings: tuple[float, ...]  # this individual's own score on each attribute
    blacklist: set[str] = field(default_factory=set)
    candidate: str | None = None
    candidate_score: float | None = None

    @property
    def is_matched(self) -> bool:
        return self.candidate is not None

    def pair_with(self, identity: str, score: float) -> None:
        self.candidate = identity
        self.candidate_score = score

    def clear_candidate(self) -> None:
        self.candidate = None
        self.candidate_score = None


@dataclass(eq=False)
class Population:
    """
    Proposers and responders of one simulation run.

    Both collections are stored in generation order, which is also the scan
    order of the matching engine. Individuals refer to each other only through
    identity tokens; `get` resolves a token back to its entry.
    """

    proposers: list[Individual]
    responders: list[Individual]
    _by_identity: dict[str, Individual] = field(init=False, repr=False)
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        for ind in self.proposers:
            if ind.gender != PROPOSER_GENDER:
                raise ConfigurationError(f"Proposer {ind.identity} has gender {ind.gender!r}")
        for ind in self.responders:
            if ind.gender != RESPONDER_GENDER:
                raise ConfigurationError(f"Responder {ind.identity} has gender {ind.gender!r}")

        by_identity: dict[str, Individual] = {}
        dims: set[int] = set()
        for ind in self.individuals():
            if ind.identity in by_identity:
                raise ConfigurationError(f"Duplicate identity: {ind.identity}")
            by_identity[ind.identity] = ind
            dims.add(len(ind.preference_weights))
            dims.add(len(ind.ratings))
        if len(dims) > 1:
            raise ConfigurationError(f"Mixed preference complexity: {sorted(dims)}")
        self._by_identity = by_identity

    def __len__(self) -> int:
        return len(self.proposers) + len(self.responders)

    def individuals(self) -> Iterator[Individual]:
        yield from self.proposers
        yield from self.responders

    def get(self, identity: str) -> Individual:
        return self._by_identity[identity]

    @property
    def complexity(self) -> int | None:
        for ind in self.individuals():
            return len(ind.preference_weights)
        return None

    @property
    def lock(self) -> threading.Lock:
        return self._lock


@dataclass(frozen=True)
class RoundReport:
    proposals: int
    acceptances: int
    displacements: int
    rejections: int
    blacklist_skips: int
    unmatched_proposers: int
    pairs: tuple[tuple[str, str], ...]  # (proposer identity, responder identity)
