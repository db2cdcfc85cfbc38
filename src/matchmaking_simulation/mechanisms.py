from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

from matchmaking_simulation.logging_utils import get_logger, log
from matchmaking_simulation.models import Individual, Population, RoundReport
from matchmaking_simulation.scoring import score

logger = get_logger(__name__)

ProposerOrder = Literal["storage", "shuffled"]


@dataclass(frozen=True)
class MatchingParams:
    proposer_order: ProposerOrder = "storage"
    # False keeps the reference behavior: a displaced partner keeps pointing
    # at the responder that left it.
    clear_stale_partners: bool = False


def _release(population: Population, holder: Individual, partner_id: str | None) -> None:
    """
    Clears `partner_id`'s candidate if it still points at `holder`.
    """
    if partner_id is None:
        return
    partner = population.get(partner_id)
    if partner.candidate == holder.identity:
        partner.clear_candidate()


def _pair(
    population: Population,
    proposer: Individual,
    responder: Individual,
    value: float,
    *,
    clear_stale_partners: bool,
) -> None:
    if clear_stale_partners:
        if proposer.candidate != responder.identity:
            _release(population, proposer, proposer.candidate)
        if responder.candidate != proposer.identity:
            _release(population, responder, responder.candidate)
    proposer.pair_with(responder.identity, value)
    responder.pair_with(proposer.identity, value)


def _proposer_order(
    population: Population, params: MatchingParams, rng: random.Random | None
) -> list[Individual]:
    order = list(population.proposers)
    if params.proposer_order == "shuffled":
        if rng is None:
            raise ValueError("proposer_order='shuffled' requires an rng")
        rng.shuffle(order)
    elif params.proposer_order != "storage":
        raise ValueError(f"Unknown proposer_order: {params.proposer_order!r}")
    return order


def run_round(
    population: Population,
    *,
    params: MatchingParams | None = None,
    rng: random.Random | None = None,
) -> RoundReport:
    """
    One greedy proposal pass over every proposer.

    Each proposer scans responders in storage order and stops at the first
    one that accepts. The responder judges the proposal with its own weights
    against the proposer's ratings. An unmatched responder always accepts; a
    matched one accepts when the new score is at least its current
    candidate's score, otherwise the proposer blacklists it for good. The
    first acceptable responder wins, not the best one.

    Candidate and blacklist state carries over from earlier rounds and is
    never reset here. A DimensionMismatchError from scoring aborts the round.
    The population lock is held for the whole pass.
    """
    params = params or MatchingParams()
    proposals = 0
    acceptances = 0
    displacements = 0
    rejections = 0
    blacklist_skips = 0
    unmatched = 0
    pairs: list[tuple[str, str]] = []

    with population.lock:
        for proposer in _proposer_order(population, params, rng):
            accepted = False
            for responder in population.responders:
                if responder.identity in proposer.blacklist:
                    blacklist_skips += 1
                    continue

                value = score(responder, proposer)
                proposals += 1

                current = responder.candidate_score
                if current is not None and value < current:
                    proposer.blacklist.add(responder.identity)
                    rejections += 1
                    continue

                if responder.candidate is not None and responder.candidate != proposer.identity:
                    displacements += 1
                _pair(
                    population,
                    proposer,
                    responder,
                    value,
                    clear_stale_partners=params.clear_stale_partners,
                )
                acceptances += 1
                pairs.append((proposer.identity, responder.identity))
                accepted = True
                break

            if not accepted:
                unmatched += 1

    report = RoundReport(
        proposals=proposals,
        acceptances=acceptances,
        displacements=displacements,
        rejections=rejections,
        blacklist_skips=blacklist_skips,
        unmatched_proposers=unmatched,
        pairs=tuple(pairs),
    )
    log(
        logger,
        10,
        "matching_round_done",
        proposals=proposals,
        acceptances=acceptances,
        displacements=displacements,
        rejections=rejections,
        blacklist_skips=blacklist_skips,
        unmatched_proposers=unmatched,
    )
    return report
