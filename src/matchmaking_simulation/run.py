from __future__ import annotations

import argparse
import csv
import json
import logging
import random
import time
from dataclasses import asdict, replace
from pathlib import Path

from matchmaking_simulation.analysis import compute_statistics
from matchmaking_simulation.config import SimulationParams, load_params, validate_params
from matchmaking_simulation.logging_utils import get_logger, log, set_level
from matchmaking_simulation.mechanisms import run_round
from matchmaking_simulation.simulation import generate_population

logger = get_logger(__name__)


def _write_markdown_table(rows: list[dict[str, object]], out_path: Path) -> None:
    if not rows:
        out_path.write_text("", encoding="utf-8")
        return
    headers = list(rows[0].keys())
    lines = []
    lines.append("| " + " | ".join(headers) + " |")
    lines.append("| " + " | ".join(["---"] * len(headers)) + " |")
    for row in rows:
        lines.append("| " + " | ".join(str(row[h]) for h in headers) + " |")
    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def run_simulation(params: SimulationParams) -> tuple[list[dict[str, object]], dict[str, object]]:
    """
    Builds one population and runs `params.rounds` matching rounds on it,
    collecting statistics after every round. Returns one row per round plus
    run metadata.
    """
    rng = random.Random(params.seed)  # nosec B311
    population = generate_population(
        rng,
        params.population_size,
        params.preference_complexity,
        predefined_weights=params.predefined_weights,
    )
    matching = params.matching_params()

    rows: list[dict[str, object]] = []
    for r in range(1, params.rounds + 1):
        started = time.perf_counter()
        report = run_round(population, params=matching, rng=rng)
        stats = compute_statistics(population)
        elapsed = time.perf_counter() - started

        row: dict[str, object] = {
            "round": r,
            "proposals": report.proposals,
            "acceptances": report.acceptances,
            "displacements": report.displacements,
            "rejections": report.rejections,
            "blacklist_skips": report.blacklist_skips,
            "unmatched_proposers": report.unmatched_proposers,
        }
        row.update(stats.as_row())
        row["seconds"] = round(elapsed, 3)
        rows.append(row)
        log(
            logger,
            20,
            "round_done",
            round=r,
            rounds=params.rounds,
            acceptances=report.acceptances,
            rejections=report.rejections,
            unmatched_pct=row["unmatched_pct"],
            seconds=row["seconds"],
        )

    final = compute_statistics(population)
    meta: dict[str, object] = {
        "params": asdict(params),
        "proposers": final.proposers_total,
        "responders": final.responders_total,
        "imbalance": final.describe_imbalance(),
        "final_unmatched_pct": round(final.unmatched_pct, 2),
    }
    return rows, meta


def write_report(
    *,
    out_dir: Path,
    rows: list[dict[str, object]],
    metadata: dict[str, object],
) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)

    if rows:
        with (out_dir / "rounds.csv").open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
    _write_markdown_table(rows, out_dir / "rounds.md")

    (out_dir / "run_metadata.json").write_text(
        json.dumps(metadata, indent=2, ensure_ascii=False), encoding="utf-8"
    )


def _parse_weights(raw: str) -> tuple[float, ...] | None:
    if not raw:
        return None
    return tuple(float(x) for x in raw.split(","))


def build_params(args: argparse.Namespace) -> SimulationParams:
    base = load_params(args.params_json) if args.params_json else SimulationParams()
    updates: dict[str, object] = {}
    if args.population_size is not None:
        updates["population_size"] = args.population_size
    if args.complexity is not None:
        updates["preference_complexity"] = args.complexity
    if args.rounds is not None:
        updates["rounds"] = args.rounds
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.weights:
        updates["predefined_weights"] = _parse_weights(args.weights)
    if args.shuffle_proposers:
        updates["proposer_order"] = "shuffled"
    if args.clear_stale_partners:
        updates["clear_stale_partners"] = True
    return validate_params(replace(base, **updates))


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Repeated greedy two-sided matching simulation")
    parser.add_argument("--out", default="reports/latest")
    parser.add_argument("--population-size", type=int, default=None)
    parser.add_argument("--complexity", type=int, default=None)
    parser.add_argument("--rounds", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--weights", default="", help="comma separated, e.g. 0.7,0.2,0.1")
    parser.add_argument("--shuffle-proposers", action="store_true")
    parser.add_argument("--clear-stale-partners", action="store_true")
    parser.add_argument("--params-json", default="")
    parser.add_argument("--verbose", action="store_true", help="log every matching round")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = make_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    params = build_params(args)

    rows, meta = run_simulation(params)
    out_dir = Path(args.out)
    write_report(out_dir=out_dir, rows=rows, metadata=meta)
    log(logger, 20, "report_written", out_dir=str(out_dir))


if __name__ == "__main__":
    main()
