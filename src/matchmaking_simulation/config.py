from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from matchmaking_simulation.mechanisms import MatchingParams, ProposerOrder
from matchmaking_simulation.models import ConfigurationError


@dataclass(frozen=True)
class SimulationParams:
    population_size: int = 1000
    preference_complexity: int = 3
    # Shared by every generated individual when set; len must equal preference_complexity.
    predefined_weights: tuple[float, ...] | None = None
    rounds: int = 100
    seed: int = 7
    proposer_order: ProposerOrder = "storage"
    clear_stale_partners: bool = False

    def matching_params(self) -> MatchingParams:
        return MatchingParams(
            proposer_order=self.proposer_order,
            clear_stale_partners=self.clear_stale_partners,
        )


_INT_FIELDS = ("population_size", "preference_complexity", "rounds", "seed")
_BOOL_FIELDS = ("clear_stale_partners",)


def validate_params(params: SimulationParams) -> SimulationParams:
    if params.population_size < 1:
        raise ConfigurationError("population_size must be >= 1")
    if params.preference_complexity < 1:
        raise ConfigurationError("preference_complexity must be >= 1")
    if params.rounds < 1:
        raise ConfigurationError("rounds must be >= 1")
    if params.proposer_order not in ("storage", "shuffled"):
        raise ConfigurationError(f"Unknown proposer_order: {params.proposer_order!r}")
    weights = params.predefined_weights
    if weights is not None and len(weights) != params.preference_complexity:
        raise ConfigurationError(
            f"predefined_weights has {len(weights)} entries, "
            f"expected {params.preference_complexity}"
        )
    return params


def params_with_overrides(base: SimulationParams, overrides: dict[str, Any]) -> SimulationParams:
    data = asdict(base)
    for key, value in overrides.items():
        if key not in data:
            raise ConfigurationError(f"Unknown SimulationParams key: {key}")
        data[key] = value

    try:
        for key in _INT_FIELDS:
            data[key] = int(data[key])
        for key in _BOOL_FIELDS:
            if not isinstance(data[key], bool):
                raise TypeError(f"{key} must be a boolean")
        data["proposer_order"] = str(data["proposer_order"])
        weights = data["predefined_weights"]
        if weights is not None:
            data["predefined_weights"] = tuple(float(x) for x in weights)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e)) from e

    return validate_params(SimulationParams(**data))


def load_params(
    path: str | os.PathLike[str], *, base: SimulationParams | None = None
) -> SimulationParams:
    overrides = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return params_with_overrides(base or SimulationParams(), overrides)
