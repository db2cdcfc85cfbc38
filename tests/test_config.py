from __future__ import annotations

import json

import pytest

from matchmaking_simulation.config import SimulationParams, load_params, params_with_overrides
from matchmaking_simulation.mechanisms import MatchingParams
from matchmaking_simulation.models import ConfigurationError


def test_overrides_are_applied_and_coerced() -> None:
    params = params_with_overrides(
        SimulationParams(),
        {"population_size": "50", "predefined_weights": [1, 0, 0], "proposer_order": "shuffled"},
    )
    assert params.population_size == 50
    assert params.predefined_weights == (1.0, 0.0, 0.0)
    assert params.matching_params() == MatchingParams(proposer_order="shuffled")


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        params_with_overrides(SimulationParams(), {"populaton_size": 10})


@pytest.mark.parametrize(
    "overrides",
    [
        {"predefined_weights": [0.5, 0.5]},
        {"rounds": 0},
        {"population_size": "many"},
        {"clear_stale_partners": "yes"},
        {"proposer_order": "random"},
    ],
)
def test_invalid_values_are_rejected(overrides) -> None:
    with pytest.raises(ConfigurationError):
        params_with_overrides(SimulationParams(), overrides)


def test_load_params_from_json(tmp_path) -> None:
    path = tmp_path / "params.json"
    path.write_text(
        json.dumps({"rounds": 5, "clear_stale_partners": True, "preference_complexity": 1}),
        encoding="utf-8",
    )
    params = load_params(path)
    assert params.rounds == 5
    assert params.clear_stale_partners is True
    assert params.preference_complexity == 1


def test_load_params_requires_object(tmp_path) -> None:
    path = tmp_path / "params.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_params(path)
