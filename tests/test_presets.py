from dataclasses import replace

import pytest

from glider_sim.core.config import SEARCH_CFG
from glider_sim.core.model import PlanetarySystem
from glider_sim.core.physics import generate_trajectory
from glider_sim.core.scoring import evaluate_path
from glider_sim.core.search import search_best_candidate
from glider_sim.data.presets import PRESETS


@pytest.mark.parametrize("key", sorted(PRESETS))
def test_preset_search_finds_a_planet_tour(key):
    preset = PRESETS[key]
    system_cfg = preset.system_cfg()
    trajectory_cfg = preset.trajectory_cfg()
    system = PlanetarySystem.from_config(system_cfg)
    best = search_best_candidate(
        system,
        system_cfg.seed,
        trajectory_cfg=trajectory_cfg,
        search_cfg=replace(SEARCH_CFG, max_attempts=40),
        handedness=None,
    )
    stats = evaluate_path(
        system, generate_trajectory(system, best.start, trajectory_cfg, best.handedness)
    )
    assert best.score > 0.0
    assert stats.planet_switches > 0
    assert stats.score == best.score
