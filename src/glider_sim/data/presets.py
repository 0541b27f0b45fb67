"""Named parameter sets for generating glider scenes."""
from __future__ import annotations

from dataclasses import dataclass, replace

from glider_sim.core.config import (
    SYSTEM_CFG,
    TRAJECTORY_CFG,
    CorrectionScheme,
    SystemCfg,
    TrajectoryCfg,
)


@dataclass(frozen=True)
class Preset:
    key: str
    name: str
    planet_count: int
    spiral_factor: float
    scheme: CorrectionScheme
    integrator: str
    description: str
    stepsize: float = TRAJECTORY_CFG.stepsize
    max_steps: int = TRAJECTORY_CFG.max_steps

    def system_cfg(self, base: SystemCfg = SYSTEM_CFG) -> SystemCfg:
        return replace(base, planet_count=self.planet_count)

    def trajectory_cfg(self, base: TrajectoryCfg = TRAJECTORY_CFG) -> TrajectoryCfg:
        return replace(
            base,
            spiral_factor=self.spiral_factor,
            scheme=self.scheme,
            integrator=self.integrator,
            stepsize=self.stepsize,
            max_steps=self.max_steps,
        )


PRESET_DEFINITIONS: tuple[Preset, ...] = (
    Preset(
        key="orbits",
        name="Orbits",
        planet_count=4,
        spiral_factor=0.0,
        scheme=CorrectionScheme.GRADIENT,
        integrator="rk4",
        description="Pure level curves of the gravity field; near-closed loops.",
    ),
    Preset(
        key="spirals",
        name="Spirals",
        planet_count=4,
        spiral_factor=0.25,
        scheme=CorrectionScheme.GRADIENT,
        integrator="rk4",
        description="Angular field bends the level curves into slow spirals.",
    ),
    Preset(
        key="drift",
        name="Potential drift",
        planet_count=5,
        spiral_factor=0.03,
        scheme=CorrectionScheme.POTENTIAL,
        integrator="midpoint",
        description="Midpoint steps snapped to a target potential that drifts with swept angle.",
    ),
    Preset(
        key="raw-euler",
        name="Raw Euler",
        planet_count=3,
        spiral_factor=0.0,
        scheme=CorrectionScheme.NONE,
        integrator="euler",
        description="Uncorrected Euler steps; gliders visibly drift outward.",
        stepsize=5.0,
        max_steps=600,
    ),
)

PRESETS: dict[str, Preset] = {preset.key: preset for preset in PRESET_DEFINITIONS}
PRESET_DISPLAY_ORDER: list[str] = [preset.key for preset in PRESET_DEFINITIONS]
DEFAULT_PRESET_KEY = PRESET_DISPLAY_ORDER[0]


__all__ = [
    "DEFAULT_PRESET_KEY",
    "PRESETS",
    "PRESET_DEFINITIONS",
    "PRESET_DISPLAY_ORDER",
    "Preset",
]
