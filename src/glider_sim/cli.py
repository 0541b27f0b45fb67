"""Command line options shared by the viewer and the exporter."""
from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Optional

from glider_sim.core.config import (
    INTEGRATOR_NAMES,
    SEARCH_CFG,
    CorrectionScheme,
    SearchCfg,
    SystemCfg,
    TrajectoryCfg,
)
from glider_sim.core.physics import Handedness
from glider_sim.data.presets import DEFAULT_PRESET_KEY, PRESETS


HANDEDNESS_CHOICES: dict[str, Optional[Handedness]] = {
    "random": None,
    "cw": Handedness.CLOCKWISE,
    "ccw": Handedness.COUNTER_CLOCKWISE,
}


@dataclass(frozen=True)
class RunSettings:
    system: SystemCfg
    trajectory: TrajectoryCfg
    search: SearchCfg
    # None draws one per search attempt.
    handedness: Optional[Handedness] = None


def add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--preset", choices=sorted(PRESETS), default=DEFAULT_PRESET_KEY)
    parser.add_argument("--seed", type=int, default=None, help="Seed for planets and search")
    parser.add_argument("--planets", type=int, default=None, help="Number of planets")
    parser.add_argument("--max-mass", type=float, default=None)
    parser.add_argument("--spiral", type=float, default=None, help="Spiral factor")
    parser.add_argument("--stepsize", type=float, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--integrator", choices=INTEGRATOR_NAMES, default=None)
    parser.add_argument(
        "--scheme", choices=[scheme.value for scheme in CorrectionScheme], default=None
    )
    parser.add_argument("--attempts", type=int, default=None, help="Path search attempts")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for the search")
    parser.add_argument(
        "--handedness",
        choices=list(HANDEDNESS_CHOICES),
        default="random",
        help="Glider direction; random flips a seeded coin per search attempt",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print search progress")


def _overrides(args: argparse.Namespace, mapping: dict[str, str]) -> dict[str, object]:
    return {
        field_name: getattr(args, arg_name)
        for arg_name, field_name in mapping.items()
        if getattr(args, arg_name) is not None
    }


def settings_from_args(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> RunSettings:
    preset = PRESETS[args.preset]
    try:
        system = replace(
            preset.system_cfg(),
            **_overrides(args, {"seed": "seed", "planets": "planet_count", "max_mass": "max_mass"}),
        )
        trajectory = replace(
            preset.trajectory_cfg(),
            **_overrides(
                args,
                {
                    "spiral": "spiral_factor",
                    "stepsize": "stepsize",
                    "max_steps": "max_steps",
                    "integrator": "integrator",
                    "scheme": "scheme",
                },
            ),
        )
        search = replace(
            SEARCH_CFG,
            verbose=not args.quiet,
            **_overrides(args, {"attempts": "max_attempts", "workers": "workers"}),
        )
    except ValueError as exc:
        parser.error(str(exc))
    return RunSettings(
        system=system,
        trajectory=trajectory,
        search=search,
        handedness=HANDEDNESS_CHOICES[args.handedness],
    )


__all__ = ["HANDEDNESS_CHOICES", "RunSettings", "add_generation_arguments", "settings_from_args"]
