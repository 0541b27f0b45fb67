from dataclasses import replace

import pytest

from glider_sim.core.config import CorrectionScheme, TrajectoryCfg
from glider_sim.core.physics import (
    GradientStepper,
    Handedness,
    PotentialStepper,
    UncorrectedStepper,
    background_trajectories,
    generate_trajectory,
    iter_trajectory,
    make_stepper,
)
from glider_sim.core.vector import Vector2


START = Vector2(50.0, 0.0)


def radii(path):
    return [p.magnitude() for p in path]


@pytest.mark.parametrize("max_steps", [0, 1])
def test_tiny_step_budget_returns_only_start(single_planet, max_steps):
    cfg = TrajectoryCfg(max_steps=max_steps)
    assert generate_trajectory(single_planet, START, cfg) == [START]


@pytest.mark.parametrize("scheme", list(CorrectionScheme))
def test_start_on_planet_stops_immediately(single_planet, scheme):
    cfg = TrajectoryCfg(scheme=scheme, spiral_factor=1.0)
    assert generate_trajectory(single_planet, Vector2(0.0, 0.0), cfg) == [Vector2(0.0, 0.0)]


def test_empty_system_has_no_direction(system_factory):
    empty = system_factory([])
    assert generate_trajectory(empty, START) == [START]


def test_oversized_step_is_kept_then_stops(single_planet):
    path = generate_trajectory(single_planet, Vector2(60.0, 0.0), TrajectoryCfg(stepsize=25.0))
    assert len(path) == 2
    assert (path[1] - path[0]).sq_magnitude() > 400.0


def test_stalled_step_is_kept_then_stops(single_planet):
    path = generate_trajectory(single_planet, START, TrajectoryCfg(stepsize=0.05))
    assert len(path) == 2


def test_rk4_level_curve_stays_on_circle(single_planet):
    cfg = TrajectoryCfg(max_steps=51)
    path = generate_trajectory(single_planet, START, cfg)
    assert len(path) == 51
    for r in radii(path):
        assert r == pytest.approx(50.0, rel=0.05)
    assert max(radii(path)) < 52.5


def test_euler_drifts_outward(single_planet):
    cfg = TrajectoryCfg(max_steps=51, integrator="euler")
    path = generate_trajectory(single_planet, START, cfg)
    assert max(radii(path)) > 55.0


def test_handedness_sets_direction_of_travel(single_planet):
    cfg = TrajectoryCfg(max_steps=20)
    cw = generate_trajectory(single_planet, START, cfg, Handedness.CLOCKWISE)
    ccw = generate_trajectory(single_planet, START, cfg, Handedness.COUNTER_CLOCKWISE)
    assert cw[1].y > 0.0
    assert ccw[1].y < 0.0
    assert len(cw) == len(ccw)
    for a, b in zip(cw, ccw):
        assert b.x == pytest.approx(a.x)
        assert b.y == pytest.approx(-a.y)


def test_spiral_factor_bends_orbit(single_planet):
    cfg = TrajectoryCfg(max_steps=11, spiral_factor=10.0)
    inward = generate_trajectory(single_planet, START, cfg, Handedness.CLOCKWISE)
    outward = generate_trajectory(single_planet, START, cfg, Handedness.COUNTER_CLOCKWISE)
    assert inward[-1].magnitude() < 45.0
    assert outward[-1].magnitude() > 55.0


def test_generation_is_deterministic(twin_planets):
    cfg = TrajectoryCfg(max_steps=200, spiral_factor=5.0)
    start = Vector2(-20.0, 35.0)
    assert generate_trajectory(twin_planets, start, cfg) == generate_trajectory(
        twin_planets, start, cfg
    )


def test_iterator_matches_list(twin_planets):
    cfg = TrajectoryCfg(max_steps=30)
    start = Vector2(0.0, 80.0)
    assert list(iter_trajectory(twin_planets, start, cfg)) == generate_trajectory(
        twin_planets, start, cfg
    )


def test_potential_correction_holds_level(single_planet):
    cfg = TrajectoryCfg(max_steps=80, scheme=CorrectionScheme.POTENTIAL, integrator="euler")
    path = generate_trajectory(single_planet, START, cfg)
    target = single_planet.probe_potential(START)
    assert len(path) == 80
    for point in path:
        assert single_planet.probe_potential(point) == pytest.approx(target, rel=1e-3)


def test_potential_target_drifts_with_swept_angle(single_planet):
    cfg = TrajectoryCfg(max_steps=50, scheme=CorrectionScheme.POTENTIAL, spiral_factor=0.2)
    path = generate_trajectory(single_planet, START, cfg)
    drift = single_planet.probe_potential(path[-1]) - single_planet.probe_potential(START)
    assert abs(drift) > 0.1


def test_uncorrected_scheme_ignores_spiral(single_planet):
    plain = TrajectoryCfg(max_steps=30, scheme=CorrectionScheme.NONE)
    spiral = replace(plain, spiral_factor=10.0)
    assert generate_trajectory(single_planet, START, plain) == generate_trajectory(
        single_planet, START, spiral
    )


def test_make_stepper_picks_scheme(single_planet):
    def stepper(scheme):
        return make_stepper(single_planet, START, TrajectoryCfg(scheme=scheme))

    assert isinstance(stepper("gradient"), GradientStepper)
    assert isinstance(stepper("potential"), PotentialStepper)
    assert isinstance(stepper("none"), UncorrectedStepper)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"stepsize": 0.0},
        {"max_steps": -1},
        {"integrator": "leapfrog"},
        {"scheme": "bogus"},
    ],
)
def test_invalid_trajectory_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        TrajectoryCfg(**kwargs)


def test_background_gliders_are_seeded(twin_planets):
    cfg = TrajectoryCfg(max_steps=40)
    a = background_trajectories(twin_planets, 4, 5, cfg)
    b = background_trajectories(twin_planets, 4, 5, cfg)
    c = background_trajectories(twin_planets, 5, 5, cfg)
    assert len(a) == 5
    assert a == b
    assert a != c
    for path in a:
        assert twin_planets.contains(path[0])
