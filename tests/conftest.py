import pytest

from glider_sim.core.model import Planet, PlanetarySystem
from glider_sim.core.vector import Vector2


def make_system(planets, lo=(-100.0, -100.0), hi=(100.0, 100.0)):
    return PlanetarySystem(
        bounds=(Vector2(*lo), Vector2(*hi)),
        planets=tuple(Planet(Vector2(x, y), mass, ccw) for (x, y), mass, ccw in planets),
    )


@pytest.fixture
def single_planet():
    return make_system([((0.0, 0.0), 1.0, True)])


@pytest.fixture
def twin_planets():
    return make_system(
        [((-100.0, 0.0), 1.0, True), ((100.0, 0.0), 1.0, False)],
        lo=(-200.0, -200.0),
        hi=(200.0, 200.0),
    )


@pytest.fixture
def system_factory():
    return make_system
