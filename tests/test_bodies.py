import pytest

from solarsim.bodies import (
    AU,
    AVERAGE_VELOCITY,
    EARTH_MASS,
    RAND_MAX,
    SUN_MASS,
    CRandom,
    ObjectDynamics,
    initialize_system,
    random_position_coordinate,
    random_velocity_component,
)
from solarsim.vector3 import Vector3


class _FixedRandom:
    def __init__(self, values):
        self._values = iter(values)

    def rand(self):
        return next(self._values)


def test_crandom_known_first_values():
    rng = CRandom(1)
    assert rng.rand() == 1804289383
    assert rng.rand() == 846930886


def test_crandom_seed_zero_matches_seed_one():
    a = CRandom(0)
    b = CRandom(1)
    assert [a.rand() for _ in range(50)] == [b.rand() for _ in range(50)]


def test_crandom_is_deterministic_and_in_range():
    a = CRandom(42)
    b = CRandom(42)
    values_a = [a.rand() for _ in range(1000)]
    values_b = [b.rand() for _ in range(1000)]
    assert values_a == values_b
    assert all(0 <= v <= RAND_MAX for v in values_a)


def test_crandom_different_seeds_differ():
    a = CRandom(1)
    b = CRandom(2)
    assert [a.rand() for _ in range(10)] != [b.rand() for _ in range(10)]


def test_position_coordinate_extremes():
    assert random_position_coordinate(_FixedRandom([RAND_MAX])) == pytest.approx(50.0 * AU)
    assert random_position_coordinate(_FixedRandom([0])) == pytest.approx(-50.0 * AU)


def test_velocity_component_sign_from_second_draw():
    assert random_velocity_component(_FixedRandom([RAND_MAX, 0])) == pytest.approx(
        AVERAGE_VELOCITY
    )
    assert random_velocity_component(_FixedRandom([RAND_MAX, 1])) == pytest.approx(
        -AVERAGE_VELOCITY
    )
    assert random_velocity_component(_FixedRandom([0, 1])) == 0.0


def test_initialize_masses_and_sun():
    state = initialize_system(5, seed=0)
    assert state.object_count == 5
    assert state.masses[0] == SUN_MASS
    assert state.masses[1:] == [EARTH_MASS] * 4
    assert state.current[0] == ObjectDynamics(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0))
    assert len(state.current) == 5
    assert len(state.next) == 5


def test_initialize_bounds():
    state = initialize_system(200, seed=0)
    for dyn in state.current[1:]:
        for c in (dyn.position.x, dyn.position.y, dyn.position.z):
            assert -50.0 * AU <= c <= 50.0 * AU
        for c in (dyn.velocity.x, dyn.velocity.y, dyn.velocity.z):
            assert -AVERAGE_VELOCITY <= c <= AVERAGE_VELOCITY


def test_initialize_draw_order():
    state = initialize_system(2, seed=0)
    rng = CRandom(0)
    px = random_position_coordinate(rng)
    py = random_position_coordinate(rng)
    pz = random_position_coordinate(rng)
    vx = random_velocity_component(rng)
    vy = random_velocity_component(rng)
    vz = random_velocity_component(rng)
    assert state.current[1].position == Vector3(px, py, pz)
    assert state.current[1].velocity == Vector3(vx, vy, vz)


def test_initialize_is_reproducible_and_seed_dependent():
    assert initialize_system(20, seed=0).current == initialize_system(20, seed=0).current
    assert initialize_system(20, seed=3).current != initialize_system(20, seed=0).current


def test_initialize_single_object_is_sun_only():
    state = initialize_system(1)
    assert state.masses == [SUN_MASS]
    assert state.current == [ObjectDynamics()]


def test_initialize_rejects_empty_system():
    with pytest.raises(ValueError):
        initialize_system(0)