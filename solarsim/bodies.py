"""Physical constants, body state and random initialization of the system."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import List, Protocol

from solarsim.vector3 import Vector3

OBJECT_COUNT = 1000
AU = 1.49597870700e11  # Meters per astronomical unit.
AVERAGE_VELOCITY = 2.9785e3  # Meters per second, used for random initialization.
G = 6.673e-11  # Gravitational constant.
TIME_STEP = 3.6e03  # Seconds in a time step (one hour).

SUN_MASS = 1.98892e30
EARTH_MASS = 5.9722e24

RAND_MAX = 2147483647

_MASK32 = 0xFFFFFFFF
_DEGREE = 31
_SEPARATION = 3
_DISCARD = 310


class RandomSource(Protocol):
    def rand(self) -> int: ...


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _trunc_divmod(numerator: int, denominator: int) -> tuple[int, int]:
    quotient = abs(numerator) // denominator
    if numerator < 0:
        quotient = -quotient
    return quotient, numerator - quotient * denominator


class CRandom:
    """Additive feedback generator matching the common C library ``rand``.

    Seeding with zero behaves like seeding with one, and every value lies in
    the range ``0..RAND_MAX``.
    """

    def __init__(self, seed: int = 1) -> None:
        word = _to_int32(seed)
        if word == 0:
            word = 1
        table = [word]
        for _ in range(1, _DEGREE):
            hi, lo = _trunc_divmod(word, 127773)
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            table.append(word)
        table.extend(table[:_SEPARATION])
        self._window: deque[int] = deque(
            (value & _MASK32 for value in table[-_DEGREE:]), maxlen=_DEGREE
        )
        for _ in range(_DISCARD):
            self._advance()

    def _advance(self) -> int:
        value = (self._window[0] + self._window[-_SEPARATION]) & _MASK32
        self._window.append(value)
        return value

    def rand(self) -> int:
        """Return the next pseudo-random integer in ``0..RAND_MAX``."""
        return self._advance() >> 1


@dataclass
class ObjectDynamics:
    """Position and velocity of a single object."""

    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)


@dataclass
class SystemState:
    """Masses and the current and next dynamics of every object.

    Object 0 is the sun.
    """

    masses: List[float]
    current: List[ObjectDynamics]
    next: List[ObjectDynamics]

    @property
    def object_count(self) -> int:
        return len(self.masses)


def random_position_coordinate(rng: RandomSource) -> float:
    """Return a random coordinate inside a 100 AU cube about the origin."""
    fraction = rng.rand() / RAND_MAX
    return (fraction * 100.0 - 50.0) * AU


def random_velocity_component(rng: RandomSource) -> float:
    """Return a random velocity component up to AVERAGE_VELOCITY in magnitude."""
    fraction = rng.rand() / RAND_MAX
    sign = rng.rand() % 2
    if sign == 0:
        return fraction * AVERAGE_VELOCITY
    return -fraction * AVERAGE_VELOCITY


def initialize_system(object_count: int = OBJECT_COUNT, seed: int = 0) -> SystemState:
    """Create a sun at the origin and Earth-mass objects placed at random."""
    if object_count < 1:
        raise ValueError("object_count must be at least 1")

    masses = [SUN_MASS] + [EARTH_MASS] * (object_count - 1)
    current = [ObjectDynamics()]

    rng = CRandom(seed)
    for _ in range(1, object_count):
        position = Vector3(
            random_position_coordinate(rng),
            random_position_coordinate(rng),
            random_position_coordinate(rng),
        )
        velocity = Vector3(
            random_velocity_component(rng),
            random_velocity_component(rng),
            random_velocity_component(rng),
        )
        current.append(ObjectDynamics(position, velocity))

    next_dynamics = [ObjectDynamics() for _ in range(object_count)]
    return SystemState(masses=masses, current=current, next=next_dynamics)