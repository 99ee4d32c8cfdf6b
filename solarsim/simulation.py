"""Time stepping of the N-body system and printing of its state."""

from __future__ import annotations

import os
import sys
import threading
from concurrent.futures import Executor
from typing import Callable, List, Optional, TextIO, Tuple

import numpy as np

from solarsim.bodies import AU, G, TIME_STEP, ObjectDynamics, SystemState
from solarsim.vector3 import Vector3


def partition(object_count: int, parts: int) -> List[Tuple[int, int]]:
    """Split ``range(object_count)`` into ``parts`` contiguous ``(start, stop)`` chunks.

    Every chunk holds ``object_count // parts`` objects except the last, which
    also takes the remainder.
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if object_count < 0:
        raise ValueError("object_count must not be negative")
    per_part = object_count // parts
    chunks = [(i * per_part, (i + 1) * per_part) for i in range(parts)]
    last_start, _ = chunks[-1]
    chunks[-1] = (last_start, object_count)
    return chunks


def _default_workers(workers: Optional[int]) -> int:
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError("workers must be at least 1")
    return workers


class Simulation:
    """Advances a :class:`SystemState` by fixed time steps of TIME_STEP seconds."""

    def __init__(self, state: SystemState) -> None:
        if len(state.current) != state.object_count or len(state.next) != state.object_count:
            raise ValueError("dynamics lists must have one entry per mass")
        self.state = state

    def _current_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        current = self.state.current
        positions = np.array(
            [(d.position.x, d.position.y, d.position.z) for d in current], dtype=float
        ).reshape(len(current), 3)
        velocities = np.array(
            [(d.velocity.x, d.velocity.y, d.velocity.z) for d in current], dtype=float
        ).reshape(len(current), 3)
        masses = np.asarray(self.state.masses, dtype=float)
        return positions, velocities, masses

    def compute_range(self, start_index: int, stop_index: int) -> None:
        """Compute next dynamics for objects ``start_index`` up to ``stop_index``."""
        count = self.state.object_count
        if not 0 <= start_index <= stop_index <= count:
            raise IndexError(f"invalid object range {start_index}..{stop_index}")
        if start_index == stop_index:
            return

        positions, velocities, masses = self._current_arrays()
        rows = np.arange(start_index, stop_index)
        displacement = positions[None, :, :] - positions[rows, None, :]
        dx, dy, dz = displacement[..., 0], displacement[..., 1], displacement[..., 2]
        distance_squared = ((dx * dx) + (dy * dy)) + (dz * dz)
        with np.errstate(divide="ignore", invalid="ignore"):
            distance = np.sqrt(distance_squared)
            force_magnitude = ((G * masses[rows])[:, None] * masses[None, :]) / distance_squared
            force = (force_magnitude / distance)[..., None] * displacement
        # An object exerts no force on itself.
        force[np.arange(len(rows)), rows, :] = 0.0
        # Sequential accumulation over the other objects, in index order.
        total_force = np.cumsum(force, axis=1)[:, -1, :]

        with np.errstate(divide="ignore", invalid="ignore"):
            acceleration = total_force / masses[rows, None]
        delta_v = TIME_STEP * acceleration
        delta_position = TIME_STEP * velocities[rows]
        new_velocity = velocities[rows] + delta_v
        new_position = positions[rows] + delta_position

        next_dynamics = self.state.next
        for offset, index in enumerate(range(start_index, stop_index)):
            px, py, pz = (float(c) for c in new_position[offset])
            vx, vy, vz = (float(c) for c in new_velocity[offset])
            next_dynamics[index] = ObjectDynamics(Vector3(px, py, pz), Vector3(vx, vy, vz))

    def swap(self) -> None:
        """Make the computed next dynamics the current ones."""
        self.state.current, self.state.next = self.state.next, self.state.current

    def time_step(self) -> None:
        """Take one step of simulated time on the calling thread."""
        self.compute_range(0, self.state.object_count)
        self.swap()

    def time_step_threaded(self, workers: Optional[int] = None) -> None:
        """Take one step, splitting the objects over freshly started threads."""
        chunks = partition(self.state.object_count, _default_workers(workers))
        errors: List[BaseException] = []

        def work(start: int, stop: int) -> None:
            try:
                self.compute_range(start, stop)
            except BaseException as exc:  # reported to the caller below
                errors.append(exc)

        threads = [threading.Thread(target=work, args=chunk) for chunk in chunks]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if errors:
            raise errors[0]
        self.swap()

    def time_step_pool(self, executor: Executor, workers: Optional[int] = None) -> None:
        """Take one step, submitting one work unit per worker to ``executor``."""
        chunks = partition(self.state.object_count, _default_workers(workers))
        futures = [executor.submit(self.compute_range, start, stop) for start, stop in chunks]
        for future in futures:
            future.result()
        self.swap()

    def run_with_barriers(
        self,
        steps: int,
        workers: Optional[int] = None,
        on_step: Optional[Callable[[int], None]] = None,
    ) -> int:
        """Run ``steps`` steps with long-lived threads synchronised by barriers.

        After every step one thread calls ``on_step`` with the number of steps
        completed so far and swaps the dynamics. Returns the steps taken.
        """
        if steps < 0:
            raise ValueError("steps must not be negative")
        chunks = partition(self.state.object_count, _default_workers(workers))
        step_barrier = threading.Barrier(len(chunks))
        swap_barrier = threading.Barrier(len(chunks))
        total_steps = 0
        errors: List[BaseException] = []

        def work(start: int, stop: int) -> None:
            nonlocal total_steps
            try:
                for _ in range(steps):
                    self.compute_range(start, stop)
                    if step_barrier.wait() == 0:
                        total_steps += 1
                        if on_step is not None:
                            on_step(total_steps)
                        self.swap()
                    swap_barrier.wait()
            except threading.BrokenBarrierError:
                pass
            except BaseException as exc:
                errors.append(exc)
                step_barrier.abort()
                swap_barrier.abort()

        threads = [threading.Thread(target=work, args=chunk) for chunk in chunks]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if errors:
            raise errors[0]
        return total_steps

    def positions_au(self) -> List[Tuple[float, float, float]]:
        """Return the current positions in astronomical units."""
        return [
            (d.position.x / AU, d.position.y / AU, d.position.z / AU)
            for d in self.state.current
        ]

    def format_dynamics(self) -> List[str]:
        """Return one line per object giving its position in AU."""
        return [
            "%4d: x = %11.3E, y = %11.3E, z = %11.3E" % (index, x, y, z)
            for index, (x, y, z) in enumerate(self.positions_au())
        ]

    def dump_dynamics(self, stream: Optional[TextIO] = None) -> None:
        """Write the current positions to ``stream`` (standard output by default)."""
        out = stream if stream is not None else sys.stdout
        for line in self.format_dynamics():
            out.write(line + "\n")