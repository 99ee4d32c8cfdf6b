"""Command line driver that runs the simulation and reports its progress."""

from __future__ import annotations

import argparse
import enum
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, TextIO

from solarsim.bodies import OBJECT_COUNT, initialize_system
from solarsim.simulation import Simulation
from solarsim.timer import Timer

STEPS_PER_YEAR = 8766  # Number of hours in a year.


class RunMode(enum.Enum):
    """How the work of each time step is spread over threads."""

    SERIAL = "serial"
    THREADS = "threads"
    POOL = "pool"
    BARRIERS = "barriers"


class _Progress:
    """Writes step and year messages to an error stream."""

    def __init__(self, steps_per_year: int, err: TextIO) -> None:
        self.steps_per_year = steps_per_year
        self.err = err
        self.total_years = 0

    def __call__(self, total_steps: int) -> None:
        if total_steps % 100 == 0:
            self.err.write("STEP %4d\n" % total_steps)
        if total_steps % self.steps_per_year == 0:
            self.total_years += 1
            if self.total_years % 10 == 0:
                self.err.write("Years simulated = %d\r" % self.total_years)
                self.err.flush()


def _resolve_workers(workers: Optional[int]) -> int:
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError("workers must be at least 1")
    return workers


def run(
    simulation: Simulation,
    mode: RunMode = RunMode.SERIAL,
    workers: Optional[int] = None,
    years: int = 1,
    steps_per_year: int = STEPS_PER_YEAR,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Simulate ``years`` years, printing start and end positions.

    Returns the number of time steps taken.
    """
    if years < 1:
        raise ValueError("years must be at least 1")
    if steps_per_year < 1:
        raise ValueError("steps_per_year must be at least 1")
    mode = RunMode(mode)
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    worker_count = _resolve_workers(workers)
    total = years * steps_per_year
    progress = _Progress(steps_per_year, err)

    if mode is RunMode.BARRIERS:
        out.write("%d processing elements detected!\n" % worker_count)

    out.write("START position\n")
    simulation.dump_dynamics(out)

    stopwatch = Timer()
    with stopwatch:
        if mode is RunMode.BARRIERS:
            steps_taken = simulation.run_with_barriers(total, worker_count, progress)
        elif mode is RunMode.POOL:
            with ThreadPoolExecutor(max_workers=worker_count) as executor:
                for steps_taken in range(1, total + 1):
                    simulation.time_step_pool(executor, worker_count)
                    progress(steps_taken)
        else:
            for steps_taken in range(1, total + 1):
                if mode is RunMode.THREADS:
                    simulation.time_step_threaded(worker_count)
                else:
                    simulation.time_step()
                progress(steps_taken)

    out.write("\nEND position\n")
    simulation.dump_dynamics(out)
    out.write("Time elapsed = %d milliseconds\n" % stopwatch.time())
    return steps_taken


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarsim", description="Simulate gravitating bodies around a sun."
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RunMode],
        default=RunMode.SERIAL.value,
        help="how each time step is spread over threads",
    )
    parser.add_argument("--workers", type=int, default=None, help="number of threads")
    parser.add_argument(
        "--objects", type=int, default=OBJECT_COUNT, help="number of bodies, sun included"
    )
    parser.add_argument("--years", type=int, default=1, help="years to simulate")
    parser.add_argument(
        "--steps-per-year", type=int, default=STEPS_PER_YEAR, help="time steps per year"
    )
    parser.add_argument("--seed", type=int, default=0, help="random seed")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the simulator from the command line and return an exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        simulation = Simulation(initialize_system(args.objects, args.seed))
        run(
            simulation,
            mode=RunMode(args.mode),
            workers=args.workers,
            years=args.years,
            steps_per_year=args.steps_per_year,
        )
    except ValueError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())